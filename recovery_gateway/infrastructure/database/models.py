"""SQLAlchemy ORM models for tenant rules, debtors and the category change log"""

import uuid
from sqlalchemy import Column, Boolean, Float, DateTime, Date, Integer, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class CategoryRulesRecord(Base):
    """Tier bucket widths and payment thresholds, one row per tenant"""

    __tablename__ = "category_rules"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Text, nullable=False, unique=True, index=True)
    alpha_days = Column(Integer, nullable=False)
    beta_days = Column(Integer, nullable=False)
    gamma_days = Column(Integer, nullable=False)
    delta_days = Column(Integer, nullable=False)
    partial_payment_threshold_percent = Column(Float, nullable=False)
    grace_days = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class FollowupRulesRecord(Base):
    """Reminder cadence per tier, one row per tenant"""

    __tablename__ = "followup_rules"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Text, nullable=False, unique=True, index=True)
    alpha_days = Column(Integer, nullable=False)
    beta_days = Column(Integer, nullable=False)
    gamma_days = Column(Integer, nullable=False)
    delta_days = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class RecoverySettingsRecord(Base):
    """Recovery automation switches, one row per tenant"""

    __tablename__ = "recovery_settings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Text, nullable=False, unique=True, index=True)
    auto_upgrade_enabled = Column(Boolean, nullable=False, default=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class DebtorRecord(Base):
    """Latest collection snapshot of a customer"""

    __tablename__ = "debtor"
    __table_args__ = (UniqueConstraint("tenant_id", "customer_id", name="uq_debtor_tenant_customer"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Text, nullable=False, index=True)
    customer_id = Column(Text, nullable=False)
    customer_name = Column(Text, nullable=False)
    category = Column(Text, nullable=False, default="Alpha")
    days_overdue = Column(Integer, nullable=False, default=0)
    payment_percent = Column(Float, nullable=False, default=0.0)
    last_follow_up = Column(Date, nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class CategoryChangeLog(Base):
    """Audit trail of category assignments"""

    __tablename__ = "category_change_log"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    tenant_id = Column(Text, nullable=False, index=True)
    customer_id = Column(Text, nullable=False)
    old_category = Column(Text, nullable=False)
    new_category = Column(Text, nullable=False)
    source = Column(Text, nullable=False)  # auto | manual
    reason = Column(Text, nullable=True)
    days_overdue = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

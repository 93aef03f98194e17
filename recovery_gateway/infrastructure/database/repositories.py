"""Data access layer for tenant rules, debtors and category changes"""

from datetime import date
from typing import List, Optional
from sqlalchemy.orm import Session
from recovery_gateway.infrastructure.database.models import (
    CategoryChangeLog,
    CategoryRulesRecord,
    DebtorRecord,
    FollowupRulesRecord,
    RecoverySettingsRecord,
)
from recovery_gateway.domain.exceptions import DebtorNotFoundError
from recovery_gateway.domain.models import (
    CategoryRules,
    DebtorSnapshot,
    FollowupRules,
    RecoverySettings,
    Tier,
)


class RulesRepository:
    """Repository for per-tenant rule singletons, created with defaults on first read"""

    def __init__(self, db: Session):
        self.db = db

    def _category_record(self, tenant_id: str) -> CategoryRulesRecord:
        record = self.db.query(CategoryRulesRecord).filter(CategoryRulesRecord.tenant_id == tenant_id).first()
        if record is None:
            defaults = CategoryRules()
            record = CategoryRulesRecord(tenant_id=tenant_id, **vars(defaults))
            self.db.add(record)
            self.db.flush()
        return record

    def _followup_record(self, tenant_id: str) -> FollowupRulesRecord:
        record = self.db.query(FollowupRulesRecord).filter(FollowupRulesRecord.tenant_id == tenant_id).first()
        if record is None:
            defaults = FollowupRules()
            record = FollowupRulesRecord(tenant_id=tenant_id, **vars(defaults))
            self.db.add(record)
            self.db.flush()
        return record

    def _settings_record(self, tenant_id: str) -> RecoverySettingsRecord:
        record = (
            self.db.query(RecoverySettingsRecord)
            .filter(RecoverySettingsRecord.tenant_id == tenant_id)
            .first()
        )
        if record is None:
            record = RecoverySettingsRecord(tenant_id=tenant_id, auto_upgrade_enabled=False)
            self.db.add(record)
            self.db.flush()
        return record

    def get_category_rules(self, tenant_id: str) -> CategoryRules:
        record = self._category_record(tenant_id)
        return CategoryRules(
            alpha_days=record.alpha_days,
            beta_days=record.beta_days,
            gamma_days=record.gamma_days,
            delta_days=record.delta_days,
            partial_payment_threshold_percent=record.partial_payment_threshold_percent,
            grace_days=record.grace_days,
        )

    def update_category_rules(self, tenant_id: str, rules: CategoryRules) -> CategoryRules:
        record = self._category_record(tenant_id)
        for field, value in vars(rules).items():
            setattr(record, field, value)
        self.db.flush()
        return self.get_category_rules(tenant_id)

    def get_followup_rules(self, tenant_id: str) -> FollowupRules:
        record = self._followup_record(tenant_id)
        return FollowupRules(
            alpha_days=record.alpha_days,
            beta_days=record.beta_days,
            gamma_days=record.gamma_days,
            delta_days=record.delta_days,
        )

    def update_followup_rules(self, tenant_id: str, rules: FollowupRules) -> FollowupRules:
        record = self._followup_record(tenant_id)
        for field, value in vars(rules).items():
            setattr(record, field, value)
        self.db.flush()
        return self.get_followup_rules(tenant_id)

    def get_recovery_settings(self, tenant_id: str) -> RecoverySettings:
        record = self._settings_record(tenant_id)
        return RecoverySettings(auto_upgrade_enabled=record.auto_upgrade_enabled)

    def update_recovery_settings(self, tenant_id: str, settings: RecoverySettings) -> RecoverySettings:
        record = self._settings_record(tenant_id)
        record.auto_upgrade_enabled = settings.auto_upgrade_enabled
        self.db.flush()
        return self.get_recovery_settings(tenant_id)


class DebtorRepository:
    """Repository for debtor snapshots"""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def to_snapshot(record: DebtorRecord) -> DebtorSnapshot:
        return DebtorSnapshot(
            customer_id=record.customer_id,
            customer_name=record.customer_name,
            current_category=Tier(record.category),
            days_overdue=record.days_overdue,
            payment_percent=record.payment_percent,
            last_follow_up=record.last_follow_up,
        )

    def _get_record(self, tenant_id: str, customer_id: str) -> Optional[DebtorRecord]:
        return (
            self.db.query(DebtorRecord)
            .filter(DebtorRecord.tenant_id == tenant_id, DebtorRecord.customer_id == customer_id)
            .first()
        )

    def get_debtor(self, tenant_id: str, customer_id: str) -> DebtorSnapshot:
        record = self._get_record(tenant_id, customer_id)
        if record is None:
            raise DebtorNotFoundError(f"Debtor {customer_id} not found")
        return self.to_snapshot(record)

    def list_debtors(self, tenant_id: str) -> List[DebtorSnapshot]:
        records = (
            self.db.query(DebtorRecord)
            .filter(DebtorRecord.tenant_id == tenant_id)
            .order_by(DebtorRecord.customer_name)
            .all()
        )
        return [self.to_snapshot(r) for r in records]

    def upsert_debtor(self, tenant_id: str, snapshot: DebtorSnapshot) -> DebtorSnapshot:
        """Create or replace the snapshot for a customer"""
        record = self._get_record(tenant_id, snapshot.customer_id)
        if record is None:
            record = DebtorRecord(tenant_id=tenant_id, customer_id=snapshot.customer_id)
            self.db.add(record)

        record.customer_name = snapshot.customer_name
        record.category = snapshot.current_category.value
        record.days_overdue = snapshot.days_overdue
        record.payment_percent = snapshot.payment_percent
        record.last_follow_up = snapshot.last_follow_up
        self.db.flush()
        return self.to_snapshot(record)

    def set_category(self, tenant_id: str, customer_id: str, category: Tier) -> None:
        """Assign a category; writing the same value again is a no-op"""
        record = self._get_record(tenant_id, customer_id)
        if record is None:
            raise DebtorNotFoundError(f"Debtor {customer_id} not found")
        record.category = category.value
        self.db.flush()

    def record_follow_up(self, tenant_id: str, customer_id: str, on: date) -> DebtorSnapshot:
        record = self._get_record(tenant_id, customer_id)
        if record is None:
            raise DebtorNotFoundError(f"Debtor {customer_id} not found")
        record.last_follow_up = on
        self.db.flush()
        return self.to_snapshot(record)


class CategoryChangeRepository:
    """Repository for the category change log"""

    def __init__(self, db: Session):
        self.db = db

    def log_change(
        self,
        tenant_id: str,
        customer_id: str,
        old_category: Tier,
        new_category: Tier,
        source: str,
        reason: Optional[str] = None,
        days_overdue: Optional[int] = None,
    ) -> CategoryChangeLog:
        entry = CategoryChangeLog(
            tenant_id=tenant_id,
            customer_id=customer_id,
            old_category=old_category.value,
            new_category=new_category.value,
            source=source,
            reason=reason,
            days_overdue=days_overdue,
        )
        self.db.add(entry)
        self.db.flush()  # Get ID without committing
        return entry

    def get_changes(self, tenant_id: str, limit: int = 50) -> List[CategoryChangeLog]:
        """Fetch recent category changes for a tenant"""
        return (
            self.db.query(CategoryChangeLog)
            .filter(CategoryChangeLog.tenant_id == tenant_id)
            .order_by(CategoryChangeLog.created_at.desc())
            .limit(limit)
            .all()
        )

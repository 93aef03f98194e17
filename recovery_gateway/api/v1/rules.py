"""GET/PUT /v1/rules/* and /v1/settings/recovery - tenant rule configuration"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from recovery_gateway.api.v1.schemas import (
    CategoryRulesResponse,
    CategoryRulesSchema,
    FollowupRulesSchema,
    RecoverySettingsSchema,
)
from recovery_gateway.api.dependencies import get_tenant_id
from recovery_gateway.infrastructure.database.session import get_db
from recovery_gateway.infrastructure.database.repositories import RulesRepository
from recovery_gateway.domain.categories import describe_thresholds
from recovery_gateway.domain.models import CategoryRules, FollowupRules, RecoverySettings

router = APIRouter()


def _category_response(rules: CategoryRules) -> CategoryRulesResponse:
    return CategoryRulesResponse(**vars(rules), thresholds=describe_thresholds(rules))


@router.get("/rules/category", response_model=CategoryRulesResponse)
def get_category_rules(tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Current tier bucket widths, created with defaults on first read"""
    rules = RulesRepository(db).get_category_rules(tenant_id)
    db.commit()
    return _category_response(rules)


@router.put("/rules/category", response_model=CategoryRulesResponse)
def update_category_rules(
    body: CategoryRulesSchema,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    """Replace the tenant's category rules; bucket boundaries follow immediately"""
    rules = RulesRepository(db).update_category_rules(tenant_id, CategoryRules(**body.model_dump()))
    db.commit()
    logging.info("Category rules updated", extra={"tenant_id": tenant_id, **body.model_dump()})
    return _category_response(rules)


@router.get("/rules/followup", response_model=FollowupRulesSchema)
def get_followup_rules(tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    rules = RulesRepository(db).get_followup_rules(tenant_id)
    db.commit()
    return FollowupRulesSchema(**vars(rules))


@router.put("/rules/followup", response_model=FollowupRulesSchema)
def update_followup_rules(
    body: FollowupRulesSchema,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    """
    Replace follow-up cadences.

    Ordering across tiers is not enforced; Delta is usually the shortest.
    """
    rules = RulesRepository(db).update_followup_rules(tenant_id, FollowupRules(**body.model_dump()))
    db.commit()
    logging.info("Follow-up rules updated", extra={"tenant_id": tenant_id, **body.model_dump()})
    return FollowupRulesSchema(**vars(rules))


@router.get("/settings/recovery", response_model=RecoverySettingsSchema)
def get_recovery_settings(tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    recovery_settings = RulesRepository(db).get_recovery_settings(tenant_id)
    db.commit()
    return RecoverySettingsSchema(auto_upgrade_enabled=recovery_settings.auto_upgrade_enabled)


@router.put("/settings/recovery", response_model=RecoverySettingsSchema)
def update_recovery_settings(
    body: RecoverySettingsSchema,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    recovery_settings = RulesRepository(db).update_recovery_settings(
        tenant_id, RecoverySettings(auto_upgrade_enabled=body.auto_upgrade_enabled)
    )
    db.commit()
    return RecoverySettingsSchema(auto_upgrade_enabled=recovery_settings.auto_upgrade_enabled)

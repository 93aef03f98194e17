"""/v1/recovery - category recalculation, manual changes and follow-up queue"""

import time
import logging
from datetime import date
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from recovery_gateway.api.v1.schemas import (
    ApplyCategoryChangesRequest,
    ApplyCategoryChangesResponse,
    CategoryChangeLogItem,
    CategoryChangeLogResponse,
    DebtorListResponse,
    DebtorResponse,
    RecalculateResponse,
    RecommendationItem,
)
from recovery_gateway.api.dependencies import get_notification_client, get_request_id, get_tenant_id
from recovery_gateway.infrastructure.database.session import get_db
from recovery_gateway.infrastructure.database.repositories import (
    CategoryChangeRepository,
    DebtorRepository,
    RulesRepository,
)
from recovery_gateway.infrastructure.clients.notifications import NotificationClient
from recovery_gateway.infrastructure.observability.logging import log_category_change, log_recalculation
from recovery_gateway.infrastructure.observability.metrics import (
    followups_due_gauge,
    record_category_change,
    record_evaluation,
)
from recovery_gateway.domain.recommendations import (
    debtors_due_for_follow_up,
    recommend_categories,
    summarize_recommendations,
)
from recovery_gateway.domain.exceptions import DebtorNotFoundError, InvalidInputError
from recovery_gateway.domain.models import Tier

router = APIRouter()


def _change_event(tenant_id: str, customer_id: str, old: Tier, new: Tier, source: str) -> dict:
    return {
        "event": "CATEGORY_CHANGED",
        "tenant_id": tenant_id,
        "customer_id": customer_id,
        "old_category": old.value,
        "new_category": new.value,
        "source": source,
    }


@router.post("/recovery/recalculate", response_model=RecalculateResponse)
def recalculate(
    background_tasks: BackgroundTasks,
    request: Request,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
    notification_client: NotificationClient = Depends(get_notification_client),
):
    """
    Recompute every debtor's category against the current rules.

    Flow:
    1. Load category rules, recovery settings and debtor snapshots
    2. Resolve a recommended category per debtor
    3. If auto upgrade is enabled, persist changed categories and log them
    4. Send CATEGORY_CHANGED events to the notification webhook in the background
    5. Return recommendations (advisory when auto upgrade is off)

    Re-running with unchanged inputs writes nothing new.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        rules_repo = RulesRepository(db)
        rules = rules_repo.get_category_rules(tenant_id)
        recovery_settings = rules_repo.get_recovery_settings(tenant_id)

        debtor_repo = DebtorRepository(db)
        recommendations = recommend_categories(debtor_repo.list_debtors(tenant_id), rules)
        for rec in recommendations:
            record_evaluation(rec.recommended_category)

        applied = recovery_settings.auto_upgrade_enabled
        changes = [rec for rec in recommendations if rec.will_change]

        if applied:
            change_repo = CategoryChangeRepository(db)
            for rec in changes:
                debtor_repo.set_category(tenant_id, rec.customer_id, rec.recommended_category)
                change_repo.log_change(
                    tenant_id=tenant_id,
                    customer_id=rec.customer_id,
                    old_category=rec.current_category,
                    new_category=rec.recommended_category,
                    source="auto",
                    reason=f"{rec.days_overdue} days overdue",
                    days_overdue=rec.days_overdue,
                )

        db.commit()

    except InvalidInputError as e:
        db.rollback()
        logging.warning(f"Invalid debtor data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if applied:
        for rec in changes:
            record_category_change("auto", rec.recommended_category)
            log_category_change(
                request_id, tenant_id, rec.customer_id,
                rec.current_category.value, rec.recommended_category.value, "auto",
            )
            background_tasks.add_task(
                notification_client.send_category_change_event,
                _change_event(tenant_id, rec.customer_id, rec.current_category, rec.recommended_category, "auto"),
            )

    duration_ms = (time.time() - start_time) * 1000
    log_recalculation(request_id, tenant_id, len(recommendations), len(changes), applied, duration_ms)

    return RecalculateResponse(
        applied=applied,
        recommendations=[RecommendationItem(**vars(rec)) for rec in recommendations],
        summary=summarize_recommendations(recommendations),
    )


@router.post("/recovery/apply-category-changes", response_model=ApplyCategoryChangesResponse)
def apply_category_changes(
    body: ApplyCategoryChangesRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
    notification_client: NotificationClient = Depends(get_notification_client),
):
    """Manually assign categories, all or nothing; unknown customers fail the batch with 404"""
    request_id = get_request_id(request)
    debtor_repo = DebtorRepository(db)
    change_repo = CategoryChangeRepository(db)
    events = []

    try:
        for change in body.changes:
            debtor = debtor_repo.get_debtor(tenant_id, change.customer_id)
            if debtor.current_category == change.new_category:
                continue

            debtor_repo.set_category(tenant_id, change.customer_id, change.new_category)
            change_repo.log_change(
                tenant_id=tenant_id,
                customer_id=change.customer_id,
                old_category=debtor.current_category,
                new_category=change.new_category,
                source="manual",
                reason=change.reason,
                days_overdue=debtor.days_overdue,
            )
            events.append((change.customer_id, debtor.current_category, change.new_category))

        db.commit()

    except DebtorNotFoundError as e:
        db.rollback()
        logging.warning(f"Category change rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    for customer_id, old, new in events:
        record_category_change("manual", new)
        log_category_change(request_id, tenant_id, customer_id, old.value, new.value, "manual")
        background_tasks.add_task(
            notification_client.send_category_change_event,
            _change_event(tenant_id, customer_id, old, new, "manual"),
        )

    return ApplyCategoryChangesResponse(applied=len(events))


@router.get("/recovery/category-changes", response_model=CategoryChangeLogResponse)
def get_category_changes(tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Recent category changes for the tenant, newest first"""
    entries = CategoryChangeRepository(db).get_changes(tenant_id)
    return CategoryChangeLogResponse(
        changes=[
            CategoryChangeLogItem(
                customer_id=e.customer_id,
                old_category=e.old_category,
                new_category=e.new_category,
                source=e.source,
                reason=e.reason,
                days_overdue=e.days_overdue,
                created_at=e.created_at,
            )
            for e in entries
        ]
    )


@router.get("/recovery/followups-due", response_model=DebtorListResponse)
def get_followups_due(tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Debtors whose reminder cadence has elapsed as of today"""
    rules = RulesRepository(db).get_followup_rules(tenant_id)
    db.commit()

    due = debtors_due_for_follow_up(DebtorRepository(db).list_debtors(tenant_id), rules, date.today())
    followups_due_gauge.set(len(due))

    return DebtorListResponse(debtors=[DebtorResponse(**vars(d)) for d in due])

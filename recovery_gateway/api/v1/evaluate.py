"""POST /v1/category/resolve, /v1/followup/due, /v1/payment/classify - evaluator previews"""

import logging
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from recovery_gateway.api.v1.schemas import (
    ClassifyPaymentRequest,
    ClassifyPaymentResponse,
    FollowupDueRequest,
    FollowupDueResponse,
    ResolveCategoryRequest,
    ResolveCategoryResponse,
)
from recovery_gateway.api.dependencies import get_request_id, get_tenant_id
from recovery_gateway.infrastructure.database.session import get_db
from recovery_gateway.infrastructure.database.repositories import RulesRepository
from recovery_gateway.infrastructure.observability.metrics import record_evaluation
from recovery_gateway.domain.categories import describe_thresholds, resolve_category
from recovery_gateway.domain.followups import cadence_for_category, is_follow_up_due, next_follow_up_date
from recovery_gateway.domain.grace import classify_payment
from recovery_gateway.domain.exceptions import InvalidInputError

router = APIRouter()


@router.post("/category/resolve", response_model=ResolveCategoryResponse)
def resolve(
    body: ResolveCategoryRequest,
    request: Request,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    """Resolve the tier for a days-overdue count using the tenant's current rules"""
    rules = RulesRepository(db).get_category_rules(tenant_id)
    db.commit()

    try:
        category = resolve_category(body.days_overdue, body.payment_percent, rules)
    except InvalidInputError as e:
        logging.warning(f"Invalid resolve input: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    record_evaluation(category)
    return ResolveCategoryResponse(category=category, thresholds=describe_thresholds(rules))


@router.post("/followup/due", response_model=FollowupDueResponse)
def follow_up_due(
    body: FollowupDueRequest,
    request: Request,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    """Check whether a reminder is due for a category; now defaults to today"""
    rules = RulesRepository(db).get_followup_rules(tenant_id)
    db.commit()
    now = body.now or date.today()

    try:
        due = is_follow_up_due(body.last_follow_up, body.category, rules, now)
        next_date = next_follow_up_date(body.last_follow_up, body.category, rules, now)
    except InvalidInputError as e:
        logging.warning(f"Invalid follow-up input: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return FollowupDueResponse(
        due=due,
        cadence_days=cadence_for_category(body.category, rules),
        next_follow_up=next_date,
    )


@router.post("/payment/classify", response_model=ClassifyPaymentResponse)
def classify(
    body: ClassifyPaymentRequest,
    request: Request,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    """Classify payment timeliness against the tenant's grace period"""
    rules = RulesRepository(db).get_category_rules(tenant_id)
    db.commit()

    try:
        status = classify_payment(body.due_date, body.paid_date, rules, body.now or date.today())
    except InvalidInputError as e:
        logging.warning(f"Invalid classify input: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return ClassifyPaymentResponse(status=status, grace_days=rules.grace_days)

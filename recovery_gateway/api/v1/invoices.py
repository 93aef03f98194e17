"""POST /v1/invoices/status-cards - dashboard invoice buckets"""

from datetime import date
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from recovery_gateway.api.v1.schemas import StatusBucketSchema, StatusCardsRequest, StatusCardsResponse
from recovery_gateway.api.dependencies import get_tenant_id
from recovery_gateway.infrastructure.database.session import get_db
from recovery_gateway.infrastructure.database.repositories import RulesRepository
from recovery_gateway.domain.allocation import build_status_cards
from recovery_gateway.domain.models import Invoice, Receipt

router = APIRouter()


@router.post("/invoices/status-cards", response_model=StatusCardsResponse)
def status_cards(
    body: StatusCardsRequest,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    """
    Bucket the posted invoices after FIFO receipt allocation.

    Uses the tenant's grace_days to split paid on time from paid late and
    in grace from overdue.
    """
    rules = RulesRepository(db).get_category_rules(tenant_id)
    db.commit()

    cards = build_status_cards(
        invoices=[Invoice(**i.model_dump()) for i in body.invoices],
        receipts=[Receipt(**r.model_dump()) for r in body.receipts],
        rules=rules,
        today=body.today or date.today(),
    )

    return StatusCardsResponse(
        **{name: StatusBucketSchema(**vars(bucket)) for name, bucket in vars(cards).items()}
    )

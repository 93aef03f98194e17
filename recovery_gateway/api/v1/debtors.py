"""/v1/debtors - debtor collection snapshots"""

from datetime import date
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from recovery_gateway.api.v1.schemas import DebtorListResponse, DebtorResponse, DebtorSchema, InvoiceBatchSchema
from recovery_gateway.api.dependencies import get_tenant_id
from recovery_gateway.infrastructure.database.session import get_db
from recovery_gateway.infrastructure.database.repositories import DebtorRepository
from recovery_gateway.domain.allocation import allocate_receipts, customer_exposure
from recovery_gateway.domain.exceptions import DebtorNotFoundError
from recovery_gateway.domain.models import DebtorSnapshot, Invoice, Receipt

router = APIRouter()


def _to_response(snapshot: DebtorSnapshot) -> DebtorResponse:
    return DebtorResponse(**vars(snapshot))


@router.get("/debtors", response_model=DebtorListResponse)
def list_debtors(tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    debtors = DebtorRepository(db).list_debtors(tenant_id)
    return DebtorListResponse(debtors=[_to_response(d) for d in debtors])


@router.get("/debtors/{customer_id}", response_model=DebtorResponse)
def get_debtor(customer_id: str, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    try:
        return _to_response(DebtorRepository(db).get_debtor(tenant_id, customer_id))
    except DebtorNotFoundError:
        raise HTTPException(status_code=404, detail="Debtor not found")


@router.put("/debtors/{customer_id}", response_model=DebtorResponse)
def upsert_debtor(
    customer_id: str,
    body: DebtorSchema,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    """
    Store the latest overdue count and payment share for a customer.

    Fed by the invoicing side; the category is only changed here when the
    caller sends one.
    """
    snapshot = DebtorSnapshot(customer_id=customer_id, **body.model_dump())
    saved = DebtorRepository(db).upsert_debtor(tenant_id, snapshot)
    db.commit()
    return _to_response(saved)


@router.post("/debtors/{customer_id}/follow-up", response_model=DebtorResponse)
def record_follow_up(customer_id: str, tenant_id: str = Depends(get_tenant_id), db: Session = Depends(get_db)):
    """Mark that a reminder went out today"""
    try:
        saved = DebtorRepository(db).record_follow_up(tenant_id, customer_id, date.today())
    except DebtorNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Debtor not found")

    db.commit()
    return _to_response(saved)


@router.post("/debtors/{customer_id}/exposure", response_model=DebtorResponse)
def sync_exposure(
    customer_id: str,
    body: InvoiceBatchSchema,
    tenant_id: str = Depends(get_tenant_id),
    db: Session = Depends(get_db),
):
    """
    Refresh days overdue and payment percent from the customer's invoices.

    Receipts are allocated FIFO; the category itself is left for recalculation.
    """
    repo = DebtorRepository(db)
    try:
        debtor = repo.get_debtor(tenant_id, customer_id)
    except DebtorNotFoundError:
        raise HTTPException(status_code=404, detail="Debtor not found")

    allocations = allocate_receipts(
        [Invoice(**i.model_dump()) for i in body.invoices if i.customer_name == debtor.customer_name],
        [Receipt(**r.model_dump()) for r in body.receipts if r.customer_name == debtor.customer_name],
    )
    debtor.days_overdue, debtor.payment_percent = customer_exposure(
        allocations, debtor.customer_name, body.today or date.today()
    )

    saved = repo.upsert_debtor(tenant_id, debtor)
    db.commit()
    return _to_response(saved)

"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Dict, List, Literal, Optional, Union

from recovery_gateway.domain.models import PaymentStatus, Tier

CategoryResult = Union[Tier, Literal["Excluded"]]


class CategoryRulesSchema(BaseModel):
    """Tier bucket widths and payment thresholds (PUT body and GET response)"""

    alpha_days: int = Field(..., ge=0, description="Width of the Alpha bucket in days")
    beta_days: int = Field(..., ge=1, description="Width of the Beta bucket in days")
    gamma_days: int = Field(..., ge=1, description="Width of the Gamma bucket in days")
    delta_days: int = Field(..., ge=1, description="Width of the Delta bucket in days")
    partial_payment_threshold_percent: float = Field(..., ge=0, le=100)
    grace_days: int = Field(..., ge=0, le=365)


class CategoryRulesResponse(CategoryRulesSchema):
    thresholds: Dict[Tier, str]


class FollowupRulesSchema(BaseModel):
    """Days between reminders for each tier"""

    alpha_days: int = Field(..., ge=1)
    beta_days: int = Field(..., ge=1)
    gamma_days: int = Field(..., ge=1)
    delta_days: int = Field(..., ge=1)


class RecoverySettingsSchema(BaseModel):
    auto_upgrade_enabled: bool


class ResolveCategoryRequest(BaseModel):
    """Request body for POST /v1/category/resolve"""

    days_overdue: int = Field(..., ge=0, strict=True)
    payment_percent: float = Field(0, ge=0, le=100)


class ResolveCategoryResponse(BaseModel):
    category: CategoryResult
    thresholds: Dict[Tier, str]


class FollowupDueRequest(BaseModel):
    """Request body for POST /v1/followup/due"""

    category: Tier
    last_follow_up: Optional[date] = None
    now: Optional[date] = None


class FollowupDueResponse(BaseModel):
    due: bool
    cadence_days: int
    next_follow_up: date


class ClassifyPaymentRequest(BaseModel):
    """Request body for POST /v1/payment/classify"""

    due_date: date
    paid_date: Optional[date] = None
    now: Optional[date] = None


class ClassifyPaymentResponse(BaseModel):
    status: PaymentStatus
    grace_days: int


class DebtorSchema(BaseModel):
    """Collection snapshot of one customer"""

    customer_name: str = Field(..., min_length=1)
    current_category: Tier = Tier.ALPHA
    days_overdue: int = Field(0, ge=0)
    payment_percent: float = Field(0, ge=0, le=100)
    last_follow_up: Optional[date] = None


class DebtorResponse(DebtorSchema):
    customer_id: str


class DebtorListResponse(BaseModel):
    debtors: List[DebtorResponse]


class RecommendationItem(BaseModel):
    customer_id: str
    customer_name: str
    current_category: Tier
    recommended_category: CategoryResult
    days_overdue: int
    payment_percent: float
    will_change: bool


class RecalculateResponse(BaseModel):
    """Response for POST /v1/recovery/recalculate"""

    applied: bool
    recommendations: List[RecommendationItem]
    summary: Dict[str, int]


class CategoryChangeItem(BaseModel):
    customer_id: str
    new_category: Tier
    reason: str = Field(..., min_length=1)


class ApplyCategoryChangesRequest(BaseModel):
    changes: List[CategoryChangeItem] = Field(..., min_length=1)


class ApplyCategoryChangesResponse(BaseModel):
    applied: int


class CategoryChangeLogItem(BaseModel):
    customer_id: str
    old_category: Tier
    new_category: Tier
    source: str
    reason: Optional[str] = None
    days_overdue: Optional[int] = None
    created_at: datetime


class CategoryChangeLogResponse(BaseModel):
    changes: List[CategoryChangeLogItem]


class InvoiceSchema(BaseModel):
    invoice_number: str = Field(..., min_length=1)
    customer_name: str = Field(..., min_length=1)
    invoice_date: date
    amount_cents: int = Field(..., ge=0)
    payment_terms_days: int = Field(0, ge=0)


class ReceiptSchema(BaseModel):
    customer_name: str = Field(..., min_length=1)
    date: date
    amount_cents: int = Field(..., ge=0)


class InvoiceBatchSchema(BaseModel):
    """Invoices and receipts posted by the invoicing side"""

    invoices: List[InvoiceSchema]
    receipts: List[ReceiptSchema] = []
    today: Optional[date] = None


class StatusCardsRequest(InvoiceBatchSchema):
    """Request body for POST /v1/invoices/status-cards"""


class StatusBucketSchema(BaseModel):
    count: int
    total_cents: int


class StatusCardsResponse(BaseModel):
    upcoming: StatusBucketSchema
    due_today: StatusBucketSchema
    in_grace: StatusBucketSchema
    overdue: StatusBucketSchema
    paid_on_time: StatusBucketSchema
    paid_late: StatusBucketSchema

"""Domain models - pure Python dataclasses representing collection rules and debtors"""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Literal, Optional, Union


class Tier(str, Enum):
    """Collection severity category, ordered Alpha < Beta < Gamma < Delta"""

    ALPHA = "Alpha"
    BETA = "Beta"
    GAMMA = "Gamma"
    DELTA = "Delta"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {Tier.ALPHA: 1, Tier.BETA: 2, Tier.GAMMA: 3, Tier.DELTA: 4}

# Result of the tier resolver for entities paid above the partial payment threshold
EXCLUDED = "Excluded"

CategoryOutcome = Union[Tier, Literal["Excluded"]]


class PaymentStatus(str, Enum):
    """Payment timeliness relative to due date and grace period"""

    PAID_ON_TIME = "Paid On Time"
    IN_GRACE = "In Grace"
    OVERDUE = "Overdue"
    UNPAID_WITHIN_GRACE = "Unpaid-Within-Grace"


@dataclass
class CategoryRules:
    """
    Tier bucket widths plus payment thresholds, one per tenant.

    Bucket widths are cumulative: Alpha covers [0, alpha_days], Beta the next
    beta_days days, Gamma the next gamma_days days, Delta everything beyond.
    delta_days is stored for display only since Delta is open-ended.
    """

    alpha_days: int = 5
    beta_days: int = 20
    gamma_days: int = 40
    delta_days: int = 100
    partial_payment_threshold_percent: float = 80
    grace_days: int = 7


@dataclass
class FollowupRules:
    """Days between reminders for each tier"""

    alpha_days: int = 7
    beta_days: int = 4
    gamma_days: int = 2
    delta_days: int = 1


@dataclass
class RecoverySettings:
    """When auto_upgrade_enabled is off, computed tiers are advisory only"""

    auto_upgrade_enabled: bool = False


@dataclass
class DebtorSnapshot:
    """Collection state of one customer as seen by the evaluator"""

    customer_id: str
    customer_name: str
    current_category: Tier
    days_overdue: int
    payment_percent: float
    last_follow_up: Optional[date] = None


@dataclass
class CategoryRecommendation:
    """Computed category compared with the one currently assigned"""

    customer_id: str
    customer_name: str
    current_category: Tier
    recommended_category: CategoryOutcome
    days_overdue: int
    payment_percent: float
    will_change: bool


@dataclass
class Invoice:
    """Invoice issued to a customer, due payment_terms_days after invoice_date"""

    invoice_number: str
    customer_name: str
    invoice_date: date
    amount_cents: int
    payment_terms_days: int = 0

    @property
    def due_date(self) -> date:
        return self.invoice_date + timedelta(days=self.payment_terms_days)


@dataclass
class Receipt:
    """Payment received from a customer"""

    customer_name: str
    date: date
    amount_cents: int


@dataclass
class InvoiceAllocation:
    """Receipts applied to a single invoice"""

    invoice: Invoice
    paid_cents: int
    completed_on: Optional[date]

    @property
    def paid_in_full(self) -> bool:
        return self.paid_cents >= self.invoice.amount_cents

    @property
    def payment_percent(self) -> float:
        if self.invoice.amount_cents <= 0:
            return 100.0
        return round(self.paid_cents * 100 / self.invoice.amount_cents, 2)


@dataclass
class StatusBucket:
    count: int = 0
    total_cents: int = 0

    def add(self, amount_cents: int) -> None:
        self.count += 1
        self.total_cents += amount_cents


@dataclass
class StatusCards:
    """Dashboard counts of invoices by payment state"""

    upcoming: StatusBucket
    due_today: StatusBucket
    in_grace: StatusBucket
    overdue: StatusBucket
    paid_on_time: StatusBucket
    paid_late: StatusBucket

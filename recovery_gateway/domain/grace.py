"""Grace-period payment classification, independent of the tier engine"""

from datetime import date
from typing import Optional

from recovery_gateway.domain.models import CategoryRules, PaymentStatus
from recovery_gateway.utils.date_utils import add_days, require_date, require_same_kind


def classify_payment(
    due_date: date,
    paid_date: Optional[date],
    rules: CategoryRules,
    now: date,
) -> PaymentStatus:
    """
    Classify payment timeliness against due date plus grace_days.

    Paid invoices:
    - on or before due date: Paid On Time
    - within grace: In Grace
    - after grace: Overdue (paid late)

    Unpaid invoices are Unpaid-Within-Grace until the grace period ends on
    now, then Overdue.
    """
    require_date(due_date, "due_date")
    require_date(now, "now")
    require_same_kind(due_date, now)

    grace_end = add_days(due_date, rules.grace_days)

    if paid_date is not None:
        require_date(paid_date, "paid_date")
        require_same_kind(due_date, paid_date)
        if paid_date <= due_date:
            return PaymentStatus.PAID_ON_TIME
        if paid_date <= grace_end:
            return PaymentStatus.IN_GRACE
        return PaymentStatus.OVERDUE

    if now <= grace_end:
        return PaymentStatus.UNPAID_WITHIN_GRACE
    return PaymentStatus.OVERDUE

"""FIFO receipt allocation and invoice status cards"""

from collections import defaultdict
from datetime import date
from typing import Dict, List, Tuple

from recovery_gateway.domain.models import (
    CategoryRules,
    Invoice,
    InvoiceAllocation,
    Receipt,
    StatusBucket,
    StatusCards,
)
from recovery_gateway.utils.date_utils import add_days, days_overdue


def allocate_receipts(invoices: List[Invoice], receipts: List[Receipt]) -> List[InvoiceAllocation]:
    """
    Apply each customer's receipts to their invoices, oldest first on both sides.

    A receipt larger than the invoice it settles carries its remainder to the
    customer's next invoice. completed_on is the date of the receipt that
    brought the invoice to full payment.

    Example:
        Invoices 100.00 (Jan 1), 50.00 (Feb 1); receipts 120.00 (Jan 10), 30.00 (Feb 20)
        -> first paid in full on Jan 10, second paid in full on Feb 20
    """
    invoices_by_customer: Dict[str, List[Invoice]] = defaultdict(list)
    for invoice in invoices:
        invoices_by_customer[invoice.customer_name].append(invoice)

    receipts_by_customer: Dict[str, List[Receipt]] = defaultdict(list)
    for receipt in receipts:
        receipts_by_customer[receipt.customer_name].append(receipt)

    allocations = []
    for customer_name, customer_invoices in invoices_by_customer.items():
        sorted_invoices = sorted(customer_invoices, key=lambda i: i.invoice_date)
        sorted_receipts = sorted(receipts_by_customer[customer_name], key=lambda r: r.date)

        receipt_index = 0
        remaining = sorted_receipts[0].amount_cents if sorted_receipts else 0

        for invoice in sorted_invoices:
            paid = 0
            completed_on = None

            while paid < invoice.amount_cents and receipt_index < len(sorted_receipts):
                needed = invoice.amount_cents - paid
                receipt = sorted_receipts[receipt_index]
                applied = min(needed, remaining)

                paid += applied
                remaining -= applied
                if paid >= invoice.amount_cents:
                    completed_on = receipt.date

                # Receipt exhausted: move to the next one
                if remaining == 0:
                    receipt_index += 1
                    if receipt_index < len(sorted_receipts):
                        remaining = sorted_receipts[receipt_index].amount_cents

            allocations.append(InvoiceAllocation(invoice=invoice, paid_cents=paid, completed_on=completed_on))

    return allocations


def build_status_cards(
    invoices: List[Invoice],
    receipts: List[Receipt],
    rules: CategoryRules,
    today: date,
) -> StatusCards:
    """
    Bucket invoices for the dashboard after FIFO allocation.

    Fully paid invoices count as paid on time when settled on or before
    due date + grace_days, otherwise paid late. Unpaid or partially paid
    invoices are due today, upcoming, in grace or overdue relative to today.
    """
    cards = StatusCards(
        upcoming=StatusBucket(),
        due_today=StatusBucket(),
        in_grace=StatusBucket(),
        overdue=StatusBucket(),
        paid_on_time=StatusBucket(),
        paid_late=StatusBucket(),
    )

    for allocation in allocate_receipts(invoices, receipts):
        invoice = allocation.invoice
        due_date = invoice.due_date
        grace_end = add_days(due_date, rules.grace_days)

        if allocation.paid_in_full:
            # Zero-amount invoices are settled without a receipt
            if allocation.completed_on is None or allocation.completed_on <= grace_end:
                cards.paid_on_time.add(invoice.amount_cents)
            else:
                cards.paid_late.add(invoice.amount_cents)
        elif due_date == today:
            cards.due_today.add(invoice.amount_cents)
        elif due_date > today:
            cards.upcoming.add(invoice.amount_cents)
        elif today <= grace_end:
            cards.in_grace.add(invoice.amount_cents)
        else:
            cards.overdue.add(invoice.amount_cents)

    return cards


def customer_exposure(allocations: List[InvoiceAllocation], customer_name: str, today: date) -> Tuple[int, float]:
    """
    Days overdue and payment percent for one customer, as fed to the tier resolver.

    Days overdue is taken from the oldest invoice that is not paid in full;
    payment percent is paid over invoiced across all of the customer's invoices.
    """
    own = [a for a in allocations if a.invoice.customer_name == customer_name]
    if not own:
        return 0, 100.0

    open_due_dates = [a.invoice.due_date for a in own if not a.paid_in_full]
    overdue = days_overdue(min(open_due_dates), today) if open_due_dates else 0

    invoiced = sum(a.invoice.amount_cents for a in own)
    paid = sum(a.paid_cents for a in own)
    percent = round(paid * 100 / invoiced, 2) if invoiced > 0 else 100.0

    return overdue, percent

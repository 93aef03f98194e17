"""Unit tests for FIFO receipt allocation and status cards"""

from datetime import date
from recovery_gateway.domain.models import CategoryRules, Invoice, Receipt
from recovery_gateway.domain.allocation import allocate_receipts, build_status_cards, customer_exposure


def _invoice(number: str, invoice_date: date, amount_cents: int, customer: str = "Acme", terms: int = 0) -> Invoice:
    return Invoice(
        invoice_number=number,
        customer_name=customer,
        invoice_date=invoice_date,
        amount_cents=amount_cents,
        payment_terms_days=terms,
    )


def test_allocate_receipts_oldest_first():
    """Test receipts settle the oldest invoice first and carry over the remainder"""
    invoices = [
        _invoice("INV-2", date(2024, 2, 1), 5000),
        _invoice("INV-1", date(2024, 1, 1), 10000),
    ]
    receipts = [
        Receipt(customer_name="Acme", date=date(2024, 2, 20), amount_cents=3000),
        Receipt(customer_name="Acme", date=date(2024, 1, 10), amount_cents=12000),
    ]

    allocations = {a.invoice.invoice_number: a for a in allocate_receipts(invoices, receipts)}

    assert allocations["INV-1"].paid_cents == 10000
    assert allocations["INV-1"].completed_on == date(2024, 1, 10)
    assert allocations["INV-2"].paid_cents == 5000
    assert allocations["INV-2"].completed_on == date(2024, 2, 20)
    assert allocations["INV-2"].payment_percent == 100.0


def test_allocate_receipts_partial_payment():
    """Test a short receipt leaves the invoice partially paid"""
    allocations = allocate_receipts(
        [_invoice("INV-1", date(2024, 1, 1), 10000)],
        [Receipt(customer_name="Acme", date=date(2024, 1, 5), amount_cents=2500)],
    )

    assert allocations[0].paid_cents == 2500
    assert allocations[0].paid_in_full is False
    assert allocations[0].completed_on is None
    assert allocations[0].payment_percent == 25.0


def test_allocate_receipts_per_customer():
    """Test one customer's receipts never pay another customer's invoices"""
    allocations = allocate_receipts(
        [
            _invoice("A-1", date(2024, 1, 1), 1000, customer="Acme"),
            _invoice("B-1", date(2024, 1, 1), 1000, customer="Globex"),
        ],
        [Receipt(customer_name="Acme", date=date(2024, 1, 2), amount_cents=5000)],
    )
    paid = {a.invoice.invoice_number: a.paid_cents for a in allocations}
    assert paid == {"A-1": 1000, "B-1": 0}


def test_allocate_receipts_skips_empty_receipt():
    allocations = allocate_receipts(
        [_invoice("INV-1", date(2024, 1, 1), 1000)],
        [
            Receipt(customer_name="Acme", date=date(2024, 1, 2), amount_cents=0),
            Receipt(customer_name="Acme", date=date(2024, 1, 3), amount_cents=1000),
        ],
    )
    assert allocations[0].completed_on == date(2024, 1, 3)


def test_build_status_cards():
    """Test every bucket with 30 day terms and 7 grace days"""
    today = date(2024, 3, 15)
    rules = CategoryRules(grace_days=7)
    invoices = [
        _invoice("ON-TIME", date(2024, 1, 1), 1000, customer="A", terms=30),  # due Jan 31
        _invoice("LATE", date(2024, 1, 1), 2000, customer="B", terms=30),  # due Jan 31
        _invoice("UPCOMING", date(2024, 3, 1), 3000, customer="C", terms=30),  # due Mar 31
        _invoice("TODAY", date(2024, 2, 14), 4000, customer="D", terms=30),  # due Mar 15
        _invoice("GRACE", date(2024, 2, 10), 5000, customer="E", terms=30),  # due Mar 11
        _invoice("OVERDUE", date(2024, 1, 15), 6000, customer="F", terms=30),  # due Feb 14
    ]
    receipts = [
        Receipt(customer_name="A", date=date(2024, 2, 5), amount_cents=1000),
        Receipt(customer_name="B", date=date(2024, 2, 20), amount_cents=2000),
        Receipt(customer_name="F", date=date(2024, 2, 20), amount_cents=3000),
    ]

    cards = build_status_cards(invoices, receipts, rules, today)

    assert (cards.paid_on_time.count, cards.paid_on_time.total_cents) == (1, 1000)
    assert (cards.paid_late.count, cards.paid_late.total_cents) == (1, 2000)
    assert (cards.upcoming.count, cards.upcoming.total_cents) == (1, 3000)
    assert (cards.due_today.count, cards.due_today.total_cents) == (1, 4000)
    assert (cards.in_grace.count, cards.in_grace.total_cents) == (1, 5000)
    assert (cards.overdue.count, cards.overdue.total_cents) == (1, 6000)


def test_build_status_cards_zero_amount_invoice_is_settled():
    """Test an invoice with nothing to collect is paid on time, never overdue"""
    invoices = [_invoice("CREDIT", date(2024, 1, 1), 0, terms=30)]

    cards = build_status_cards(invoices, [], CategoryRules(grace_days=7), date(2024, 6, 1))

    assert (cards.paid_on_time.count, cards.paid_on_time.total_cents) == (1, 0)
    assert cards.overdue.count == 0
    assert customer_exposure(allocate_receipts(invoices, []), "Acme", date(2024, 6, 1)) == (0, 100.0)


def test_customer_exposure():
    """Test delay comes from the oldest open invoice and percent from all invoices"""
    allocations = allocate_receipts(
        [
            _invoice("INV-1", date(2024, 1, 1), 10000, terms=30),  # due Jan 31, paid
            _invoice("INV-2", date(2024, 2, 1), 10000, terms=30),  # due Mar 2, half paid
            _invoice("INV-3", date(2024, 3, 1), 20000, terms=30),  # due Mar 31, open
        ],
        [Receipt(customer_name="Acme", date=date(2024, 2, 15), amount_cents=15000)],
    )

    overdue, percent = customer_exposure(allocations, "Acme", date(2024, 3, 12))

    assert overdue == 10
    assert percent == 37.5


def test_customer_exposure_fully_paid():
    allocations = allocate_receipts(
        [_invoice("INV-1", date(2024, 1, 1), 10000)],
        [Receipt(customer_name="Acme", date=date(2024, 3, 1), amount_cents=10000)],
    )
    assert customer_exposure(allocations, "Acme", date(2024, 6, 1)) == (0, 100.0)
    assert customer_exposure(allocations, "Globex", date(2024, 6, 1)) == (0, 100.0)

"""Unit tests for grace-period payment classification"""

import pytest
from datetime import date, datetime, timezone
from recovery_gateway.domain.models import CategoryRules, PaymentStatus
from recovery_gateway.domain.grace import classify_payment
from recovery_gateway.domain.exceptions import InvalidInputError

DUE = date(2024, 1, 1)


@pytest.fixture
def rules() -> CategoryRules:
    return CategoryRules(grace_days=7)


def test_classify_paid_payments(rules: CategoryRules):
    """Test paid invoices against due date and the 7 day grace period"""
    now = date(2024, 2, 1)
    assert classify_payment(DUE, date(2023, 12, 28), rules, now) == PaymentStatus.PAID_ON_TIME
    assert classify_payment(DUE, DUE, rules, now) == PaymentStatus.PAID_ON_TIME
    assert classify_payment(DUE, date(2024, 1, 5), rules, now) == PaymentStatus.IN_GRACE
    assert classify_payment(DUE, date(2024, 1, 8), rules, now) == PaymentStatus.IN_GRACE
    assert classify_payment(DUE, date(2024, 1, 10), rules, now) == PaymentStatus.OVERDUE


def test_classify_unpaid_payments(rules: CategoryRules):
    """Test unpaid invoices against now"""
    assert classify_payment(DUE, None, rules, date(2024, 1, 3)) == PaymentStatus.UNPAID_WITHIN_GRACE
    assert classify_payment(DUE, None, rules, date(2024, 1, 8)) == PaymentStatus.UNPAID_WITHIN_GRACE
    assert classify_payment(DUE, None, rules, date(2024, 1, 9)) == PaymentStatus.OVERDUE
    assert classify_payment(DUE, None, rules, date(2024, 1, 10)) == PaymentStatus.OVERDUE


def test_classify_zero_grace():
    rules = CategoryRules(grace_days=0)
    assert classify_payment(DUE, date(2024, 1, 2), rules, DUE) == PaymentStatus.OVERDUE
    assert classify_payment(DUE, None, rules, DUE) == PaymentStatus.UNPAID_WITHIN_GRACE


def test_classify_status_labels():
    assert PaymentStatus.PAID_ON_TIME.value == "Paid On Time"
    assert PaymentStatus.UNPAID_WITHIN_GRACE.value == "Unpaid-Within-Grace"


def test_classify_rejects_missing_dates(rules: CategoryRules):
    with pytest.raises(InvalidInputError):
        classify_payment(None, None, rules, date(2024, 1, 3))
    with pytest.raises(InvalidInputError):
        classify_payment(DUE, "2024-01-02", rules, date(2024, 1, 3))


def test_classify_rejects_mixed_date_kinds(rules: CategoryRules):
    """Test a datetime mixed with a date fails fast instead of a TypeError"""
    with pytest.raises(InvalidInputError):
        classify_payment(datetime(2024, 1, 1), date(2024, 1, 5), rules, date(2024, 1, 3))
    with pytest.raises(InvalidInputError):
        classify_payment(DUE, None, rules, datetime(2024, 1, 3))
    with pytest.raises(InvalidInputError):
        classify_payment(datetime(2024, 1, 1), None, rules, datetime(2024, 1, 3, tzinfo=timezone.utc))


def test_classify_accepts_datetimes(rules: CategoryRules):
    due = datetime(2024, 1, 1, 12, 0)
    assert classify_payment(due, datetime(2024, 1, 5, 9, 0), rules, due) == PaymentStatus.IN_GRACE
    assert classify_payment(due, None, rules, datetime(2024, 1, 9, 9, 0)) == PaymentStatus.OVERDUE

"""Unit tests for category tier resolution"""

import pytest
from recovery_gateway.domain.models import EXCLUDED, CategoryRules, Tier
from recovery_gateway.domain.categories import describe_thresholds, resolve_category, tier_boundaries
from recovery_gateway.domain.exceptions import InvalidInputError


def test_resolve_category_boundaries(category_rules: CategoryRules):
    """Test bucket edges with 5/20/40/100 widths"""
    assert resolve_category(5, 0, category_rules) == Tier.ALPHA
    assert resolve_category(6, 0, category_rules) == Tier.BETA
    assert resolve_category(25, 0, category_rules) == Tier.BETA
    assert resolve_category(26, 0, category_rules) == Tier.GAMMA
    assert resolve_category(65, 0, category_rules) == Tier.GAMMA
    assert resolve_category(66, 0, category_rules) == Tier.DELTA
    assert resolve_category(1000, 0, category_rules) == Tier.DELTA


def test_resolve_category_zero_days_is_alpha():
    """Test zero days is Alpha even with a zero-width Alpha bucket"""
    assert resolve_category(0, 0, CategoryRules()) == Tier.ALPHA
    assert resolve_category(0, 0, CategoryRules(alpha_days=0)) == Tier.ALPHA
    assert resolve_category(1, 0, CategoryRules(alpha_days=0)) == Tier.BETA


def test_resolve_category_exclusion_precedence(category_rules: CategoryRules):
    """Test payment at or above threshold excludes regardless of delay"""
    assert resolve_category(0, 80, category_rules) == EXCLUDED
    assert resolve_category(10_000, 80, category_rules) == EXCLUDED
    assert resolve_category(10_000, 100, category_rules) == EXCLUDED
    assert resolve_category(10_000, 79.99, category_rules) == Tier.DELTA


def test_resolve_category_monotonic(category_rules: CategoryRules):
    """Test severity never decreases as days overdue grow"""
    severities = [resolve_category(d, 10, category_rules).severity for d in range(0, 200)]
    assert severities == sorted(severities)
    assert severities[0] == 1
    assert severities[-1] == 4


def test_resolve_category_idempotent(category_rules: CategoryRules):
    """Test repeated evaluation yields the same tier and leaves rules untouched"""
    before = CategoryRules(**vars(category_rules))
    first = resolve_category(30, 50, category_rules)
    second = resolve_category(30, 50, category_rules)
    assert first == second == Tier.GAMMA
    assert category_rules == before


def test_resolve_category_zero_width_bucket_unreachable():
    """Test a zero-width Beta bucket is skipped, not an error"""
    rules = CategoryRules(alpha_days=5, beta_days=0, gamma_days=10, delta_days=10)
    tiers = {resolve_category(d, 0, rules) for d in range(0, 40)}
    assert Tier.BETA not in tiers
    assert resolve_category(6, 0, rules) == Tier.GAMMA


def test_resolve_category_reflects_rule_changes(category_rules: CategoryRules):
    """Test boundaries are recomputed from the current rules"""
    assert resolve_category(10, 0, category_rules) == Tier.BETA
    category_rules.alpha_days = 10
    assert resolve_category(10, 0, category_rules) == Tier.ALPHA


@pytest.mark.parametrize("days", [None, -1, 2.5, "3", True])
def test_resolve_category_rejects_bad_days(days, category_rules: CategoryRules):
    """Test malformed days overdue fails fast instead of coercing"""
    with pytest.raises(InvalidInputError):
        resolve_category(days, 0, category_rules)


@pytest.mark.parametrize("percent", [None, "50", float("nan")])
def test_resolve_category_rejects_bad_percent(percent, category_rules: CategoryRules):
    with pytest.raises(InvalidInputError):
        resolve_category(3, percent, category_rules)


def test_tier_boundaries_cumulative(category_rules: CategoryRules):
    assert tier_boundaries(category_rules) == (5, 25, 65)


def test_describe_thresholds(category_rules: CategoryRules):
    """Test labels shown on the settings screen"""
    labels = describe_thresholds(category_rules)
    assert labels[Tier.ALPHA] == "0-5 days"
    assert labels[Tier.BETA] == "6-25 days"
    assert labels[Tier.GAMMA] == "26-65 days"
    assert labels[Tier.DELTA] == "66+ days"

    labels = describe_thresholds(CategoryRules(alpha_days=5, beta_days=0, gamma_days=10))
    assert labels[Tier.BETA] == "unreachable"

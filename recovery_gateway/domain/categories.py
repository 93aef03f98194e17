"""Category escalation engine - maps days overdue onto the four collection tiers"""

import math
from numbers import Real
from typing import Dict, Tuple

from recovery_gateway.domain.exceptions import InvalidInputError
from recovery_gateway.domain.models import EXCLUDED, CategoryOutcome, CategoryRules, Tier


def _require_days(days_overdue) -> None:
    # bool is an int subclass; True must not pass as 1 day
    if isinstance(days_overdue, bool) or not isinstance(days_overdue, int):
        raise InvalidInputError(f"days_overdue must be an integer, got {days_overdue!r}")
    if days_overdue < 0:
        raise InvalidInputError(f"days_overdue must be >= 0, got {days_overdue}")


def _require_percent(payment_percent) -> None:
    if isinstance(payment_percent, bool) or not isinstance(payment_percent, Real):
        raise InvalidInputError(f"payment_percent must be a number, got {payment_percent!r}")
    if math.isnan(payment_percent):
        raise InvalidInputError("payment_percent must not be NaN")


def tier_boundaries(rules: CategoryRules) -> Tuple[int, int, int]:
    """
    Absolute upper bounds (inclusive) of the Alpha, Beta and Gamma buckets.

    Delta has no upper bound. Recomputed from the current rules on each call.
    """
    alpha_end = rules.alpha_days
    beta_end = alpha_end + rules.beta_days
    gamma_end = beta_end + rules.gamma_days
    return alpha_end, beta_end, gamma_end


def resolve_category(days_overdue: int, payment_percent: float, rules: CategoryRules) -> CategoryOutcome:
    """
    Resolve the collection tier for an invoice or customer.

    Requirements:
    - Payment at or above partial_payment_threshold_percent excludes the entity
      from escalation, checked before any tier lookup
    - Buckets are cumulative widths: 0..b1 Alpha, ..b2 Beta, ..b3 Gamma, beyond Delta
    - Zero-width buckets are unreachable, never an error

    Args:
        days_overdue: Non-negative whole days past due
        payment_percent: Share of the amount already paid, 0-100
        rules: Tenant category rules, assumed already validated

    Returns:
        A Tier, or EXCLUDED

    Raises:
        InvalidInputError: On missing, non-integer or negative days_overdue,
            or a missing/non-numeric payment_percent

    Example:
        rules 5/20/40/100: 5 days -> Alpha, 6 -> Beta, 25 -> Beta, 26 -> Gamma
    """
    _require_days(days_overdue)
    _require_percent(payment_percent)

    if payment_percent >= rules.partial_payment_threshold_percent:
        return EXCLUDED

    alpha_end, beta_end, gamma_end = tier_boundaries(rules)

    if days_overdue <= alpha_end:
        return Tier.ALPHA
    elif days_overdue <= beta_end:
        return Tier.BETA
    elif days_overdue <= gamma_end:
        return Tier.GAMMA
    else:
        return Tier.DELTA


def describe_thresholds(rules: CategoryRules) -> Dict[Tier, str]:
    """Human-readable day ranges for each tier, as shown on the settings screen"""
    alpha_end, beta_end, gamma_end = tier_boundaries(rules)

    def span(start: int, end: int) -> str:
        if end < start:
            return "unreachable"
        return f"{start}-{end} days"

    return {
        Tier.ALPHA: span(0, alpha_end),
        Tier.BETA: span(alpha_end + 1, beta_end),
        Tier.GAMMA: span(beta_end + 1, gamma_end),
        Tier.DELTA: f"{gamma_end + 1}+ days",
    }

"""Follow-up cadence checks per collection tier"""

from datetime import date, timedelta
from typing import Optional

from recovery_gateway.domain.exceptions import InvalidInputError
from recovery_gateway.domain.models import FollowupRules, Tier
from recovery_gateway.utils.date_utils import days_between, require_date


def cadence_for_category(category: Tier, rules: FollowupRules) -> int:
    """Minimum days between reminders for a tier"""
    if not isinstance(category, Tier):
        raise InvalidInputError(f"No follow-up cadence for category {category!r}")

    cadences = {
        Tier.ALPHA: rules.alpha_days,
        Tier.BETA: rules.beta_days,
        Tier.GAMMA: rules.gamma_days,
        Tier.DELTA: rules.delta_days,
    }
    return cadences[category]


def is_follow_up_due(
    last_follow_up: Optional[date],
    category: Tier,
    rules: FollowupRules,
    now: date,
) -> bool:
    """
    Decide whether a reminder is due for a customer.

    Never followed up means due immediately. Otherwise due once the whole days
    elapsed since the last follow-up reach the tier cadence. Dates must already
    be in one reference timezone.
    """
    require_date(now, "now")
    cadence = cadence_for_category(category, rules)

    if last_follow_up is None:
        return True

    return days_between(last_follow_up, now) >= cadence


def next_follow_up_date(
    last_follow_up: Optional[date],
    category: Tier,
    rules: FollowupRules,
    now: date,
) -> date:
    """Date the next reminder becomes due (now, when never followed up)"""
    require_date(now, "now")
    cadence = cadence_for_category(category, rules)

    if last_follow_up is None:
        return now

    require_date(last_follow_up, "last_follow_up")
    return last_follow_up + timedelta(days=cadence)

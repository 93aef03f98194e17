"""Category recommendations for a tenant's debtors"""

from datetime import date
from typing import Dict, List

from recovery_gateway.domain.categories import resolve_category
from recovery_gateway.domain.followups import is_follow_up_due
from recovery_gateway.domain.models import (
    EXCLUDED,
    CategoryRecommendation,
    CategoryRules,
    DebtorSnapshot,
    FollowupRules,
    Tier,
)


def recommend_category(debtor: DebtorSnapshot, rules: CategoryRules) -> CategoryRecommendation:
    """
    Compare a debtor's assigned category with the one the rules compute.

    Excluded debtors keep their current category, so they never count as a change.
    """
    recommended = resolve_category(debtor.days_overdue, debtor.payment_percent, rules)
    will_change = recommended != EXCLUDED and recommended != debtor.current_category

    return CategoryRecommendation(
        customer_id=debtor.customer_id,
        customer_name=debtor.customer_name,
        current_category=debtor.current_category,
        recommended_category=recommended,
        days_overdue=debtor.days_overdue,
        payment_percent=debtor.payment_percent,
        will_change=will_change,
    )


def recommend_categories(debtors: List[DebtorSnapshot], rules: CategoryRules) -> List[CategoryRecommendation]:
    return [recommend_category(debtor, rules) for debtor in debtors]


def summarize_recommendations(recommendations: List[CategoryRecommendation]) -> Dict[str, int]:
    """Count recommendations per outcome plus the number of pending changes"""
    summary = {tier.value: 0 for tier in Tier}
    summary[EXCLUDED] = 0

    for rec in recommendations:
        key = rec.recommended_category.value if isinstance(rec.recommended_category, Tier) else EXCLUDED
        summary[key] += 1

    summary["will_change"] = sum(1 for rec in recommendations if rec.will_change)
    return summary


def debtors_due_for_follow_up(
    debtors: List[DebtorSnapshot],
    rules: FollowupRules,
    now: date,
) -> List[DebtorSnapshot]:
    """Debtors whose reminder cadence has elapsed, by their current category"""
    return [
        debtor
        for debtor in debtors
        if is_follow_up_due(debtor.last_follow_up, debtor.current_category, rules, now)
    ]

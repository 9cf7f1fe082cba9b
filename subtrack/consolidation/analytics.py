"""Spending totals and breakdowns for the analytics screen."""

from typing import Sequence

from subtrack.consolidation.costs import monthly_cost, price
from subtrack.models.subscription import (
    BillingCycle,
    DetailedSpendingSummary,
    SpendingSummary,
    Subscription,
    SubscriptionCategory,
    SubscriptionStatus,
    UsageFrequency,
)


MOST_EXPENSIVE_LIMIT = 5
UNKNOWN_USAGE = "unknown"


def summarize_spending(subscriptions: Sequence[Subscription]) -> SpendingSummary:
    """
    Monthly total, yearly total and per-category monthly spend.

    Amounts stay in minor units and are not rounded.
    """
    active = [sub for sub in subscriptions if sub.is_active]

    breakdown: dict[SubscriptionCategory, float] = {}
    monthly_total = 0.0
    for sub in active:
        cost = monthly_cost(sub.cost, sub.billing_cycle)
        monthly_total += cost
        breakdown[sub.category] = breakdown.get(sub.category, 0.0) + cost

    return SpendingSummary(
        total_subscriptions=len(active),
        monthly_total=monthly_total,
        yearly_total=monthly_total * 12,
        category_breakdown=breakdown,
        average_per_subscription=monthly_total / len(active) if active else 0.0,
    )


def detailed_spending(subscriptions: Sequence[Subscription]) -> DetailedSpendingSummary:
    """
    Everything in summarize_spending, plus usage and billing-cycle counts,
    the most expensive and the underused active subscriptions, and what the
    cancelled ones no longer cost.

    Expects all of a user's subscriptions, not only the active ones.
    """
    active = [sub for sub in subscriptions if sub.is_active]
    cancelled = [
        sub for sub in subscriptions
        if sub.status == SubscriptionStatus.CANCELLED
    ]

    usage: dict[str, int] = {}
    cycles: dict[BillingCycle, int] = {}
    for sub in active:
        key = sub.usage_frequency.value if sub.usage_frequency else UNKNOWN_USAGE
        usage[key] = usage.get(key, 0) + 1
        cycles[sub.billing_cycle] = cycles.get(sub.billing_cycle, 0) + 1

    priced = [price(sub) for sub in active]
    by_cost = sorted(priced, key=lambda p: p.monthly_cost, reverse=True)
    underutilized = [
        p for p in by_cost
        if p.subscription.usage_frequency in (UsageFrequency.RARELY, UsageFrequency.NEVER)
    ]

    return DetailedSpendingSummary(
        **summarize_spending(active).model_dump(),
        cancelled_subscriptions=len(cancelled),
        usage_analysis=usage,
        billing_cycle_analysis=cycles,
        most_expensive=by_cost[:MOST_EXPENSIVE_LIMIT],
        underutilized=underutilized,
        potential_savings=sum(
            monthly_cost(sub.cost, sub.billing_cycle) for sub in cancelled
        ),
    )

"""Monthly cost normalization."""

from typing import Optional, Union

from subtrack.models.subscription import (
    BillingCycle,
    PricedSubscription,
    Subscription,
)


# Average number of weeks in a month.
WEEKS_PER_MONTH = 4.33


def _parse_cycle(billing_cycle: Union[BillingCycle, str]) -> Optional[BillingCycle]:
    if isinstance(billing_cycle, BillingCycle):
        return billing_cycle
    try:
        return BillingCycle(str(billing_cycle).lower())
    except ValueError:
        return None


def monthly_cost(cost: int, billing_cycle: Union[BillingCycle, str]) -> float:
    """
    Convert a per-cycle cost into its monthly equivalent.

    No rounding is applied. An unrecognized billing cycle is treated as
    monthly and the cost is returned unchanged.
    """
    cycle = _parse_cycle(billing_cycle)

    if cycle is BillingCycle.YEARLY:
        return cost / 12
    elif cycle is BillingCycle.QUARTERLY:
        return cost / 3
    elif cycle is BillingCycle.BIANNUAL:
        return cost / 6
    elif cycle is BillingCycle.WEEKLY:
        return cost * WEEKS_PER_MONTH
    elif cycle is BillingCycle.MONTHLY:
        return float(cost)
    else:
        # Unknown cycle: fall back to identity.
        return float(cost)


def price(subscription: Subscription) -> PricedSubscription:
    """Attach the monthly cost to a subscription."""
    return PricedSubscription(
        subscription=subscription,
        monthly_cost=monthly_cost(subscription.cost, subscription.billing_cycle),
    )

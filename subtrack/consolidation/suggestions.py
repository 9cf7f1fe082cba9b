"""
Savings suggestions built on top of a consolidation run.

Order of the returned list:
    1. one consolidation suggestion per overlap group
    2. rarely/never used services above the cost floor, most expensive first
    3. monthly-billed, heavily used services that could switch to annual
"""

from typing import Optional, Sequence

from subtrack.config import SuggestionSettings, get_settings
from subtrack.consolidation.costs import price
from subtrack.consolidation.engine import format_dollars
from subtrack.models.subscription import (
    BillingCycle,
    ConsolidationResult,
    ConsolidationSuggestions,
    Subscription,
    Suggestion,
    SuggestionType,
    UsageFrequency,
)


LOW_USAGE = {UsageFrequency.RARELY, UsageFrequency.NEVER}
HIGH_USAGE = {UsageFrequency.DAILY, UsageFrequency.WEEKLY}


class SuggestionBuilder:
    """Turns a ConsolidationResult plus usage data into suggestions."""

    def __init__(self, settings: Optional[SuggestionSettings] = None):
        self._settings = settings or get_settings().suggestions

    def build(
        self,
        subscriptions: Sequence[Subscription],
        result: ConsolidationResult,
    ) -> ConsolidationSuggestions:
        active = [sub for sub in subscriptions if sub.is_active]

        suggestions = [
            Suggestion(
                type=SuggestionType.CONSOLIDATION,
                title=rec.title,
                message=rec.message,
                actionable=rec.actionable,
                estimated_monthly_savings=rec.group.potential_savings,
                group=rec.group,
            )
            for rec in result.recommendations
        ]
        suggestions.extend(self.unused_suggestions(active))
        suggestions.extend(self.annual_suggestions(active))

        return ConsolidationSuggestions(
            suggestions=suggestions,
            total_potential_savings=result.total_potential_savings,
            overlap_count=result.overlap_count,
        )

    def unused_suggestions(self, active: Sequence[Subscription]) -> list[Suggestion]:
        """Rarely or never used services costing more than the floor."""
        floor = self._settings.underused_min_monthly_cost
        candidates = [
            price(sub) for sub in active
            if sub.usage_frequency in LOW_USAGE
        ]
        candidates = [p for p in candidates if p.monthly_cost > floor]
        candidates.sort(key=lambda p: p.monthly_cost, reverse=True)

        return [
            Suggestion(
                type=SuggestionType.UNUSED,
                title=f"Consider Cancelling {p.name}",
                message=(
                    f"You rarely use this service but pay "
                    f"{format_dollars(p.monthly_cost)}/month"
                ),
                estimated_monthly_savings=p.monthly_cost,
                subscription=p,
            )
            for p in candidates
        ]

    def annual_suggestions(self, active: Sequence[Subscription]) -> list[Suggestion]:
        """Monthly-billed services used daily or weekly."""
        rate = self._settings.annual_discount_rate
        candidates = [
            price(sub) for sub in active
            if sub.billing_cycle == BillingCycle.MONTHLY
            and sub.usage_frequency in HIGH_USAGE
        ]
        candidates.sort(key=lambda p: p.monthly_cost * rate, reverse=True)

        return [
            Suggestion(
                type=SuggestionType.ANNUAL,
                title=f"Switch {p.name} to Annual",
                message=(
                    f"Save ~{format_dollars(p.monthly_cost * rate)}/month "
                    f"by switching to annual billing"
                ),
                estimated_monthly_savings=p.monthly_cost * rate,
                subscription=p,
            )
            for p in candidates
        ]

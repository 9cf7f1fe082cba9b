"""
Clustering & Recommendation Engine

Groups overlapping subscriptions and picks one to keep per group.

Algorithm (greedy, single pass, input-order sensitive):
    1. Walk the active subscriptions in the order given.
    2. Each unclaimed subscription becomes an anchor and claims every later,
       unclaimed subscription it overlaps with.
    3. An anchor that claimed anything forms a group. An anchor that claimed
       nothing stays unclaimed and may still be claimed by a later anchor.

A subscription joins the group of the FIRST anchor that claims it and is
never reconsidered. Overlap is therefore not transitive: if A~B and B~C but
not A~C, the groups are {A, B} and C is left alone. Callers rely on these
exact groupings; any change here is a behavior change.
"""

from typing import Optional, Sequence

import structlog

from subtrack.consolidation.classifier import REASON_DEFAULT, OverlapClassifier
from subtrack.consolidation.costs import price
from subtrack.models.subscription import (
    ConsolidationResult,
    OverlapEdge,
    OverlapGroup,
    PricedSubscription,
    Recommendation,
    Subscription,
    SuggestionType,
    UsageFrequency,
)

logger = structlog.get_logger(__name__)


USAGE_PRIORITY: dict[UsageFrequency, int] = {
    UsageFrequency.DAILY: 4,
    UsageFrequency.WEEKLY: 3,
    UsageFrequency.MONTHLY: 2,
    UsageFrequency.RARELY: 1,
    UsageFrequency.NEVER: 0,
}


def usage_priority(usage: Optional[UsageFrequency]) -> int:
    """Higher means used more. Missing usage ranks like NEVER."""
    if usage is None:
        return USAGE_PRIORITY[UsageFrequency.NEVER]
    return USAGE_PRIORITY[usage]


def format_dollars(minor_units: float) -> str:
    return f"${minor_units / 100:.2f}"


class ConsolidationEngine:
    """
    Overlap detection and keep/cancel recommendation.

    Usage:
        engine = ConsolidationEngine()
        result = engine.consolidate(active_subscriptions)
    """

    def __init__(self, classifier: Optional[OverlapClassifier] = None):
        self._classifier = classifier or OverlapClassifier()

    @property
    def classifier(self) -> OverlapClassifier:
        return self._classifier

    # -------------------------------------------------------------------------
    # PUBLIC INTERFACE
    # -------------------------------------------------------------------------

    def consolidate(self, subscriptions: Sequence[Subscription]) -> ConsolidationResult:
        """
        Form overlap groups and recommendations.

        Non-active subscriptions are ignored. Fewer than two active
        subscriptions yields an empty result.
        """
        active = [sub for sub in subscriptions if sub.is_active]
        if len(active) < 2:
            return ConsolidationResult.empty()

        groups: list[OverlapGroup] = []
        processed: set[str] = set()

        for i, anchor in enumerate(active):
            if anchor.id in processed:
                continue

            edges = self._claim_partners(anchor, active[i + 1:], processed)
            if not edges:
                continue

            processed.add(anchor.id)
            group = self._build_group(anchor, edges)
            groups.append(group)

            logger.debug(
                "overlap_group_formed",
                category=group.category.value,
                services=[s.id for s in group.services],
                recommended=group.recommended.id,
                potential_savings=group.potential_savings,
                reason=group.overlap_reason,
            )

        result = ConsolidationResult(
            overlap_groups=groups,
            total_potential_savings=sum(g.potential_savings for g in groups),
            overlap_count=len(groups),
            recommendations=[self._recommend(g) for g in groups],
        )

        logger.debug(
            "consolidation_completed",
            active_subscriptions=len(active),
            overlap_count=result.overlap_count,
            total_potential_savings=result.total_potential_savings,
        )
        return result

    # -------------------------------------------------------------------------
    # INTERNAL: CLUSTERING
    # -------------------------------------------------------------------------

    def _claim_partners(
        self,
        anchor: Subscription,
        candidates: Sequence[Subscription],
        processed: set[str],
    ) -> list[OverlapEdge]:
        """Claim every later, unprocessed candidate that overlaps the anchor."""
        edges: list[OverlapEdge] = []
        for candidate in candidates:
            if candidate.id in processed:
                continue
            edge = self._classifier.find_overlap(anchor, candidate)
            if edge is not None:
                edges.append(edge)
                processed.add(candidate.id)
        return edges

    def _build_group(
        self,
        anchor: Subscription,
        edges: list[OverlapEdge],
    ) -> OverlapGroup:
        members = [anchor] + [edge.second for edge in edges]
        services = sorted(
            (price(sub) for sub in members),
            key=self._keep_order,
        )

        recommended = services[0]
        to_cancel = services[1:]

        return OverlapGroup(
            category=anchor.category,
            services=services,
            recommended=recommended,
            to_cancel=to_cancel,
            potential_savings=sum(s.monthly_cost for s in to_cancel),
            overlap_reason=edges[0].reason or REASON_DEFAULT,
        )

    @staticmethod
    def _keep_order(priced: PricedSubscription) -> tuple[int, float]:
        # Most used first, cheapest first among equals. sorted() is stable.
        return (
            -usage_priority(priced.subscription.usage_frequency),
            priced.monthly_cost,
        )

    # -------------------------------------------------------------------------
    # INTERNAL: RECOMMENDATIONS
    # -------------------------------------------------------------------------

    @staticmethod
    def _recommend(group: OverlapGroup) -> Recommendation:
        count = len(group.to_cancel)
        plural = "s" if count > 1 else ""
        return Recommendation(
            type=SuggestionType.CONSOLIDATION,
            title=f"Consolidate {group.category.value} Services",
            message=(
                f"Keep {group.recommended.name} and cancel {count} other{plural} "
                f"to save {format_dollars(group.potential_savings)}/month"
            ),
            actionable=True,
            group=group,
        )


def consolidate(
    subscriptions: Sequence[Subscription],
    classifier: Optional[OverlapClassifier] = None,
) -> ConsolidationResult:
    """Run the consolidation engine once over a user's subscriptions."""
    return ConsolidationEngine(classifier).consolidate(subscriptions)

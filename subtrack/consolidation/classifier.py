"""
Overlap Classifier

Scores a pair of subscriptions on four additive signals:

    signal                                   weight   reason (first wins)
    ---------------------------------------  ------   ------------------------
    same category                            0.3      -
    competitor map lists second under first  0.7      "Known competing service"
    canonical name similarity > 0.7          0.5      "Similar service names"
    provider similarity > 0.8                0.4      "Same provider"

A pair overlaps when its score reaches the threshold (0.6). Weights and
thresholds come from ConsolidationSettings.
"""

from typing import Optional

from subtrack.config import ConsolidationSettings, get_settings
from subtrack.consolidation.competitors import DEFAULT_COMPETITOR_MAP, CompetitorMap
from subtrack.consolidation.names import canonicalize
from subtrack.consolidation.similarity import similarity
from subtrack.models.subscription import OverlapEdge, Subscription


REASON_COMPETITOR = "Known competing service"
REASON_SIMILAR_NAMES = "Similar service names"
REASON_SAME_PROVIDER = "Same provider"
REASON_DEFAULT = "Similar functionality"


class OverlapClassifier:
    """
    Pairwise overlap scoring.

    Stateless apart from its read-only competitor map and settings, so one
    instance can be shared across concurrent invocations.
    """

    def __init__(
        self,
        competitor_map: Optional[CompetitorMap] = None,
        settings: Optional[ConsolidationSettings] = None,
    ):
        self._competitors = competitor_map or DEFAULT_COMPETITOR_MAP
        self._settings = settings or get_settings().consolidation

    @property
    def competitor_map(self) -> CompetitorMap:
        return self._competitors

    @property
    def threshold(self) -> float:
        return self._settings.overlap_threshold

    def classify(self, first: Subscription, second: Subscription) -> OverlapEdge:
        """
        Score the ordered pair (first, second).

        The competitor lookup is one-directional: ``second`` must be listed
        under ``first``. Returns the edge whether or not it qualifies; check
        ``is_overlap``.
        """
        s = self._settings
        score = 0.0
        reason: Optional[str] = None

        if first.category == second.category:
            score += s.category_weight

        first_name = canonicalize(first.name)
        second_name = canonicalize(second.name)

        if self._competitors.are_competitors(first_name, second_name):
            score += s.competitor_weight
            reason = reason or REASON_COMPETITOR

        if similarity(first_name, second_name) > s.name_similarity_threshold:
            score += s.name_similarity_weight
            reason = reason or REASON_SIMILAR_NAMES

        provider_similarity = similarity(
            first.provider.lower(),
            second.provider.lower(),
        )
        if provider_similarity > s.provider_similarity_threshold:
            score += s.provider_similarity_weight
            reason = reason or REASON_SAME_PROVIDER

        return OverlapEdge(
            first=first,
            second=second,
            score=score,
            reason=reason,
            is_overlap=score >= s.overlap_threshold,
        )

    def find_overlap(
        self,
        first: Subscription,
        second: Subscription,
    ) -> Optional[OverlapEdge]:
        """Return the edge only if the pair overlaps."""
        edge = self.classify(first, second)
        return edge if edge.is_overlap else None

"""Subscription overlap and consolidation engine."""

from subtrack.consolidation.analytics import detailed_spending, summarize_spending
from subtrack.consolidation.classifier import OverlapClassifier
from subtrack.consolidation.competitors import (
    COMPETITOR_VERTICALS,
    DEFAULT_COMPETITOR_MAP,
    CompetitorMap,
    CompetitorMapError,
)
from subtrack.consolidation.costs import monthly_cost
from subtrack.consolidation.engine import ConsolidationEngine, consolidate
from subtrack.consolidation.names import canonicalize
from subtrack.consolidation.similarity import levenshtein_distance, similarity
from subtrack.consolidation.suggestions import SuggestionBuilder

__all__ = [
    "COMPETITOR_VERTICALS",
    "DEFAULT_COMPETITOR_MAP",
    "CompetitorMap",
    "CompetitorMapError",
    "ConsolidationEngine",
    "OverlapClassifier",
    "SuggestionBuilder",
    "canonicalize",
    "consolidate",
    "detailed_spending",
    "levenshtein_distance",
    "monthly_cost",
    "similarity",
    "summarize_spending",
]

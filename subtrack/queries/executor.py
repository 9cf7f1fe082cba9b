"""
Query Execution Engine

Read-side entry points used by the presentation layer. Each one fetches a
user's active subscriptions from the record store and runs the pure
consolidation engine over them.

DESIGN DECISION: This module owns the retry policy for record store reads.
The engine itself performs no I/O and knows nothing about retries.
"""

from typing import Optional

import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from subtrack.config import StorageSettings, get_settings
from subtrack.consolidation import (
    ConsolidationEngine,
    SuggestionBuilder,
    detailed_spending,
    summarize_spending,
)
from subtrack.models.subscription import (
    ConsolidationResult,
    ConsolidationSuggestions,
    DetailedSpendingSummary,
    SpendingSummary,
    Subscription,
    SubscriptionStatus,
)
from subtrack.services.storage import (
    ConnectionError,
    StorageError,
    SubscriptionStorageInterface,
)

logger = structlog.get_logger(__name__)


class QueryExecutionError(Exception):
    """Error during query execution."""
    pass


class SubscriptionQueryExecutor:
    """
    Executes subscription queries against the record store.

    GUARANTEES:
    - Only active subscriptions reach the engine
    - Store order is preserved (groupings depend on it)
    - Transient connection failures are retried, everything else surfaces
      as QueryExecutionError
    """

    def __init__(
        self,
        storage: SubscriptionStorageInterface,
        engine: Optional[ConsolidationEngine] = None,
        suggestion_builder: Optional[SuggestionBuilder] = None,
        storage_settings: Optional[StorageSettings] = None,
    ):
        self._storage = storage
        self._engine = engine or ConsolidationEngine()
        self._suggestions = suggestion_builder or SuggestionBuilder()
        self._storage_settings = storage_settings or get_settings().storage

    async def fetch_active(self, user_id: str) -> list[Subscription]:
        """
        All active subscriptions for a user, in store order.

        Raises:
            QueryExecutionError: If the store keeps failing or errors out
        """
        return await self._fetch(user_id, SubscriptionStatus.ACTIVE)

    async def fetch_all(self, user_id: str) -> list[Subscription]:
        """Every subscription for a user whatever its status, in store order."""
        return await self._fetch(user_id, None)

    async def _fetch(
        self,
        user_id: str,
        status: Optional[SubscriptionStatus],
    ) -> list[Subscription]:
        s = self._storage_settings
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(ConnectionError),
                stop=stop_after_attempt(s.retry_attempts),
                wait=wait_exponential(
                    multiplier=s.retry_wait_min_seconds,
                    min=s.retry_wait_min_seconds,
                    max=s.retry_wait_max_seconds,
                ),
                reraise=True,
            ):
                with attempt:
                    subscriptions = await self._storage.list_subscriptions(
                        user_id,
                        status=status,
                    )
        except StorageError as e:
            logger.error(
                "subscriptions_fetch_failed",
                user_id=user_id,
                status=status.value if status else None,
                error=str(e),
            )
            raise QueryExecutionError(
                f"Could not load subscriptions for user {user_id}: {e}"
            ) from e

        return subscriptions

    async def get_overlap_detection(self, user_id: str) -> ConsolidationResult:
        """Overlap groups, keep/cancel split and savings for a user."""
        active = await self.fetch_active(user_id)
        return self._engine.consolidate(active)

    async def get_consolidation_suggestions(self, user_id: str) -> ConsolidationSuggestions:
        """Overlap-based plus usage-based savings suggestions."""
        active = await self.fetch_active(user_id)
        result = self._engine.consolidate(active)
        return self._suggestions.build(active, result)

    async def get_spending_analytics(self, user_id: str) -> SpendingSummary:
        """Monthly/yearly totals and per-category spend."""
        active = await self.fetch_active(user_id)
        return summarize_spending(active)

    async def get_detailed_analytics(self, user_id: str) -> DetailedSpendingSummary:
        """Analytics screen data; needs cancelled subscriptions too."""
        subscriptions = await self.fetch_all(user_id)
        return detailed_spending(subscriptions)

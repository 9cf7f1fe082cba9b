"""
Main Orchestrator for Subscription Tracker

Ties the components together and defines the end-to-end flows for:
1. Consolidation review (store -> engine -> suggestions)
2. Spending analytics (store -> totals and breakdowns)
3. Confirmed cancellation (user confirms -> store mutation)

DESIGN DECISION: The engine only recommends. A subscription is cancelled
only when the user confirms it through confirm_cancellation, and every
step is audited.
"""

from typing import Optional
from uuid import UUID

from subtrack.audit import AuditLogger, create_correlation_id
from subtrack.consolidation import ConsolidationEngine, SuggestionBuilder
from subtrack.consolidation.costs import monthly_cost
from subtrack.log_config import configure_logging
from subtrack.models.subscription import (
    ConsolidationSuggestions,
    DetailedSpendingSummary,
    SpendingSummary,
    Subscription,
    SubscriptionStatus,
)
from subtrack.queries import QueryExecutionError, SubscriptionQueryExecutor
from subtrack.services.storage import (
    InMemoryAuditStorage,
    InMemorySubscriptionStorage,
    StorageError,
    SubscriptionStorageInterface,
)


class CancellationError(Exception):
    """A subscription could not be cancelled."""
    pass


class ConsolidationFlow:
    """
    Orchestrates the consolidation screen.

    Flow:
    1. Review -> load active subscriptions, detect overlaps, build suggestions
    2. Present -> the caller renders the suggestions (PAUSE)
    3. Confirm -> the user picks a subscription to cancel
    4. Cancel -> patch its status in the record store
    """

    def __init__(
        self,
        storage: SubscriptionStorageInterface,
        engine: Optional[ConsolidationEngine] = None,
        suggestion_builder: Optional[SuggestionBuilder] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._executor = SubscriptionQueryExecutor(
            storage,
            engine=engine,
            suggestion_builder=suggestion_builder,
        )
        self._audit_logger = audit_logger

    @property
    def executor(self) -> SubscriptionQueryExecutor:
        return self._executor

    async def review(
        self,
        user_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> ConsolidationSuggestions:
        """
        Run a consolidation review for a user.

        Raises:
            QueryExecutionError: If subscriptions could not be loaded
        """
        correlation_id = correlation_id or create_correlation_id()

        if self._audit_logger:
            await self._audit_logger.log_consolidation_requested(
                user_id=user_id,
                correlation_id=correlation_id,
            )

        try:
            suggestions = await self._executor.get_consolidation_suggestions(user_id)
        except QueryExecutionError as e:
            if self._audit_logger:
                await self._audit_logger.log_storage_error(
                    operation="review",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            for suggestion in suggestions.suggestions:
                if suggestion.group is not None:
                    await self._audit_logger.log_overlap_group(
                        user_id=user_id,
                        group=suggestion.group,
                        correlation_id=correlation_id,
                    )
            await self._audit_logger.log_suggestions_generated(
                user_id=user_id,
                suggestions=suggestions,
                correlation_id=correlation_id,
            )
            await self._audit_logger.log_consolidation_completed(
                user_id=user_id,
                overlap_count=suggestions.overlap_count,
                total_potential_savings=suggestions.total_potential_savings,
                suggestion_count=len(suggestions.suggestions),
                correlation_id=correlation_id,
            )

        return suggestions

    async def analytics(
        self,
        user_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> SpendingSummary:
        """Spending totals for a user."""
        correlation_id = correlation_id or create_correlation_id()

        summary = await self._executor.get_spending_analytics(user_id)

        if self._audit_logger:
            await self._audit_logger.log_analytics_generated(
                user_id=user_id,
                total_subscriptions=summary.total_subscriptions,
                monthly_total=summary.monthly_total,
                correlation_id=correlation_id,
            )

        return summary

    async def detailed_analytics(
        self,
        user_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> DetailedSpendingSummary:
        """Analytics screen data, including cancelled subscriptions."""
        correlation_id = correlation_id or create_correlation_id()

        summary = await self._executor.get_detailed_analytics(user_id)

        if self._audit_logger:
            await self._audit_logger.log_analytics_generated(
                user_id=user_id,
                total_subscriptions=summary.total_subscriptions,
                monthly_total=summary.monthly_total,
                correlation_id=correlation_id,
            )

        return summary

    async def confirm_cancellation(
        self,
        user_id: str,
        subscription_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> Subscription:
        """
        Cancel a subscription after explicit user confirmation.

        Only active subscriptions can be cancelled.

        Raises:
            CancellationError: If the subscription is missing, not active,
                or the store rejects the update
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            cancelled = await self._cancel(user_id, subscription_id)
        except CancellationError as e:
            if self._audit_logger:
                await self._audit_logger.log_cancellation_failed(
                    subscription_id=subscription_id,
                    user_id=user_id,
                    reason=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_subscription_cancelled(
                subscription_id=subscription_id,
                user_id=user_id,
                name=cancelled.name,
                monthly_cost=monthly_cost(cancelled.cost, cancelled.billing_cycle),
                correlation_id=correlation_id,
            )

        return cancelled

    async def _cancel(self, user_id: str, subscription_id: str) -> Subscription:
        try:
            current = await self._storage.get_subscription(user_id, subscription_id)
            if current is None:
                raise CancellationError(f"Subscription {subscription_id} not found")
            if current.status != SubscriptionStatus.ACTIVE:
                raise CancellationError(
                    f"Subscription {subscription_id} is {current.status.value}, not active"
                )
            return await self._storage.patch_subscription(
                user_id,
                subscription_id,
                {"status": SubscriptionStatus.CANCELLED},
            )
        except StorageError as e:
            raise CancellationError(f"Could not cancel {subscription_id}: {e}") from e


def create_app_components(
    storage: Optional[SubscriptionStorageInterface] = None,
) -> tuple[ConsolidationFlow, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        storage: Record store adapter. Defaults to an empty in-memory store
                 with in-memory audit storage.

    Returns:
        (consolidation_flow, audit_logger)
    """
    configure_logging()

    if storage is None:
        storage = InMemorySubscriptionStorage()
        audit_logger = AuditLogger(InMemoryAuditStorage())
    else:
        audit_logger = AuditLogger()  # Local-only logging

    flow = ConsolidationFlow(
        storage=storage,
        audit_logger=audit_logger,
    )

    return flow, audit_logger

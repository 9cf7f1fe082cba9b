"""
Audit trail for consolidation reviews and cancellations.

Each event becomes one JSON log line. When an audit store is attached the
event is also appended there; a failed append is logged and reported as
False, never raised. Events from one user action share a correlation id.
"""

from typing import Optional
from uuid import UUID, uuid4

import structlog

from subtrack.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from subtrack.models.subscription import ConsolidationSuggestions, OverlapGroup
from subtrack.services.storage import AuditStorageInterface, StorageError


class AuditLogger:
    """Writes audit events to the local log and, optionally, an audit store."""

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        self._storage = storage
        self._logger = structlog.get_logger(__name__)

    async def log(self, event: AuditEvent) -> bool:
        """
        Emit one event at a level matching its severity.

        Returns False only when the audit store rejected the append.
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except StorageError as e:
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_consolidation_requested(
        self,
        user_id: str,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.consolidation_requested(
            user_id=user_id,
            correlation_id=correlation_id,
        ))

    async def log_overlap_group(
        self,
        user_id: str,
        group: OverlapGroup,
        correlation_id: UUID,
    ) -> None:
        """Log one detected overlap group."""
        await self.log(AuditEventBuilder.overlap_group_detected(
            user_id=user_id,
            category=group.category.value,
            service_ids=[s.id for s in group.services],
            recommended_id=group.recommended.id,
            potential_savings=group.potential_savings,
            overlap_reason=group.overlap_reason,
            correlation_id=correlation_id,
        ))

    async def log_consolidation_completed(
        self,
        user_id: str,
        overlap_count: int,
        total_potential_savings: float,
        suggestion_count: int,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.consolidation_completed(
            user_id=user_id,
            overlap_count=overlap_count,
            total_potential_savings=total_potential_savings,
            suggestion_count=suggestion_count,
            correlation_id=correlation_id,
        ))

    async def log_suggestions_generated(
        self,
        user_id: str,
        suggestions: ConsolidationSuggestions,
        correlation_id: UUID,
    ) -> None:
        """Log how many suggestions of each type a review produced."""
        counts: dict[str, int] = {}
        for suggestion in suggestions.suggestions:
            counts[suggestion.type.value] = counts.get(suggestion.type.value, 0) + 1
        await self.log(AuditEventBuilder.suggestions_generated(
            user_id=user_id,
            counts_by_type=counts,
            correlation_id=correlation_id,
        ))

    async def log_analytics_generated(
        self,
        user_id: str,
        total_subscriptions: int,
        monthly_total: float,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.analytics_generated(
            user_id=user_id,
            total_subscriptions=total_subscriptions,
            monthly_total=monthly_total,
            correlation_id=correlation_id,
        ))

    async def log_subscription_cancelled(
        self,
        subscription_id: str,
        user_id: str,
        name: str,
        monthly_cost: float,
        correlation_id: UUID,
    ) -> None:
        """Log a cancellation the user confirmed."""
        await self.log(AuditEventBuilder.subscription_cancelled(
            subscription_id=subscription_id,
            user_id=user_id,
            name=name,
            monthly_cost=monthly_cost,
            correlation_id=correlation_id,
        ))

    async def log_cancellation_failed(
        self,
        subscription_id: str,
        user_id: str,
        reason: str,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.cancellation_failed(
            subscription_id=subscription_id,
            user_id=user_id,
            reason=reason,
            correlation_id=correlation_id,
        ))

    async def log_storage_error(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """New id for one user action (a review, a cancellation)."""
    return uuid4()

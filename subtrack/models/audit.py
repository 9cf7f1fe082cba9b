"""
Audit Models for Subscription Tracker

Every consolidation review and every cancellation the user confirms is
recorded as an audit event. Events are append-only.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Consolidation review
    CONSOLIDATION_REQUESTED = "consolidation_requested"
    OVERLAP_GROUP_DETECTED = "overlap_group_detected"
    CONSOLIDATION_COMPLETED = "consolidation_completed"
    SUGGESTIONS_GENERATED = "suggestions_generated"

    # Analytics
    ANALYTICS_GENERATED = "analytics_generated"

    # User actions on suggestions
    SUBSCRIPTION_CANCELLED = "subscription_cancelled"
    CANCELLATION_FAILED = "cancellation_failed"

    # System events
    STORAGE_ERROR = "storage_error"
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEvent(BaseModel):
    """
    A single audit event.

    ``entity_id`` is a record store id (a subscription) or a user id,
    depending on ``entity_type``.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'subscription', 'user')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one user action"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """Convert to a dictionary suitable for structured logging."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_record(self) -> dict:
        """
        Convert to a flat record for the audit store.

        ``details`` is JSON-encoded so the record holds only scalars.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type or "",
            "entity_id": self.entity_id or "",
            "correlation_id": str(self.correlation_id) if self.correlation_id else "",
            "description": self.description,
            "details": json.dumps(self.details, default=str) if self.details else "",
            "error_message": self.error_message or "",
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.consolidation_requested(user_id, correlation_id)
        event = AuditEventBuilder.subscription_cancelled(sub_id, user_id, correlation_id)
    """

    @staticmethod
    def consolidation_requested(
        user_id: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONSOLIDATION_REQUESTED,
            entity_type="user",
            entity_id=user_id,
            correlation_id=correlation_id,
            description="Consolidation review requested",
            is_user_action=True,
        )

    @staticmethod
    def overlap_group_detected(
        user_id: str,
        category: str,
        service_ids: list[str],
        recommended_id: str,
        potential_savings: float,
        overlap_reason: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OVERLAP_GROUP_DETECTED,
            entity_type="user",
            entity_id=user_id,
            correlation_id=correlation_id,
            description=f"Overlapping {category} services: {len(service_ids)}",
            details={
                "category": category,
                "service_ids": service_ids,
                "recommended_id": recommended_id,
                "potential_savings": potential_savings,
                "overlap_reason": overlap_reason,
            },
        )

    @staticmethod
    def consolidation_completed(
        user_id: str,
        overlap_count: int,
        total_potential_savings: float,
        suggestion_count: int,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONSOLIDATION_COMPLETED,
            entity_type="user",
            entity_id=user_id,
            correlation_id=correlation_id,
            description=(
                f"Consolidation review found {overlap_count} overlap group(s) "
                f"and {suggestion_count} suggestion(s)"
            ),
            details={
                "overlap_count": overlap_count,
                "total_potential_savings": total_potential_savings,
                "suggestion_count": suggestion_count,
            },
        )

    @staticmethod
    def suggestions_generated(
        user_id: str,
        counts_by_type: dict[str, int],
        correlation_id: UUID,
    ) -> AuditEvent:
        total = sum(counts_by_type.values())
        return AuditEvent(
            event_type=AuditEventType.SUGGESTIONS_GENERATED,
            entity_type="user",
            entity_id=user_id,
            correlation_id=correlation_id,
            description=f"Generated {total} savings suggestion(s)",
            details={"counts_by_type": counts_by_type},
        )

    @staticmethod
    def analytics_generated(
        user_id: str,
        total_subscriptions: int,
        monthly_total: float,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ANALYTICS_GENERATED,
            entity_type="user",
            entity_id=user_id,
            correlation_id=correlation_id,
            description=f"Spending analytics over {total_subscriptions} subscription(s)",
            details={
                "total_subscriptions": total_subscriptions,
                "monthly_total": monthly_total,
            },
        )

    @staticmethod
    def subscription_cancelled(
        subscription_id: str,
        user_id: str,
        name: str,
        monthly_cost: float,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_CANCELLED,
            entity_type="subscription",
            entity_id=subscription_id,
            correlation_id=correlation_id,
            description=f"Subscription cancelled: {name}",
            details={
                "user_id": user_id,
                "monthly_cost": monthly_cost,
            },
            is_user_action=True,
        )

    @staticmethod
    def cancellation_failed(
        subscription_id: str,
        user_id: str,
        reason: str,
        correlation_id: UUID,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CANCELLATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="subscription",
            entity_id=subscription_id,
            correlation_id=correlation_id,
            description="Subscription could not be cancelled",
            details={"user_id": user_id},
            error_message=reason,
            is_user_action=True,
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Record store error during {operation}",
            details={"operation": operation},
            error_code="STORAGE_ERROR",
            error_message=error_message,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"System error: {error_type}",
            details=details or {},
            error_code=error_type,
            error_message=error_message,
        )

"""
Data Models Package

All Pydantic models used by the subscription tracker.
"""

from subtrack.models.subscription import (
    BillingCycle,
    ConsolidationResult,
    ConsolidationSuggestions,
    DetailedSpendingSummary,
    OverlapEdge,
    OverlapGroup,
    PricedSubscription,
    Recommendation,
    SpendingSummary,
    Subscription,
    SubscriptionCategory,
    SubscriptionStatus,
    Suggestion,
    SuggestionType,
    UsageFrequency,
)
from subtrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Subscription models
    "BillingCycle",
    "ConsolidationResult",
    "ConsolidationSuggestions",
    "DetailedSpendingSummary",
    "OverlapEdge",
    "OverlapGroup",
    "PricedSubscription",
    "Recommendation",
    "SpendingSummary",
    "Subscription",
    "SubscriptionCategory",
    "SubscriptionStatus",
    "Suggestion",
    "SuggestionType",
    "UsageFrequency",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

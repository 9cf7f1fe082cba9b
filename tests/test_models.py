"""
Tests for Subscription Tracker models

Test strategy:
1. Unit tests for the pydantic models and enums
2. No external services (storage is in-memory)
"""

import json
from uuid import uuid4

import pytest
from pydantic import ValidationError

from subtrack.models.subscription import (
    BillingCycle,
    ConsolidationResult,
    PricedSubscription,
    Subscription,
    SubscriptionCategory,
    SubscriptionStatus,
    UsageFrequency,
)
from subtrack.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestSubscriptionModel:
    """Tests for the Subscription record."""

    def test_subscription_creation(self):
        """Test Subscription creation with snake_case fields."""
        sub = Subscription(
            id="sub_1",
            user_id="user_1",
            name="Netflix",
            provider="Netflix Inc.",
            category=SubscriptionCategory.ENTERTAINMENT,
            cost=1599,
            billing_cycle=BillingCycle.MONTHLY,
            usage_frequency=UsageFrequency.DAILY,
        )
        assert sub.name == "Netflix"
        assert sub.status == SubscriptionStatus.ACTIVE
        assert sub.currency == "USD"
        assert sub.is_active is True

    def test_subscription_from_store_record(self):
        """Test that camelCase record store keys are accepted."""
        sub = Subscription.model_validate({
            "_id": "k17abc",
            "userId": "user_1",
            "name": "Spotify Premium",
            "provider": "Spotify AB",
            "category": "entertainment",
            "cost": 1099,
            "currency": "eur",
            "billingCycle": "yearly",
            "status": "trial",
            "usageFrequency": "weekly",
        })
        assert sub.id == "k17abc"
        assert sub.user_id == "user_1"
        assert sub.billing_cycle == BillingCycle.YEARLY
        assert sub.usage_frequency == UsageFrequency.WEEKLY
        assert sub.currency == "EUR"
        assert sub.is_active is False

    def test_subscription_keeps_free_text_as_sent(self):
        """Test that name and provider keep surrounding whitespace."""
        sub = Subscription(id="s", name="  Hulu  ", provider=" Hulu LLC ", cost=0)
        assert sub.name == "  Hulu  "
        assert sub.provider == " Hulu LLC "

    def test_subscription_rejects_negative_cost(self):
        """Test that negative costs are rejected."""
        with pytest.raises(ValidationError):
            Subscription(id="s", name="Test", cost=-1)

    def test_subscription_rejects_unknown_category(self):
        """Test that categories are limited to the enumeration."""
        with pytest.raises(ValidationError):
            Subscription(id="s", name="Test", cost=100, category="pets")

    def test_subscription_usage_is_optional(self):
        """Test that usage frequency may be absent."""
        sub = Subscription(id="s", name="Test", cost=100)
        assert sub.usage_frequency is None

    def test_subscription_is_frozen(self):
        """Test that subscriptions cannot be mutated."""
        sub = Subscription(id="s", name="Test", cost=100)
        with pytest.raises(ValidationError):
            sub.cost = 200

    def test_priced_subscription_passthroughs(self):
        """Test PricedSubscription exposes id, name and category."""
        sub = Subscription(id="s1", name="Hulu", cost=799)
        priced = PricedSubscription(subscription=sub, monthly_cost=799.0)
        assert priced.id == "s1"
        assert priced.name == "Hulu"
        assert priced.category == SubscriptionCategory.OTHER


class TestConsolidationResult:
    """Tests for the engine output model."""

    def test_empty_result(self):
        """Test ConsolidationResult.empty()."""
        result = ConsolidationResult.empty()
        assert result.overlap_groups == []
        assert result.total_potential_savings == 0
        assert result.overlap_count == 0
        assert result.recommendations == []


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.CONSOLIDATION_REQUESTED,
            description="Review requested",
        )
        assert event.event_type == AuditEventType.CONSOLIDATION_REQUESTED
        assert event.severity == AuditSeverity.INFO
        assert event.timestamp.tzinfo is not None

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.SUBSCRIPTION_CANCELLED,
            entity_type="subscription",
            entity_id="sub_1",
            description="Subscription cancelled: Hulu",
            details={"monthly_cost": 799.0},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "subscription_cancelled"
        assert log_dict["entity_id"] == "sub_1"
        assert log_dict["details"]["monthly_cost"] == 799.0

    def test_audit_event_to_record(self):
        """Test conversion to a flat audit store record."""
        event = AuditEvent(
            event_type=AuditEventType.CONSOLIDATION_COMPLETED,
            description="Done",
            details={"overlap_count": 2},
            is_user_action=True,
        )
        record = event.to_record()
        assert record["event_type"] == "consolidation_completed"
        assert json.loads(record["details"]) == {"overlap_count": 2}
        assert record["entity_id"] == ""
        assert record["is_user_action"] is True

    def test_audit_event_builder_subscription_cancelled(self):
        """Test AuditEventBuilder.subscription_cancelled."""
        correlation_id = uuid4()
        event = AuditEventBuilder.subscription_cancelled(
            subscription_id="sub_9",
            user_id="user_1",
            name="Hulu",
            monthly_cost=799.0,
            correlation_id=correlation_id,
        )
        assert event.event_type == AuditEventType.SUBSCRIPTION_CANCELLED
        assert event.entity_id == "sub_9"
        assert event.correlation_id == correlation_id
        assert event.is_user_action is True

    def test_audit_event_builder_cancellation_failed(self):
        """Test AuditEventBuilder.cancellation_failed is a warning."""
        event = AuditEventBuilder.cancellation_failed(
            subscription_id="sub_9",
            user_id="user_1",
            reason="not active",
            correlation_id=uuid4(),
        )
        assert event.severity == AuditSeverity.WARNING
        assert event.error_message == "not active"


class TestEnums:
    """Tests for the enumerations."""

    def test_all_categories_exist(self):
        """Test that expected categories exist."""
        expected = [
            "entertainment", "productivity", "gaming", "education", "health",
            "finance", "utilities", "news", "social", "other",
        ]
        for cat in expected:
            assert SubscriptionCategory(cat) is not None

    def test_billing_cycles(self):
        """Test billing cycle values."""
        assert {c.value for c in BillingCycle} == {
            "monthly", "yearly", "weekly", "quarterly", "biannual",
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

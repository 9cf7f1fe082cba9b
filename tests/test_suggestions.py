"""Tests for savings suggestions and spending analytics."""

import pytest

from subtrack.config import ConsolidationSettings, SuggestionSettings
from subtrack.consolidation import (
    ConsolidationEngine,
    OverlapClassifier,
    SuggestionBuilder,
    detailed_spending,
    summarize_spending,
)
from subtrack.models.subscription import (
    BillingCycle,
    SubscriptionCategory,
    SuggestionType,
)


@pytest.fixture
def engine():
    return ConsolidationEngine(OverlapClassifier(settings=ConsolidationSettings()))


@pytest.fixture
def builder():
    return SuggestionBuilder(SuggestionSettings())


@pytest.fixture
def household(make_subscription):
    return [
        make_subscription("Netflix", cost=1599, usage_frequency="monthly"),
        make_subscription("Hulu", cost=799, usage_frequency="rarely"),
        make_subscription("Peloton", provider="Peloton Interactive", category="health",
                          cost=4400, usage_frequency="never"),
        make_subscription("Notion", provider="Notion Labs", category="productivity",
                          cost=1000, usage_frequency="daily"),
    ]


class TestSuggestionBuilder:
    def test_suggestion_order_and_types(self, engine, builder, household):
        result = engine.consolidate(household)
        suggestions = builder.build(household, result)

        assert [s.type for s in suggestions.suggestions] == [
            SuggestionType.CONSOLIDATION,
            SuggestionType.UNUSED,
            SuggestionType.ANNUAL,
        ]
        assert suggestions.overlap_count == 1
        assert suggestions.total_potential_savings == 799

    def test_consolidation_suggestion_carries_group(self, engine, builder, household):
        result = engine.consolidate(household)
        first = builder.build(household, result).suggestions[0]

        assert first.title == "Consolidate entertainment Services"
        assert first.message == "Keep Netflix and cancel 1 other to save $7.99/month"
        assert first.group is not None
        assert first.estimated_monthly_savings == 799

    def test_unused_suggestion(self, builder, household):
        unused = builder.unused_suggestions(household)

        assert [s.subscription.name for s in unused] == ["Peloton"]
        assert unused[0].title == "Consider Cancelling Peloton"
        assert unused[0].message == "You rarely use this service but pay $44.00/month"

    def test_unused_threshold_is_exclusive(self, builder, make_subscription):
        at_floor = make_subscription("Tidal", cost=1000, usage_frequency="rarely")
        assert builder.unused_suggestions([at_floor]) == []

    def test_unused_sorted_by_cost(self, builder, make_subscription):
        subs = [
            make_subscription("Cheap", cost=1200, usage_frequency="rarely"),
            make_subscription("Pricey", cost=36000, billing_cycle="yearly",
                              usage_frequency="never"),
        ]
        names = [s.subscription.name for s in builder.unused_suggestions(subs)]
        assert names == ["Pricey", "Cheap"]

    def test_missing_usage_is_not_flagged_unused(self, builder, make_subscription):
        sub = make_subscription("Mystery", cost=5000)
        assert builder.unused_suggestions([sub]) == []

    def test_annual_suggestion(self, builder, household):
        annual = builder.annual_suggestions(household)

        assert [s.subscription.name for s in annual] == ["Notion"]
        assert annual[0].title == "Switch Notion to Annual"
        assert annual[0].message == "Save ~$1.50/month by switching to annual billing"
        assert annual[0].estimated_monthly_savings == pytest.approx(150.0)

    def test_annual_requires_monthly_billing(self, builder, make_subscription):
        yearly = make_subscription("Notion", cost=9600, billing_cycle="yearly",
                                   usage_frequency="daily")
        assert builder.annual_suggestions([yearly]) == []

    def test_annual_discount_from_settings(self, make_subscription):
        builder = SuggestionBuilder(SuggestionSettings(annual_discount_rate=0.5))
        sub = make_subscription("Notion", cost=1000, usage_frequency="weekly")
        assert builder.annual_suggestions([sub])[0].estimated_monthly_savings == 500.0

    def test_inactive_subscriptions_ignored(self, engine, builder, make_subscription):
        subs = [make_subscription("Peloton", cost=4400, usage_frequency="never",
                                  status="paused")]
        suggestions = builder.build(subs, engine.consolidate(subs))
        assert suggestions.suggestions == []


class TestSpendingSummary:
    def test_summary(self, make_subscription):
        summary = summarize_spending([
            make_subscription("Netflix", cost=1599),
            make_subscription("Hulu", cost=12000, billing_cycle="yearly"),
            make_subscription("Notion", category="productivity", cost=900,
                              billing_cycle="quarterly"),
            make_subscription("Old", cost=5000, status="cancelled"),
        ])

        assert summary.total_subscriptions == 3
        assert summary.monthly_total == pytest.approx(2899.0)
        assert summary.yearly_total == pytest.approx(2899.0 * 12)
        assert summary.category_breakdown == {
            SubscriptionCategory.ENTERTAINMENT: pytest.approx(2599.0),
            SubscriptionCategory.PRODUCTIVITY: pytest.approx(300.0),
        }
        assert summary.average_per_subscription == pytest.approx(2899.0 / 3)

    def test_empty_summary(self):
        summary = summarize_spending([])
        assert summary.total_subscriptions == 0
        assert summary.monthly_total == 0
        assert summary.average_per_subscription == 0


class TestDetailedSpending:
    @pytest.fixture
    def portfolio(self, make_subscription):
        return [
            make_subscription("Netflix", cost=1599, usage_frequency="daily"),
            make_subscription("Hulu", cost=12000, billing_cycle="yearly",
                              usage_frequency="rarely"),
            make_subscription("Peloton", category="health", cost=4400,
                              usage_frequency="never"),
            make_subscription("Notion", category="productivity", cost=900,
                              billing_cycle="quarterly"),
            make_subscription("Calm", category="health", cost=100,
                              billing_cycle="weekly", usage_frequency="rarely"),
            make_subscription("Duolingo", category="education", cost=700,
                              usage_frequency="weekly"),
            make_subscription("Old Gym", category="health", cost=5000,
                              status="cancelled"),
            make_subscription("Audible", cost=2400, billing_cycle="yearly",
                              status="cancelled"),
            make_subscription("Paused", cost=999, status="paused"),
        ]

    def test_totals_match_summary(self, portfolio):
        detail = detailed_spending(portfolio)
        summary = summarize_spending(portfolio)

        assert detail.total_subscriptions == summary.total_subscriptions == 6
        assert detail.monthly_total == pytest.approx(8432.0)
        assert detail.yearly_total == pytest.approx(summary.yearly_total)
        assert detail.category_breakdown == summary.category_breakdown

    def test_cancelled_count_and_savings(self, portfolio):
        detail = detailed_spending(portfolio)
        assert detail.cancelled_subscriptions == 2
        assert detail.potential_savings == pytest.approx(5200.0)

    def test_usage_analysis_counts_missing_as_unknown(self, portfolio):
        assert detailed_spending(portfolio).usage_analysis == {
            "daily": 1,
            "rarely": 2,
            "never": 1,
            "unknown": 1,
            "weekly": 1,
        }

    def test_billing_cycle_analysis(self, portfolio):
        assert detailed_spending(portfolio).billing_cycle_analysis == {
            BillingCycle.MONTHLY: 3,
            BillingCycle.YEARLY: 1,
            BillingCycle.QUARTERLY: 1,
            BillingCycle.WEEKLY: 1,
        }

    def test_most_expensive_is_top_five_by_monthly_cost(self, portfolio):
        detail = detailed_spending(portfolio)
        assert [p.name for p in detail.most_expensive] == [
            "Peloton", "Netflix", "Hulu", "Duolingo", "Calm",
        ]
        assert detail.most_expensive[2].monthly_cost == pytest.approx(1000.0)

    def test_underutilized_sorted_by_monthly_cost(self, portfolio):
        detail = detailed_spending(portfolio)
        assert [p.name for p in detail.underutilized] == ["Peloton", "Hulu", "Calm"]

    def test_empty(self):
        detail = detailed_spending([])
        assert detail.total_subscriptions == 0
        assert detail.cancelled_subscriptions == 0
        assert detail.usage_analysis == {}
        assert detail.most_expensive == []
        assert detail.potential_savings == 0

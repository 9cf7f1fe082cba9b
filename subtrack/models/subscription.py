"""
Core Data Models for Subscription Tracker

These models define the schemas for everything flowing through the
consolidation engine:
1. Subscription records as returned by the record store
2. Derived, per-invocation values (monthly cost, overlap edges)
3. Engine output consumed by the presentation layer

DESIGN DECISION: Input records are frozen. The engine reads subscriptions,
it never mutates them. Derived values live on separate models.
"""

from enum import Enum
from typing import Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class SubscriptionCategory(str, Enum):
    """Supported subscription categories."""
    ENTERTAINMENT = "entertainment"
    PRODUCTIVITY = "productivity"
    GAMING = "gaming"
    EDUCATION = "education"
    HEALTH = "health"
    FINANCE = "finance"
    UTILITIES = "utilities"
    NEWS = "news"
    SOCIAL = "social"
    OTHER = "other"


class BillingCycle(str, Enum):
    """How often a subscription is billed."""
    MONTHLY = "monthly"
    YEARLY = "yearly"
    WEEKLY = "weekly"
    QUARTERLY = "quarterly"
    BIANNUAL = "biannual"


class SubscriptionStatus(str, Enum):
    """
    Subscription lifecycle status.

    Only ACTIVE subscriptions take part in overlap detection.
    """
    ACTIVE = "active"
    CANCELLED = "cancelled"
    PAUSED = "paused"
    TRIAL = "trial"


class UsageFrequency(str, Enum):
    """Self-reported usage frequency."""
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    RARELY = "rarely"
    NEVER = "never"


class SuggestionType(str, Enum):
    """Kinds of savings suggestions shown to the user."""
    CONSOLIDATION = "consolidation"
    UNUSED = "unused"
    ANNUAL = "annual"


# =============================================================================
# SUBSCRIPTION RECORD
# =============================================================================

class Subscription(BaseModel):
    """
    A subscription as stored in the record store.

    Accepts both the store's camelCase keys (``billingCycle``, ``_id``)
    and snake_case field names.

    ``cost`` is always in minor currency units (e.g. cents). ``name`` and
    ``provider`` are kept exactly as the store sent them.
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(
        ...,
        validation_alias=AliasChoices("id", "_id"),
        description="Record store identifier"
    )
    user_id: Optional[str] = Field(
        default=None,
        description="Owner of the subscription"
    )
    name: str = Field(
        ...,
        description="Service name, free text (e.g. 'Netflix')"
    )
    provider: str = Field(
        default="",
        description="Provider name, free text (e.g. 'Netflix Inc.')"
    )
    category: SubscriptionCategory = Field(
        default=SubscriptionCategory.OTHER,
    )
    cost: int = Field(
        ...,
        ge=0,
        description="Cost per billing cycle in minor currency units"
    )
    currency: str = Field(
        default="USD",
        description="ISO 4217 currency code"
    )
    billing_cycle: BillingCycle = Field(
        default=BillingCycle.MONTHLY,
    )
    status: SubscriptionStatus = Field(
        default=SubscriptionStatus.ACTIVE,
    )
    usage_frequency: Optional[UsageFrequency] = Field(
        default=None,
        description="Missing means the user never reported usage"
    )

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE


class PricedSubscription(BaseModel):
    """A subscription with its monthly cost attached for one engine run."""

    subscription: Subscription
    monthly_cost: float = Field(
        ...,
        ge=0,
        description="Cost normalized to one month, unrounded"
    )

    @property
    def id(self) -> str:
        return self.subscription.id

    @property
    def name(self) -> str:
        return self.subscription.name

    @property
    def category(self) -> SubscriptionCategory:
        return self.subscription.category


# =============================================================================
# ENGINE OUTPUT
# =============================================================================

class OverlapEdge(BaseModel):
    """
    A scored pair of subscriptions.

    Only pairs with ``is_overlap`` set take part in grouping. Below the
    threshold, score and reason carry no meaning.
    """

    first: Subscription
    second: Subscription
    score: float = Field(..., ge=0.0)
    reason: Optional[str] = None
    is_overlap: bool = False


class OverlapGroup(BaseModel):
    """
    A cluster of overlapping subscriptions.

    ``services`` is sorted by usage priority (descending) then monthly cost
    (ascending). ``recommended`` is the first of them, ``to_cancel`` the rest.
    """

    category: SubscriptionCategory
    services: list[PricedSubscription] = Field(default_factory=list)
    recommended: PricedSubscription
    to_cancel: list[PricedSubscription] = Field(default_factory=list)
    potential_savings: float = Field(
        default=0.0,
        ge=0.0,
        description="Monthly savings in minor units if to_cancel is cancelled"
    )
    overlap_reason: str


class Recommendation(BaseModel):
    """Human-readable suggestion for one overlap group."""

    type: SuggestionType = SuggestionType.CONSOLIDATION
    title: str
    message: str
    actionable: bool = True
    group: OverlapGroup


class ConsolidationResult(BaseModel):
    """Full output of one consolidation run."""

    overlap_groups: list[OverlapGroup] = Field(default_factory=list)
    total_potential_savings: float = Field(default=0.0, ge=0.0)
    overlap_count: int = Field(default=0, ge=0)
    recommendations: list[Recommendation] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "ConsolidationResult":
        return cls()


# =============================================================================
# SUGGESTIONS & ANALYTICS
# =============================================================================

class Suggestion(BaseModel):
    """
    A single savings suggestion.

    Consolidation suggestions carry the group, the others carry the
    subscription they are about.
    """

    type: SuggestionType
    title: str
    message: str
    actionable: bool = True
    estimated_monthly_savings: float = Field(default=0.0, ge=0.0)
    group: Optional[OverlapGroup] = None
    subscription: Optional[PricedSubscription] = None


class ConsolidationSuggestions(BaseModel):
    """All suggestions for one user, with overlap-only totals."""

    suggestions: list[Suggestion] = Field(default_factory=list)
    total_potential_savings: float = Field(default=0.0, ge=0.0)
    overlap_count: int = Field(default=0, ge=0)


class SpendingSummary(BaseModel):
    """Monthly and yearly spend over active subscriptions."""

    total_subscriptions: int = Field(default=0, ge=0)
    monthly_total: float = Field(default=0.0, ge=0.0)
    yearly_total: float = Field(default=0.0, ge=0.0)
    category_breakdown: dict[SubscriptionCategory, float] = Field(
        default_factory=dict
    )
    average_per_subscription: float = Field(default=0.0, ge=0.0)


class DetailedSpendingSummary(SpendingSummary):
    """
    SpendingSummary plus the breakdowns behind the analytics screen.

    ``usage_analysis`` is keyed by usage frequency value, with ``"unknown"``
    for subscriptions that have none. ``potential_savings`` is the monthly
    cost already saved by cancelled subscriptions.
    """

    cancelled_subscriptions: int = Field(default=0, ge=0)
    usage_analysis: dict[str, int] = Field(default_factory=dict)
    billing_cycle_analysis: dict[BillingCycle, int] = Field(default_factory=dict)
    most_expensive: list[PricedSubscription] = Field(default_factory=list)
    underutilized: list[PricedSubscription] = Field(default_factory=list)
    potential_savings: float = Field(default=0.0, ge=0.0)

"""Shared fixtures for the subscription tracker test suite."""

import itertools

import pytest

from subtrack.config import get_settings
from subtrack.models.subscription import Subscription


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Clears the settings cache before and after each test for isolation."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_subscription():
    """Factory for Subscription records with sensible defaults."""
    ids = itertools.count(1)

    def _make(
        name: str,
        provider: str = "",
        category: str = "entertainment",
        cost: int = 999,
        billing_cycle: str = "monthly",
        usage_frequency=None,
        status: str = "active",
        user_id: str = "user_1",
        **overrides,
    ) -> Subscription:
        return Subscription(
            id=overrides.pop("id", f"sub_{next(ids)}"),
            user_id=user_id,
            name=name,
            provider=provider or f"{name} Inc.",
            category=category,
            cost=cost,
            billing_cycle=billing_cycle,
            usage_frequency=usage_frequency,
            status=status,
            **overrides,
        )

    return _make

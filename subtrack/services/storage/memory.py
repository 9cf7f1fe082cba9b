"""
In-Memory Storage Implementation

Reference implementation of the storage interfaces. Used by the test
suite and for local runs without the hosted record store.

Records are kept per user in insertion order.
"""

from typing import Any, Optional
from uuid import UUID

from pydantic import ValidationError

from subtrack.models.audit import AuditEvent
from subtrack.models.subscription import Subscription, SubscriptionStatus
from subtrack.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    StorageError,
    SubscriptionStorageInterface,
)


# Field names and store aliases of the keys a record is filed under.
IDENTITY_KEYS = frozenset({"id", "_id", "user_id", "userId"})


class InMemorySubscriptionStorage(SubscriptionStorageInterface):
    """Subscriptions held in a dict of dicts: user_id -> id -> record."""

    def __init__(self, subscriptions: Optional[list[Subscription]] = None):
        self._records: dict[str, dict[str, Subscription]] = {}
        for subscription in subscriptions or []:
            self._insert(subscription)

    def _insert(self, subscription: Subscription) -> Subscription:
        if not subscription.user_id:
            raise StorageError(
                f"Subscription {subscription.id} has no user_id"
            )
        user_records = self._records.setdefault(subscription.user_id, {})
        if subscription.id in user_records:
            raise DuplicateError(
                f"Subscription {subscription.id} already exists for user {subscription.user_id}"
            )
        user_records[subscription.id] = subscription
        return subscription

    async def list_subscriptions(
        self,
        user_id: str,
        status: Optional[SubscriptionStatus] = None,
    ) -> list[Subscription]:
        records = self._records.get(user_id, {}).values()
        if status is None:
            return list(records)
        return [sub for sub in records if sub.status == status]

    async def get_subscription(
        self,
        user_id: str,
        subscription_id: str,
    ) -> Optional[Subscription]:
        return self._records.get(user_id, {}).get(subscription_id)

    async def insert_subscription(self, subscription: Subscription) -> Subscription:
        return self._insert(subscription)

    async def patch_subscription(
        self,
        user_id: str,
        subscription_id: str,
        changes: dict[str, Any],
    ) -> Subscription:
        current = await self.get_subscription(user_id, subscription_id)
        if current is None:
            raise NotFoundError(
                f"Subscription {subscription_id} not found for user {user_id}"
            )
        if IDENTITY_KEYS.intersection(changes):
            raise StorageError("Subscription identity cannot be patched")

        try:
            updated = Subscription.model_validate(
                {**current.model_dump(), **changes}
            )
        except ValidationError as e:
            raise StorageError(f"Invalid patch for {subscription_id}: {e}") from e

        # Replacing the value keeps the key's position in insertion order.
        self._records[user_id][subscription_id] = updated
        return updated

    async def delete_subscription(
        self,
        user_id: str,
        subscription_id: str,
    ) -> bool:
        return self._records.get(user_id, {}).pop(subscription_id, None) is not None


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only list of audit events."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        return [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]

"""
Record store and audit store boundaries

DESIGN DECISION: The subscription record store is an external service. We
define the operations we need from it as an abstract interface so that:
1. Business logic never depends on a particular backend
2. Tests use in-memory storage
3. The hosted database can be swapped without touching the engine

The interface is intentionally small: query, insert, patch and delete,
keyed by user and id.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
from uuid import UUID

from subtrack.models.audit import AuditEvent
from subtrack.models.subscription import Subscription, SubscriptionStatus


class SubscriptionStorageInterface(ABC):
    """
    Abstract interface for subscription record storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    async def list_subscriptions(
        self,
        user_id: str,
        status: Optional[SubscriptionStatus] = None,
    ) -> list[Subscription]:
        """
        List a user's subscriptions.

        Args:
            user_id: Owner of the subscriptions
            status: Only return subscriptions with this status

        Returns:
            Subscriptions in insertion order. The consolidation engine is
            order-sensitive, so implementations must keep this order stable.

        Raises:
            ConnectionError: If the backend is unreachable
        """
        pass

    @abstractmethod
    async def get_subscription(
        self,
        user_id: str,
        subscription_id: str,
    ) -> Optional[Subscription]:
        """
        Retrieve one subscription.

        Returns:
            The subscription if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert_subscription(self, subscription: Subscription) -> Subscription:
        """
        Insert a new subscription.

        Raises:
            DuplicateError: If the id is already taken for this user
            StorageError: If the subscription has no owner
        """
        pass

    @abstractmethod
    async def patch_subscription(
        self,
        user_id: str,
        subscription_id: str,
        changes: dict[str, Any],
    ) -> Subscription:
        """
        Apply a partial update.

        Args:
            changes: Field name -> new value

        Returns:
            The updated subscription

        Raises:
            NotFoundError: If the subscription doesn't exist
        """
        pass

    @abstractmethod
    async def delete_subscription(
        self,
        user_id: str,
        subscription_id: str,
    ) -> bool:
        """
        Delete a subscription.

        Returns:
            True if something was deleted
        """
        pass


class AuditStorageInterface(ABC):
    """Append-only store for AuditEvent records."""

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """Store one event. Returns True once it is persisted."""
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """Events of one user action, in chronological order."""
        pass

    @abstractmethod
    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """Events about one entity, in chronological order."""
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """Most recent events, newest first."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass

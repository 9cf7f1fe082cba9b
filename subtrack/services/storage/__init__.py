"""
Storage Services Package

Provides abstract interfaces for the subscription record store and the
audit log, plus in-memory implementations.
"""

from subtrack.services.storage.interface import (
    AuditStorageInterface,
    ConnectionError,
    DuplicateError,
    NotFoundError,
    StorageError,
    SubscriptionStorageInterface,
)
from subtrack.services.storage.memory import (
    InMemoryAuditStorage,
    InMemorySubscriptionStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "SubscriptionStorageInterface",
    # Exceptions
    "ConnectionError",
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemorySubscriptionStorage",
]

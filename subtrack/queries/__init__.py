"""Query execution package."""

from subtrack.queries.executor import QueryExecutionError, SubscriptionQueryExecutor

__all__ = ["QueryExecutionError", "SubscriptionQueryExecutor"]

"""
Subscription Tracker - Source Package

Overlap detection and consolidation advice for a user's recurring
subscriptions.

DESIGN PRINCIPLES:
1. The engine is pure: subscriptions in, suggestions out
2. Cancellations happen only after explicit user confirmation
3. Every review and cancellation is auditable
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Subscription Tracker Team"

from subtrack import log_config  # noqa: F401  configures structlog on import

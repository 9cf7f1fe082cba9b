"""
Structured logging setup.

Imported by the package itself, so structlog is configured before any
module asks for a logger. Events go through stdlib logging and are dropped
below the root logger's level; nothing is written until the application
calls configure_logging().
"""

import logging

import structlog

from subtrack.config import get_settings


# JSON lines through stdlib logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def effective_log_level() -> str:
    """DEBUG in debug mode, otherwise the configured log level."""
    app = get_settings().app
    return "DEBUG" if app.debug_mode else app.log_level


def configure_logging() -> None:
    """Send log lines to stderr at the effective level."""
    logging.basicConfig(
        level=effective_log_level(),
        format="%(message)s",
    )

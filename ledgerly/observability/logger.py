"""
Structured Logging

Every smart entry is logged as a small set of structured events bound
to one correlation id, so all lines for one entry can be pulled together:
- smart_entry_received
- amount_not_found / configuration_gap (on rejection)
- smart_entry_warning (per sanity-check warning)
- smart_entry_posted
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

_configured = False


def configure_logging(level: str = "INFO", json_logs: bool = True, force: bool = False) -> None:
    """
    Configure structlog on top of stdlib logging.

    Idempotent: later calls are ignored unless force=True.
    """
    global _configured
    if _configured and not force:
        return

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
        force=force,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer()
    )

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
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related log events.

    Use this at the start of a smart entry and bind it to every
    log line produced while handling that entry.
    """
    return uuid4()

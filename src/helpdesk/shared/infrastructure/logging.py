"""
Structured Logging
==================

JSON logs on stdout, stamped with the request in flight.

The HTTP middleware binds a correlation id and the caller department for
each request; every record logged while that request runs carries both,
so service code only passes its own fields in ``extra``.

Usage:
    from helpdesk.shared.infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Ticket created", extra={"ticket_id": "TICK-1700000000000-AB12C"})
"""

import logging
import sys
import time
from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

REDACTED = "***REDACTED***"
SENSITIVE_KEYS = ("password", "secret", "api_key")

_request_context: ContextVar[Dict[str, Optional[str]]] = ContextVar("request_context", default={})


# ========== Request context ==========

def bind_request_context(correlation_id: str, department: Optional[str] = None) -> Token:
    """Attach request fields to log records until ``reset_request_context``."""
    return _request_context.set({"correlation_id": correlation_id, "department": department})


def reset_request_context(token: Token) -> None:
    _request_context.reset(token)


def current_correlation_id() -> Optional[str]:
    return _request_context.get().get("correlation_id")


class RequestContextFilter(logging.Filter):
    """Copies the bound request fields onto records that do not set them."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _request_context.get().items():
            if value is not None and not hasattr(record, key):
                setattr(record, key, value)
        return True


# ========== Formatting ==========

class HelpdeskJsonFormatter(JsonFormatter):
    """JSON formatter adding a UTC timestamp and masking secret-looking fields."""

    def add_fields(
        self,
        log_data: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_data, record, message_dict)
        log_data.setdefault("timestamp", datetime.now(timezone.utc).isoformat())

        for key, value in list(log_data.items()):
            if isinstance(value, str) and any(s in key.lower() for s in SENSITIVE_KEYS):
                log_data[key] = REDACTED


def setup_logging(
    level: str = "INFO",
    environment: str = "development",
) -> None:
    """
    Route all logging to one JSON handler on stdout.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        environment: Added to every record as ``environment``
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(
        HelpdeskJsonFormatter(
            fmt="%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
            static_fields={"environment": environment},
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for noisy in ("uvicorn.access", "sqlalchemy.engine", "apscheduler"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


@contextmanager
def log_latency(logger: logging.Logger, operation: str, **extra_context: Any):
    """
    Log ``"<operation> completed"`` with ``latency_ms`` when the block exits.

    Usage:
        with log_latency(logger, "sla_sweep"):
            tickets = await repo.list_open()
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.info(
            f"{operation} completed",
            extra={
                "operation": operation,
                "latency_ms": round((time.perf_counter() - start) * 1000, 2),
                **extra_context,
            },
        )

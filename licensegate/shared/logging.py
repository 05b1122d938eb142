"""
Structured logging configuration for licensegate.
"""

import sys
import logging
import time
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional

import structlog

from .config import get_settings

# Realm of the validation currently in flight, attached to every log event.
realm_var: ContextVar[Optional[str]] = ContextVar("realm", default=None)


def configure_logging(log_level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
    """Configure structured logging for the host application.

    Unset arguments fall back to ``LICENSEGATE_LOG_LEVEL`` and ``LICENSEGATE_LOG_JSON``.
    """
    settings = get_settings()
    log_level = log_level or settings.log_level
    if json_output is None:
        json_output = settings.log_json

    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()

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
            add_component_context,
            add_realm_context,
            add_timestamp,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )


def add_component_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add the emitting component (second segment of the logger name)."""
    logger_name = event_dict.get("logger", "")
    parts = logger_name.split(".")
    if len(parts) > 1:
        event_dict["component"] = parts[1]

    return event_dict


def add_realm_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add the realm being validated, if any."""
    realm = realm_var.get()
    if realm:
        event_dict.setdefault("realm", realm)

    return event_dict


def add_timestamp(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add high-precision timestamp to log events."""
    event_dict["timestamp"] = time.time()
    return event_dict


@contextmanager
def realm_context(realm: Optional[str]) -> Iterator[None]:
    """Attach ``realm`` to log events emitted inside the block."""
    token = realm_var.set(realm)
    try:
        yield
    finally:
        realm_var.reset(token)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)

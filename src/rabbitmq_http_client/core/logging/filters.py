"""
Log filters: correlation ids and static extra fields.

The correlation id lives in a ContextVar rather than thread-local storage:
each asyncio task gets its own copy, so concurrent AsyncClient calls on one
thread keep their ids apart.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Dict, Any, Optional

_correlation_id: ContextVar[Optional[str]] = ContextVar("rabbitmq_http_client_correlation_id", default=None)


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation id for the current thread or task."""
    _correlation_id.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set(None)


def new_correlation_id() -> str:
    """Generate and set a fresh correlation id, returning it."""
    correlation_id = uuid.uuid4().hex[:16]
    set_correlation_id(correlation_id)
    return correlation_id


class CorrelationIdFilter(logging.Filter):
    """Copies the current correlation id onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        correlation_id = get_correlation_id()
        if correlation_id:
            record.correlation_id = correlation_id
        return True


class ExtraFieldsFilter(logging.Filter):
    """
    Adds static fields to all records without overriding per-call extras.

    Example:
        >>> handler.addFilter(ExtraFieldsFilter({"service": "topology-sync"}))
    """

    def __init__(self, extra_fields: Dict[str, Any]):
        super().__init__()
        self.extra_fields = dict(extra_fields)

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in self.extra_fields.items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True

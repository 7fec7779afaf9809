"""Request context: correlation_id for tracing a request through the logs."""

from __future__ import annotations

import uuid
from contextvars import ContextVar

_correlation_id: ContextVar[str | None] = ContextVar("request_correlation_id", default=None)


def set_correlation_id(correlation_id: str | None) -> None:
    """Set correlation_id for the current context (e.g. an API request or CLI run)."""
    _correlation_id.set(correlation_id)


def get_correlation_id() -> str | None:
    """Return current correlation_id, or None outside a request."""
    return _correlation_id.get()


def new_correlation_id() -> str:
    return str(uuid.uuid4())

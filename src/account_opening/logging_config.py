"""Structured logging setup - PII redaction for customer and notification data."""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

from account_opening.request_context import get_correlation_id

# Log only ids, never personal data submitted on the account-opening forms
PII_REDACT_KEYS = frozenset(
    {
        "email",
        "first_name",
        "last_name",
        "phone_number",
        "address",
        "identification_number",
        "recipient",
    }
)
PII_KEY_PATTERN = re.compile(
    r"(\b" + "|".join(re.escape(k) for k in sorted(PII_REDACT_KEYS)) + r")\s*[=:]\s*[^\s,\)\]]+",
    re.IGNORECASE,
)


def _redact_message(msg: Any) -> str:
    """Replace PII key=value or key: value in message with [REDACTED]."""
    if not isinstance(msg, str):
        return str(msg)
    return PII_KEY_PATTERN.sub(r"\1=[REDACTED]", msg)


class PIIRedactionFilter(logging.Filter):
    """Filter that redacts PII from log records (message and args)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = _redact_message(record.msg)
        if getattr(record, "args", None) and isinstance(record.args, tuple | dict):
            if isinstance(record.args, tuple):
                record.args = tuple(_redact_message(str(a)) for a in record.args)
            else:
                record.args = {
                    k: "[REDACTED]" if k.lower() in PII_REDACT_KEYS else v
                    for k, v in record.args.items()
                }
        return True


class CorrelationIdFilter(logging.Filter):
    """Attach the current request's correlation id to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def setup_logging(log_level: str = "INFO") -> None:
    """Configure root logger: stdout, correlation id, PII redaction filter."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(correlation_id)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
        stream=sys.stdout,
        force=True,
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(CorrelationIdFilter())
        handler.addFilter(PIIRedactionFilter())
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

"""Tests for PII redaction and correlation ids in log records."""

import logging

from account_opening.logging_config import CorrelationIdFilter, PIIRedactionFilter
from account_opening.request_context import set_correlation_id


def _record(msg: str, args: tuple | dict | None = None) -> logging.LogRecord:
    return logging.LogRecord("account_opening.test", logging.INFO, __file__, 1, msg, args, None)


def test_redacts_pii_key_value_pairs() -> None:
    record = _record("new applicant email=john.doe@example.com phone_number: +15550100 id=7")
    PIIRedactionFilter().filter(record)
    assert "john.doe@example.com" not in record.getMessage()
    assert "+15550100" not in record.getMessage()
    assert "email=[REDACTED]" in record.getMessage()
    assert "id=7" in record.getMessage()


def test_plain_prose_is_left_alone() -> None:
    record = _record("Customer with this email already exists")
    PIIRedactionFilter().filter(record)
    assert record.getMessage() == "Customer with this email already exists"


def test_redacts_mapping_args() -> None:
    record = _record("%(recipient)s <- %(type)s", ({"recipient": "a@b.com", "type": "EMAIL"},))
    PIIRedactionFilter().filter(record)
    assert record.getMessage() == "[REDACTED] <- EMAIL"


def test_correlation_id_attached() -> None:
    set_correlation_id("cid-123")
    try:
        record = _record("hello")
        CorrelationIdFilter().filter(record)
        assert record.correlation_id == "cid-123"
    finally:
        set_correlation_id(None)
    record = _record("hello")
    CorrelationIdFilter().filter(record)
    assert record.correlation_id == "-"

"""Field validation for incoming payloads.

Each ``validate_*`` function inspects a create payload and returns the full
list of :class:`FieldViolation` found; an empty list means the payload is
acceptable. Nothing here raises: the API layer collects the violations first
and rejects the request with a 400 in one go.

Field names in violations are the JSON (camelCase) names clients send.
"""

from __future__ import annotations

from account_opening.errors import FieldViolation
from account_opening.schemas import (
    AccountCreate,
    CustomerCreate,
    DocumentCreate,
    NotificationCreate,
)

MUST_NOT_BE_BLANK = "must not be blank"
MUST_BE_EMAIL = "must be a well-formed email address"

_EMAIL_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")
# IPv4 dotted quads and "IPv6:" literals
_DOMAIN_LITERAL_CHARS = frozenset("0123456789abcdefABCDEF.:IPv")


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_valid_email(email: str) -> bool:
    """Structural email check: one @, non-empty local part and domain, no forbidden characters.

    The domain may be a bare host name (``admin@localhost``) or a bracketed
    address literal (``admin@[192.168.0.1]``).
    """
    if any(c.isspace() for c in email):
        return False
    if email.count("@") != 1:
        return False
    local_part, domain_part = email.split("@", 1)
    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False
    if ".." in local_part or any(c in local_part for c in _EMAIL_FORBIDDEN):
        return False
    if domain_part.startswith("[") and domain_part.endswith("]"):
        literal = domain_part[1:-1]
        return bool(literal) and all(c in _DOMAIN_LITERAL_CHARS for c in literal)
    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False
    if ".." in domain_part:
        return False
    for label in domain_part.split("."):
        if label.startswith("-") or label.endswith("-"):
            return False
    return not any(c in domain_part for c in _EMAIL_FORBIDDEN)


def _require(violations: list[FieldViolation], field: str, value: str | None) -> None:
    if is_blank(value):
        violations.append(FieldViolation(field, MUST_NOT_BE_BLANK))


def validate_account(payload: AccountCreate) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    _require(violations, "accountNumber", payload.account_number)
    _require(violations, "accountType", payload.account_type)
    return violations


def validate_customer(payload: CustomerCreate) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    _require(violations, "firstName", payload.first_name)
    _require(violations, "lastName", payload.last_name)
    if is_blank(payload.email):
        violations.append(FieldViolation("email", MUST_NOT_BE_BLANK))
    elif not is_valid_email(payload.email or ""):
        violations.append(FieldViolation("email", MUST_BE_EMAIL))
    return violations


def validate_document(payload: DocumentCreate) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    _require(violations, "type", payload.type)
    _require(violations, "fileName", payload.file_name)
    return violations


def validate_notification(payload: NotificationCreate) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    _require(violations, "recipient", payload.recipient)
    _require(violations, "message", payload.message)
    return violations

"""Pydantic v2 schemas for the API wire format.

Clients send and receive camelCase field names (``accountNumber``,
``kycVerified``); snake_case is accepted on input as well. Create payloads
declare every field optional so that missing and blank values are both
reported by :mod:`account_opening.validation` rather than by type parsing.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

_WIRE_CONFIG: dict[str, Any] = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "from_attributes": True,
}


# --- Account ---
class AccountCreate(BaseModel):
    """Body for POST /api/accounts. ``active`` is accepted but always forced to true."""

    account_number: str | None = None
    account_type: str | None = None
    balance: float | None = None
    customer_id: int | None = None
    active: bool | None = None

    model_config = _WIRE_CONFIG


class AccountResponse(BaseModel):
    id: int
    account_number: str
    account_type: str
    balance: float | None = None
    customer_id: int | None = None
    active: bool

    model_config = _WIRE_CONFIG


# --- Customer ---
class CustomerCreate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    address: str | None = None
    identification_number: str | None = None
    identification_type: str | None = None
    kyc_verified: bool | None = None

    model_config = _WIRE_CONFIG


class CustomerResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone_number: str | None = None
    address: str | None = None
    identification_number: str | None = None
    identification_type: str | None = None
    kyc_verified: bool = False

    model_config = _WIRE_CONFIG


# --- Document ---
class DocumentCreate(BaseModel):
    type: str | None = None
    file_name: str | None = None
    file_url: str | None = None
    customer_id: int | None = None
    verified: bool | None = None

    model_config = _WIRE_CONFIG


class DocumentResponse(BaseModel):
    id: int
    type: str
    file_name: str
    file_url: str | None = None
    customer_id: int | None = None
    verified: bool = False

    model_config = _WIRE_CONFIG


# --- Notification ---
class NotificationCreate(BaseModel):
    """Body for POST /api/notifications. ``sent`` is accepted but always forced to true."""

    recipient: str | None = None
    message: str | None = None
    type: str | None = None
    sent: bool | None = None

    model_config = _WIRE_CONFIG


class NotificationResponse(BaseModel):
    id: int
    recipient: str
    message: str
    type: str | None = None
    sent: bool

    model_config = _WIRE_CONFIG


# --- Errors / health ---
class FieldViolationResponse(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error body shared by every service: HTTP status, reason phrase, detail."""

    status: int
    error: str
    message: str
    path: str | None = None
    violations: list[FieldViolationResponse] = []


class HealthResponse(BaseModel):
    status: str
    version: str
    services: list[str]
    config_hash: str
    db_status: str

"""Account service routes: /api/accounts."""

from __future__ import annotations

from fastapi import APIRouter
from sqlalchemy.orm import Session

from account_opening.db import session_scope
from account_opening.errors import ValidationFailure
from account_opening.repository import account_repository
from account_opening.schemas import AccountCreate, AccountResponse
from account_opening.services import AccountService
from account_opening.validation import validate_account

accounts_router = APIRouter(prefix="/api/accounts", tags=["accounts"])


def _service(session: Session) -> AccountService:
    return AccountService(account_repository(session))


@accounts_router.post("", response_model=AccountResponse)
def create_account(body: AccountCreate) -> AccountResponse:
    """Open an account. Duplicate account numbers are rejected."""
    violations = validate_account(body)
    if violations:
        raise ValidationFailure(violations)
    with session_scope() as session:
        return AccountResponse.model_validate(_service(session).create_account(body))


@accounts_router.get("", response_model=list[AccountResponse])
def list_accounts() -> list[AccountResponse]:
    with session_scope() as session:
        return [AccountResponse.model_validate(a) for a in _service(session).list_accounts()]


@accounts_router.get("/customer/{customer_id}", response_model=list[AccountResponse])
def get_accounts_by_customer(customer_id: int) -> list[AccountResponse]:
    """Accounts held by a customer; empty list when there are none."""
    with session_scope() as session:
        accounts = _service(session).get_accounts_by_customer(customer_id)
        return [AccountResponse.model_validate(a) for a in accounts]


@accounts_router.get("/{account_id}", response_model=AccountResponse)
def get_account(account_id: int) -> AccountResponse:
    with session_scope() as session:
        return AccountResponse.model_validate(_service(session).get_account(account_id))


@accounts_router.put("/{account_id}/close", response_model=AccountResponse)
def close_account(account_id: int) -> AccountResponse:
    """Mark the account inactive. Closing a closed account is allowed."""
    with session_scope() as session:
        return AccountResponse.model_validate(_service(session).close_account(account_id))

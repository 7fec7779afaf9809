"""Customer service routes: /api/customers."""

from __future__ import annotations

from fastapi import APIRouter, Query
from sqlalchemy.orm import Session

from account_opening.db import session_scope
from account_opening.errors import ValidationFailure
from account_opening.repository import customer_repository
from account_opening.schemas import CustomerCreate, CustomerResponse
from account_opening.services import CustomerService
from account_opening.validation import validate_customer

customers_router = APIRouter(prefix="/api/customers", tags=["customers"])


def _service(session: Session) -> CustomerService:
    return CustomerService(customer_repository(session))


@customers_router.post("", response_model=CustomerResponse)
def create_customer(body: CustomerCreate) -> CustomerResponse:
    """Register a customer. Email must be well-formed and not already registered."""
    violations = validate_customer(body)
    if violations:
        raise ValidationFailure(violations)
    with session_scope() as session:
        return CustomerResponse.model_validate(_service(session).create_customer(body))


@customers_router.get("", response_model=list[CustomerResponse])
def list_customers() -> list[CustomerResponse]:
    with session_scope() as session:
        return [CustomerResponse.model_validate(c) for c in _service(session).list_customers()]


@customers_router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: int) -> CustomerResponse:
    with session_scope() as session:
        return CustomerResponse.model_validate(_service(session).get_customer(customer_id))


@customers_router.put("/{customer_id}/kyc", response_model=CustomerResponse)
def update_kyc_status(
    customer_id: int,
    verified: bool = Query(..., description="New KYC verification status"),
) -> CustomerResponse:
    with session_scope() as session:
        customer = _service(session).update_kyc_status(customer_id, verified)
        return CustomerResponse.model_validate(customer)

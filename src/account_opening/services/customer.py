"""Customer service: unique email, KYC status flag."""

from __future__ import annotations

from logging import getLogger

from account_opening.errors import DuplicateKeyError, NotFoundError
from account_opening.models import Customer
from account_opening.repository import SqlAlchemyRepository
from account_opening.schemas import CustomerCreate

logger = getLogger(__name__)


class CustomerService:
    def __init__(self, repository: SqlAlchemyRepository[Customer]) -> None:
        self.repository = repository

    def create_customer(self, candidate: CustomerCreate) -> Customer:
        if self.repository.exists_by("email", candidate.email):
            raise DuplicateKeyError("Customer", "email", candidate.email)
        customer = Customer(
            **candidate.model_dump(exclude={"kyc_verified"}),
            kyc_verified=bool(candidate.kyc_verified),
        )
        customer = self.repository.save(customer)
        logger.info("Created customer id=%s", customer.id)
        return customer

    def get_customer(self, customer_id: int) -> Customer:
        customer = self.repository.find_by_id(customer_id)
        if customer is None:
            raise NotFoundError("Customer", customer_id)
        return customer

    def list_customers(self) -> list[Customer]:
        return self.repository.find_all()

    def update_kyc_status(self, customer_id: int, verified: bool) -> Customer:
        """Set kyc_verified; repeating the same value is a no-op change."""
        customer = self.get_customer(customer_id)
        customer.kyc_verified = verified
        customer = self.repository.save(customer)
        logger.info("Customer id=%s kyc_verified=%s", customer_id, verified)
        return customer

"""Account service: unique account numbers, open on create, close in place."""

from __future__ import annotations

from logging import getLogger

from account_opening.errors import DuplicateKeyError, NotFoundError
from account_opening.models import Account
from account_opening.repository import SqlAlchemyRepository
from account_opening.schemas import AccountCreate

logger = getLogger(__name__)


class AccountService:
    def __init__(self, repository: SqlAlchemyRepository[Account]) -> None:
        self.repository = repository

    def create_account(self, candidate: AccountCreate) -> Account:
        """Persist a new account; always opened active regardless of the payload."""
        if self.repository.exists_by("account_number", candidate.account_number):
            raise DuplicateKeyError("Account", "account_number", candidate.account_number)
        account = Account(
            account_number=candidate.account_number,
            account_type=candidate.account_type,
            balance=candidate.balance,
            customer_id=candidate.customer_id,
            active=True,
        )
        account = self.repository.save(account)
        logger.info("Created account id=%s customer_id=%s", account.id, account.customer_id)
        return account

    def list_accounts(self) -> list[Account]:
        return self.repository.find_all()

    def get_accounts_by_customer(self, customer_id: int) -> list[Account]:
        return self.repository.find_by("customer_id", customer_id)

    def get_account(self, account_id: int) -> Account:
        account = self.repository.find_by_id(account_id)
        if account is None:
            raise NotFoundError("Account", account_id)
        return account

    def close_account(self, account_id: int) -> Account:
        account = self.get_account(account_id)
        account.active = False
        account = self.repository.save(account)
        logger.info("Closed account id=%s", account_id)
        return account

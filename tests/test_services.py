"""Entity service tests: business rules, forced defaults, not-found and idempotency."""

from unittest.mock import MagicMock

import pytest

from account_opening.errors import DuplicateKeyError, InvalidArgumentError, NotFoundError
from account_opening.models import Account
from account_opening.repository import (
    account_repository,
    customer_repository,
    document_repository,
    notification_repository,
)
from account_opening.schemas import (
    AccountCreate,
    CustomerCreate,
    DocumentCreate,
    NotificationCreate,
)
from account_opening.services import (
    AccountService,
    CustomerService,
    DocumentService,
    NotificationService,
)


@pytest.fixture
def account_service(db_session) -> AccountService:
    return AccountService(account_repository(db_session))


@pytest.fixture
def customer_service(db_session) -> CustomerService:
    return CustomerService(customer_repository(db_session))


@pytest.fixture
def document_service(db_session) -> DocumentService:
    return DocumentService(document_repository(db_session))


@pytest.fixture
def notification_service(db_session) -> NotificationService:
    return NotificationService(notification_repository(db_session))


def _savings(**overrides) -> AccountCreate:
    data = {
        "account_number": "ACC-123456",
        "account_type": "SAVINGS",
        "balance": 1000.00,
        "customer_id": 100,
    }
    data.update(overrides)
    return AccountCreate(**data)


# --- Account ---
def test_create_account_assigns_id_and_forces_active(account_service: AccountService) -> None:
    account = account_service.create_account(_savings(active=False))
    assert account.id == 1
    assert account.account_number == "ACC-123456"
    assert account.account_type == "SAVINGS"
    assert account.balance == 1000.00
    assert account.customer_id == 100
    assert account.active is True


def test_create_account_negative_balance_allowed(account_service: AccountService) -> None:
    account = account_service.create_account(_savings(account_number="ACC-NEG", balance=-50.5))
    assert account.balance == -50.5


def test_create_account_duplicate_number(account_service: AccountService) -> None:
    account_service.create_account(_savings())
    with pytest.raises(DuplicateKeyError, match="account_number already exists"):
        account_service.create_account(_savings(account_type="CHECKING"))
    assert len(account_service.list_accounts()) == 1


def test_duplicate_account_is_never_persisted() -> None:
    repo = MagicMock()
    repo.exists_by.return_value = True
    with pytest.raises(DuplicateKeyError):
        AccountService(repo).create_account(_savings())
    repo.exists_by.assert_called_once_with("account_number", "ACC-123456")
    repo.save.assert_not_called()


def test_create_account_calls_save_once() -> None:
    repo = MagicMock()
    repo.exists_by.return_value = False
    repo.save.side_effect = lambda a: a
    account = AccountService(repo).create_account(_savings())
    repo.save.assert_called_once()
    assert isinstance(account, Account)
    assert account.active is True


def test_get_account(account_service: AccountService) -> None:
    created = account_service.create_account(_savings())
    assert account_service.get_account(created.id) is created


def test_get_account_not_found(account_service: AccountService) -> None:
    with pytest.raises(NotFoundError, match="Account not found"):
        account_service.get_account(999)


def test_accounts_by_customer(account_service: AccountService) -> None:
    account_service.create_account(_savings(account_number="A1", customer_id=7))
    account_service.create_account(_savings(account_number="A2", customer_id=8))
    account_service.create_account(_savings(account_number="A3", customer_id=7))
    assert [a.account_number for a in account_service.get_accounts_by_customer(7)] == ["A1", "A3"]
    assert account_service.get_accounts_by_customer(12345) == []


def test_close_account_keeps_other_fields(account_service: AccountService) -> None:
    created = account_service.create_account(_savings())
    closed = account_service.close_account(created.id)
    assert closed.id == 1
    assert closed.active is False
    assert closed.account_number == "ACC-123456"
    assert closed.balance == 1000.00
    assert closed.customer_id == 100


def test_close_account_is_idempotent(account_service: AccountService) -> None:
    created = account_service.create_account(_savings())
    first = account_service.close_account(created.id)
    second = account_service.close_account(created.id)
    assert second.id == first.id
    assert second.active is False


def test_close_account_not_found(account_service: AccountService) -> None:
    with pytest.raises(NotFoundError):
        account_service.close_account(42)


# --- Customer ---
def _john(**overrides) -> CustomerCreate:
    data = {"first_name": "John", "last_name": "Doe", "email": "john.doe@example.com"}
    data.update(overrides)
    return CustomerCreate(**data)


def test_create_customer_defaults(customer_service: CustomerService) -> None:
    customer = customer_service.create_customer(_john(phone_number="+1-555-0100"))
    assert customer.id is not None
    assert customer.kyc_verified is False
    assert customer.phone_number == "+1-555-0100"
    assert customer.address is None


def test_create_customer_kyc_flag_as_supplied(customer_service: CustomerService) -> None:
    assert customer_service.create_customer(_john(kyc_verified=True)).kyc_verified is True
    other = _john(email="jane@example.com", kyc_verified=None)
    assert customer_service.create_customer(other).kyc_verified is False


def test_create_customer_duplicate_email(customer_service: CustomerService) -> None:
    customer_service.create_customer(_john())
    with pytest.raises(DuplicateKeyError, match="email already exists"):
        customer_service.create_customer(_john(first_name="Johnny"))
    assert len(customer_service.list_customers()) == 1


def test_get_customer_not_found(customer_service: CustomerService) -> None:
    with pytest.raises(NotFoundError, match="Customer not found"):
        customer_service.get_customer(999)


def test_update_kyc_status_round_trip(customer_service: CustomerService) -> None:
    customer = customer_service.create_customer(_john())
    assert customer_service.update_kyc_status(customer.id, True).kyc_verified is True
    assert customer_service.update_kyc_status(customer.id, True).kyc_verified is True
    assert customer_service.update_kyc_status(customer.id, False).kyc_verified is False


def test_update_kyc_status_not_found(customer_service: CustomerService) -> None:
    with pytest.raises(NotFoundError):
        customer_service.update_kyc_status(999, True)


# --- Document ---
def test_upload_document_keeps_unvalidated_customer_id(document_service: DocumentService) -> None:
    document = document_service.upload_document(
        DocumentCreate(type="PASSPORT", file_name="passport.pdf", customer_id=555)
    )
    assert document.id is not None
    assert document.customer_id == 555
    assert document.verified is False


def test_duplicate_documents_are_allowed(document_service: DocumentService) -> None:
    payload = DocumentCreate(type="ID", file_name="id.png", customer_id=1)
    document_service.upload_document(payload)
    document_service.upload_document(payload)
    assert len(document_service.get_documents_by_customer(1)) == 2
    assert len(document_service.list_documents()) == 2


def test_verify_document(document_service: DocumentService) -> None:
    document = document_service.upload_document(DocumentCreate(type="ID", file_name="id.png"))
    assert document_service.verify_document(document.id, True).verified is True
    assert document_service.verify_document(document.id, True).verified is True


def test_verify_document_not_found(document_service: DocumentService) -> None:
    with pytest.raises(NotFoundError, match="Document not found"):
        document_service.verify_document(999, True)


# --- Notification ---
@pytest.mark.parametrize("sent", [None, False, True])
def test_send_notification_forces_sent(
    notification_service: NotificationService, sent: bool | None
) -> None:
    notification = notification_service.send_notification(
        NotificationCreate(recipient="test@example.com", message="Welcome", type="EMAIL", sent=sent)
    )
    assert notification.id is not None
    assert notification.sent is True
    assert notification.recipient == "test@example.com"
    assert notification.type == "EMAIL"


def test_send_notification_none_rejected() -> None:
    repo = MagicMock()
    with pytest.raises(InvalidArgumentError, match="cannot be null"):
        NotificationService(repo).send_notification(None)
    repo.save.assert_not_called()


def test_list_notifications(notification_service: NotificationService) -> None:
    assert notification_service.list_notifications() == []
    notification_service.send_notification(NotificationCreate(recipient="+15550100", message="Hi"))
    assert len(notification_service.list_notifications()) == 1

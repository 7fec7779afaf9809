"""Entity services: one business rule per entity type, one store call per operation."""

from account_opening.services.account import AccountService
from account_opening.services.customer import CustomerService
from account_opening.services.document import DocumentService
from account_opening.services.notification import NotificationService

__all__ = ["AccountService", "CustomerService", "DocumentService", "NotificationService"]

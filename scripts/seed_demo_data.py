#!/usr/bin/env python3
"""Seed a local database with demo applicants, walking the account-opening steps:
customer -> documents -> account -> welcome notification.

Run: python scripts/seed_demo_data.py [--config config/dev.yaml]
"""

from __future__ import annotations

import argparse
import random

from account_opening.config import get_config
from account_opening.db import init_db, session_scope
from account_opening.errors import DuplicateKeyError
from account_opening.logging_config import setup_logging
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

APPLICANTS = [
    ("John", "Doe", "john.doe@example.com", "PASSPORT", "SAVINGS"),
    ("Jane", "Smith", "jane.smith@example.com", "DRIVERS_LICENSE", "CHECKING"),
    ("Ravi", "Kumar", "ravi.kumar@example.com", "NATIONAL_ID", "SAVINGS"),
    ("Ana", "Silva", "ana.silva@example.com", "PASSPORT", "BUSINESS"),
]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", default=None, help="Config YAML path")
    args = parser.parse_args()

    config = get_config(args.config)
    setup_logging(config.get("app", {}).get("log_level", "INFO"))
    init_db(config["database"]["url"], echo=False)
    random.seed(42)

    for n, (first, last, email, id_type, account_type) in enumerate(APPLICANTS, start=1):
        with session_scope() as session:
            try:
                customer = CustomerService(customer_repository(session)).create_customer(
                    CustomerCreate(
                        first_name=first,
                        last_name=last,
                        email=email,
                        phone_number=f"+1-555-010{n}",
                        identification_type=id_type,
                        identification_number=f"ID{random.randint(100000, 999999)}",
                    )
                )
            except DuplicateKeyError:
                print(f"{email} already seeded, skipping")
                continue
            DocumentService(document_repository(session)).upload_document(
                DocumentCreate(
                    type="ID",
                    file_name=f"{last.lower()}_{id_type.lower()}.pdf",
                    customer_id=customer.id,
                )
            )
            account_number = f"ACC-{100000 + customer.id * 7919 % 900000}"
            AccountService(account_repository(session)).create_account(
                AccountCreate(
                    account_number=account_number,
                    account_type=account_type,
                    balance=round(random.uniform(100, 5000), 2),
                    customer_id=customer.id,
                )
            )
            NotificationService(notification_repository(session)).send_notification(
                NotificationCreate(
                    recipient=email,
                    message=(
                        f"Welcome {first}! Your account {account_number} "
                        "has been successfully created."
                    ),
                    type="EMAIL",
                )
            )
            print(f"Seeded customer {customer.id} with account {account_number}")


if __name__ == "__main__":
    main()

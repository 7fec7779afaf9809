"""Record store: single-table SQLAlchemy access for one entity type."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from account_opening.errors import DuplicateKeyError
from account_opening.models import Account, Base, Customer, Document, Notification

ModelT = TypeVar("ModelT", bound=Base)


def _is_unique_violation(err: IntegrityError) -> bool:
    # SQLite: "UNIQUE constraint failed"
    # Postgres: "duplicate key value violates unique constraint"
    return "unique constraint" in str(err.orig).lower()


class SqlAlchemyRepository(Generic[ModelT]):
    """save / find_by_id / find_all / find_by / exists_by over one ORM model.

    ``unique_fields`` names the columns backed by a unique index; a save that
    violates one of them (two creators racing past the service's existence
    check) is reported as DuplicateKeyError instead of a raw IntegrityError.
    """

    def __init__(
        self,
        session: Session,
        model: type[ModelT],
        entity_name: str,
        unique_fields: Sequence[str] = (),
    ) -> None:
        self.session = session
        self.model = model
        self.entity_name = entity_name
        self.unique_fields = tuple(unique_fields)

    def _column(self, field: str) -> Any:
        return getattr(self.model, field)

    def save(self, entity: ModelT) -> ModelT:
        """Persist entity (insert or update) and return it with its id assigned."""
        self.session.add(entity)
        try:
            self.session.flush()
        except IntegrityError as err:
            self.session.rollback()
            if _is_unique_violation(err):
                for field in self.unique_fields:
                    if field in str(err.orig):
                        raise DuplicateKeyError(
                            self.entity_name, field, getattr(entity, field, None)
                        ) from err
            raise
        self.session.refresh(entity)
        return entity

    def find_by_id(self, entity_id: int) -> ModelT | None:
        return self.session.get(self.model, entity_id)

    def find_all(self) -> list[ModelT]:
        stmt = select(self.model).order_by(self._column("id"))
        return list(self.session.execute(stmt).scalars().all())

    def find_by(self, field: str, value: Any) -> list[ModelT]:
        stmt = (
            select(self.model)
            .where(self._column(field) == value)
            .order_by(self._column("id"))
        )
        return list(self.session.execute(stmt).scalars().all())

    def exists_by(self, field: str, value: Any) -> bool:
        stmt = select(exists().where(self._column(field) == value))
        return bool(self.session.execute(stmt).scalar())


def account_repository(session: Session) -> SqlAlchemyRepository[Account]:
    return SqlAlchemyRepository(session, Account, "Account", unique_fields=("account_number",))


def customer_repository(session: Session) -> SqlAlchemyRepository[Customer]:
    return SqlAlchemyRepository(session, Customer, "Customer", unique_fields=("email",))


def document_repository(session: Session) -> SqlAlchemyRepository[Document]:
    return SqlAlchemyRepository(session, Document, "Document")


def notification_repository(session: Session) -> SqlAlchemyRepository[Notification]:
    return SqlAlchemyRepository(session, Notification, "Notification")

"""Document service: store uploaded document metadata and its verification flag."""

from __future__ import annotations

from logging import getLogger

from account_opening.errors import NotFoundError
from account_opening.models import Document
from account_opening.repository import SqlAlchemyRepository
from account_opening.schemas import DocumentCreate

logger = getLogger(__name__)


class DocumentService:
    def __init__(self, repository: SqlAlchemyRepository[Document]) -> None:
        self.repository = repository

    def upload_document(self, candidate: DocumentCreate) -> Document:
        # customer_id is stored as given; the customer service owns customer existence
        document = Document(
            **candidate.model_dump(exclude={"verified"}), verified=bool(candidate.verified)
        )
        document = self.repository.save(document)
        logger.info("Uploaded document id=%s type=%s", document.id, document.type)
        return document

    def get_documents_by_customer(self, customer_id: int) -> list[Document]:
        return self.repository.find_by("customer_id", customer_id)

    def list_documents(self) -> list[Document]:
        return self.repository.find_all()

    def verify_document(self, document_id: int, verified: bool) -> Document:
        document = self.repository.find_by_id(document_id)
        if document is None:
            raise NotFoundError("Document", document_id)
        document.verified = verified
        return self.repository.save(document)

"""Document service routes: /api/documents."""

from __future__ import annotations

from fastapi import APIRouter, Query
from sqlalchemy.orm import Session

from account_opening.db import session_scope
from account_opening.errors import ValidationFailure
from account_opening.repository import document_repository
from account_opening.schemas import DocumentCreate, DocumentResponse
from account_opening.services import DocumentService
from account_opening.validation import validate_document

documents_router = APIRouter(prefix="/api/documents", tags=["documents"])


def _service(session: Session) -> DocumentService:
    return DocumentService(document_repository(session))


@documents_router.post("", response_model=DocumentResponse)
def upload_document(body: DocumentCreate) -> DocumentResponse:
    """Record an uploaded document's metadata (the file itself lives at fileUrl)."""
    violations = validate_document(body)
    if violations:
        raise ValidationFailure(violations)
    with session_scope() as session:
        return DocumentResponse.model_validate(_service(session).upload_document(body))


@documents_router.get("", response_model=list[DocumentResponse])
def list_documents() -> list[DocumentResponse]:
    with session_scope() as session:
        return [DocumentResponse.model_validate(d) for d in _service(session).list_documents()]


@documents_router.get("/customer/{customer_id}", response_model=list[DocumentResponse])
def get_documents_by_customer(customer_id: int) -> list[DocumentResponse]:
    with session_scope() as session:
        documents = _service(session).get_documents_by_customer(customer_id)
        return [DocumentResponse.model_validate(d) for d in documents]


@documents_router.put("/{document_id}/verify", response_model=DocumentResponse)
def verify_document(document_id: int, verified: bool = Query(...)) -> DocumentResponse:
    with session_scope() as session:
        document = _service(session).verify_document(document_id, verified)
        return DocumentResponse.model_validate(document)

"""Typed failures raised by the entity services and the request validators."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldViolation:
    """One failed field constraint: JSON field name and a human-readable message."""

    field: str
    message: str


class ServiceError(Exception):
    """Base class for business-rule failures surfaced by an entity service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DuplicateKeyError(ServiceError):
    """A unique field value already exists for this entity type."""

    def __init__(self, entity: str, field: str, value: object) -> None:
        super().__init__(f"{entity} with this {field} already exists")
        self.entity = entity
        self.field = field
        self.value = value


class NotFoundError(ServiceError):
    def __init__(self, entity: str, entity_id: object) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidArgumentError(ServiceError):
    pass


class ValidationFailure(Exception):
    """Request payload rejected before reaching a service; carries every violation."""

    def __init__(self, violations: list[FieldViolation]) -> None:
        super().__init__("; ".join(f"{v.field}: {v.message}" for v in violations))
        self.violations = violations

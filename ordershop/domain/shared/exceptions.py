"""
Domain Exceptions

Defines the error taxonomy for the ordering domain. Every error carries an
ErrorType discriminator so callers can map failures without inspecting
message text. Errors are raised at the point of violation and are never
retried or swallowed inside the domain.
"""

from enum import Enum


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    INVALID_STATE = "invalid_state"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    REPOSITORY = "repository"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, str | int | bool | None] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, str | int | bool | None]]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when an argument violates a domain precondition."""

    def __init__(
        self,
        field_name: str,
        value: str | int | float | bool | None,
        message: str,
    ) -> None:
        self.field_name = field_name
        self.value = value

        full_message = f"Validation failed for field '{field_name}': {message}"
        details: dict[str, str | int | bool | None] = {
            "field": field_name,
            "value": str(value) if value is not None else None,
        }
        super().__init__(full_message, ErrorType.VALIDATION, details)


class InsufficientStockError(DomainError):
    """Raised when a stock decrement would drive an item below zero."""

    def __init__(self, item_id: int | None, available: int, requested: int) -> None:
        details: dict[str, str | int | bool | None] = {
            "item_id": item_id,
            "available": available,
            "requested": requested,
        }
        super().__init__(
            f"need more stock: requested {requested}, available {available}",
            ErrorType.BUSINESS_RULE,
            details,
        )
        self.item_id = item_id
        self.available = available
        self.requested = requested


class InvalidStateError(DomainError):
    """Raised when an aggregate is asked for a transition it cannot make."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.INVALID_STATE, details)


class DuplicateMemberError(DomainError):
    """Raised when registering a member whose name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(
            f"Member already exists: {name}", ErrorType.CONFLICT, {"name": name}
        )
        self.name = name


class EntityNotFoundError(DomainError):
    """Raised when an entity cannot be found by its identifier."""

    def __init__(self, entity_type: str, entity_id: int | None) -> None:
        details: dict[str, str | int | bool | None] = {
            "entity_type": entity_type,
            "entity_id": entity_id,
        }
        super().__init__(
            f"{entity_type} not found: {entity_id}", ErrorType.NOT_FOUND, details
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class RepositoryError(DomainError):
    """Base class for persistence-layer errors."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.REPOSITORY, details)


class DatabaseError(RepositoryError):
    """Raised when a database operation fails."""

    pass


class InvalidFetchPlanError(RepositoryError):
    """Raised when a fetch plan would return an inconsistent row set."""

    pass

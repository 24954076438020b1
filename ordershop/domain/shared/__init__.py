"""Shared domain building blocks."""

from .base import ValueObject
from .exceptions import (
    DatabaseError,
    DomainError,
    DuplicateMemberError,
    EntityNotFoundError,
    ErrorType,
    InsufficientStockError,
    InvalidFetchPlanError,
    InvalidStateError,
    RepositoryError,
    ValidationError,
)

__all__ = [
    "DatabaseError",
    "DomainError",
    "DuplicateMemberError",
    "EntityNotFoundError",
    "ErrorType",
    "InsufficientStockError",
    "InvalidFetchPlanError",
    "InvalidStateError",
    "RepositoryError",
    "ValidationError",
    "ValueObject",
]

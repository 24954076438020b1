"""
Base application service providing common functionality.

Application services own transaction boundaries: every public operation
runs inside exactly one unit of work created from the injected factory.
"""

from abc import ABC
from collections.abc import Callable

from ordershop.domain.shared.exceptions import ValidationError
from ordershop.infrastructure.database.unit_of_work import SqlModelUnitOfWork

UnitOfWorkFactory = Callable[[], SqlModelUnitOfWork]


class ApplicationServiceBase(ABC):
    """Base class for application services."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory):
        """
        Initialize the application service.

        Args:
            unit_of_work_factory: Factory for creating unit of work instances
        """
        self._uow_factory = unit_of_work_factory

    def validate_non_empty_string(self, value: str | None, field_name: str) -> None:
        """
        Raises:
            ValidationError: If string is None or blank
        """
        if not value or not value.strip():
            raise ValidationError(field_name, value, "cannot be empty")

    def validate_positive_number(self, value: int | None, field_name: str) -> None:
        """
        Raises:
            ValidationError: If number is missing or not positive
        """
        if value is None or value <= 0:
            raise ValidationError(field_name, value, "must be a positive number")

"""
Base repository implementation providing generic persistence operations.

Repositories never commit: the unit of work owns the transaction. ``save``
flushes so generated ids are available to the caller straight away.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from ordershop.domain.shared.exceptions import DatabaseError, EntityNotFoundError

EntityType = TypeVar("EntityType", bound=SQLModel)


def chunked(ids: Sequence[int], size: int) -> Iterator[Sequence[int]]:
    """Yield consecutive slices of ``ids`` holding at most ``size`` ids."""
    for start in range(0, len(ids), size):
        yield ids[start : start + size]


class BaseRepository(Generic[EntityType], ABC):
    """
    Base repository class providing id lookup, listing and save.

    Concrete repositories provide ``entity_class`` and their own queries.
    """

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    @property
    @abstractmethod
    def entity_class(self) -> type[EntityType]:
        """Return the SQLModel entity class managed by this repository."""
        pass

    def save(self, entity: EntityType) -> EntityType:
        """
        Add an entity to the session and flush it.

        Args:
            entity: Entity to persist

        Returns:
            The same entity, now carrying its generated id

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            self.session.add(entity)
            self.session.flush()
            return entity
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during save: {str(e)}") from e

    def get_by_id(self, entity_id: int) -> EntityType | None:
        """
        Get entity by ID.

        Args:
            entity_id: Primary key of the entity

        Returns:
            Entity if found, None otherwise

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            return self.session.get(self.entity_class, entity_id)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during get_by_id: {str(e)}") from e

    def get_by_id_required(self, entity_id: int) -> EntityType:
        """
        Get entity by ID, raising exception if not found.

        Raises:
            EntityNotFoundError: If entity not found
            DatabaseError: If database operation fails
        """
        entity = self.get_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundError(self.entity_class.__name__, entity_id)
        return entity

    def get_all(self, limit: int | None = None, offset: int = 0) -> list[EntityType]:
        """
        Get all entities in id order with optional pagination.

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            statement = (
                select(self.entity_class)
                .order_by(self.entity_class.id)
                .offset(offset)
            )
            if limit:
                statement = statement.limit(limit)
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during get_all: {str(e)}") from e

"""Item repository."""

from sqlalchemy.exc import SQLAlchemyError

from ordershop.domain.ordering.entities import Item
from ordershop.domain.shared.exceptions import DatabaseError

from .base import BaseRepository


class ItemRepository(BaseRepository[Item]):
    """Repository for Item entities of every variant."""

    @property
    def entity_class(self):
        return Item

    def save(self, item: Item) -> Item:
        """
        Persist a new item, or merge a detached one into the session.

        A detached item (one carrying an id but not attached to this
        session) has its state copied onto the managed instance, which is
        returned. Callers must keep using the returned object.

        Raises:
            DatabaseError: If database operation fails
        """
        if item.id is None or item in self.session:
            return super().save(item)

        try:
            merged = self.session.merge(item)
            self.session.flush()
            return merged
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during merge: {str(e)}") from e

    def find_all(self) -> list[Item]:
        return self.get_all()

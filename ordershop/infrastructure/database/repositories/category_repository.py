"""Category repository."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import select

from ordershop.domain.ordering.entities import Category
from ordershop.domain.shared.exceptions import DatabaseError

from .base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Repository for the category tree."""

    @property
    def entity_class(self):
        return Category

    def find_roots(self) -> list[Category]:
        """
        Find top-level categories with their children and items loaded.

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            statement = (
                select(Category)
                .where(Category.parent_id.is_(None))
                .options(selectinload(Category.children), selectinload(Category.items))
                .order_by(Category.id)
            )
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise DatabaseError(f"Error finding root categories: {str(e)}") from e

    def find_by_name(self, name: str) -> Category | None:
        try:
            statement = select(Category).where(Category.name == name)
            return self.session.exec(statement).first()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Error finding category {name}: {str(e)}") from e

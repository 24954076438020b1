"""Member repository."""

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from ordershop.domain.ordering.entities import Member
from ordershop.domain.shared.exceptions import DatabaseError

from .base import BaseRepository


class MemberRepository(BaseRepository[Member]):
    """Repository for Member entities."""

    @property
    def entity_class(self):
        return Member

    def find_all(self) -> list[Member]:
        return self.get_all()

    def find_by_name(self, name: str) -> list[Member]:
        """
        Find members with exactly this name.

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            statement = select(Member).where(Member.name == name).order_by(Member.id)
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise DatabaseError(f"Error finding member by name {name}: {str(e)}") from e

"""
Unit of Work for ordering transactions.

One unit of work is one session and one transaction. Every repository it
exposes shares that session, so an order placement that decrements stock,
creates the order and its delivery either commits as a whole or not at all.
"""

from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from ordershop.core.db import create_db_engine
from ordershop.domain.shared.exceptions import DatabaseError

from .repositories.category_repository import CategoryRepository
from .repositories.item_repository import ItemRepository
from .repositories.member_repository import MemberRepository
from .repositories.order_query_repository import OrderQueryRepository
from .repositories.order_repository import OrderRepository
from .repositories.order_simple_query_repository import OrderSimpleQueryRepository

SessionFactory = Callable[[], Session]


def default_session_factory() -> SessionFactory:
    """Session factory bound to an engine for ``settings.DATABASE_URL``."""
    engine = create_db_engine()
    return lambda: Session(engine, expire_on_commit=False)


class SqlModelUnitOfWork:
    """
    SQLModel-based Unit of Work.

    Commits when the ``with`` block exits normally; rolls back and re-raises
    when it exits with an exception. Sessions are created with
    ``expire_on_commit=False`` so loaded state stays readable after exit;
    associations the chosen fetch strategy did not load are not.
    """

    members: MemberRepository
    items: ItemRepository
    categories: CategoryRepository
    orders: OrderRepository
    order_queries: OrderQueryRepository
    order_simple_queries: OrderSimpleQueryRepository

    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        batch_size: int | None = None,
    ):
        """
        Initialize the unit of work.

        Args:
            session_factory: Callable returning a new Session. If None, one is
                built for the configured database URL.
            batch_size: Override for the order repository's IN-list width
        """
        self._session_factory = session_factory
        self._batch_size = batch_size
        self._session: Session | None = None

    def __enter__(self) -> "SqlModelUnitOfWork":
        if self._session_factory is None:
            self._session_factory = default_session_factory()
        self._session = self._session_factory()
        self._init_repositories()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        try:
            if exc_type is not None:
                self.rollback()
            else:
                self.commit()
        finally:
            if self._session:
                self._session.close()
                self._session = None

    def commit(self) -> None:
        """
        Commit the current transaction.

        Raises:
            DatabaseError: If commit fails; the transaction is rolled back
        """
        session = self.session
        try:
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise DatabaseError(f"Failed to commit transaction: {str(e)}") from e

    def rollback(self) -> None:
        """
        Rollback the current transaction.

        Raises:
            DatabaseError: If rollback fails
        """
        try:
            self.session.rollback()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to rollback transaction: {str(e)}") from e

    def flush(self) -> None:
        """
        Flush pending changes without committing.

        Raises:
            DatabaseError: If flush fails
        """
        try:
            self.session.flush()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to flush session: {str(e)}") from e

    def refresh(self, instance: Any) -> None:
        try:
            self.session.refresh(instance)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Failed to refresh instance: {str(e)}") from e

    def _init_repositories(self) -> None:
        session = self.session
        self.members = MemberRepository(session)
        self.items = ItemRepository(session)
        self.categories = CategoryRepository(session)
        self.orders = OrderRepository(session, batch_size=self._batch_size)
        self.order_queries = OrderQueryRepository(session)
        self.order_simple_queries = OrderSimpleQueryRepository(session)

    @property
    def session(self) -> Session:
        """
        Get the current database session.

        Raises:
            DatabaseError: If no active session
        """
        if not self._session:
            raise DatabaseError("No active database session")
        return self._session

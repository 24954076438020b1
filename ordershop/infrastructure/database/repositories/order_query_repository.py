"""
Order read-model queries that bypass aggregate loading.

Three paths build the same ``list[OrderQueryDto]``:

- ``find_all_by_flat``: one outer-joined statement, one row per
  (order, line item), grouped in memory.
- ``find_all_by_bulk_lookup``: headers, then one ``IN`` lookup for all of
  their line items (two statements).
- ``find_order_query_dtos``: headers, then one line-item query per order
  (1 + N statements). Kept as the unoptimized baseline.
"""

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ordershop.core.observability import get_logger
from ordershop.domain.ordering.entities import Item, Order, OrderItem
from ordershop.domain.ordering.read_models import (
    OrderFlatRow,
    OrderItemRow,
    OrderQueryDto,
    attach_line_items,
    collect_order_ids,
    group_flat_rows,
)
from ordershop.domain.shared.exceptions import DatabaseError

from .order_simple_query_repository import (
    OrderSimpleQueryRepository,
    header_statement,
    row_values,
)

logger = get_logger(__name__)


class OrderQueryRepository:
    """Reads OrderQueryDto graphs with column queries."""

    def __init__(self, session: Session):
        self.session = session
        self.headers = OrderSimpleQueryRepository(session)

    def find_flat_rows(self) -> list[OrderFlatRow]:
        """
        Select every (order, line item) pair, ordered by order then line.

        Orders without line items still produce one row, with null item
        fields, through the outer joins.

        Raises:
            DatabaseError: If database operation fails
        """
        statement = (
            header_statement(
                Item.name.label("item_name"),
                OrderItem.order_price.label("order_price"),
                OrderItem.count.label("count"),
            )
            .outerjoin(OrderItem, OrderItem.order_id == Order.id)
            .outerjoin(Item, OrderItem.item_id == Item.id)
            .order_by(Order.id, OrderItem.id)
        )
        try:
            rows = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Error selecting flat order rows: {str(e)}") from e
        return [OrderFlatRow(**row_values(row)) for row in rows]

    def find_line_items(self, order_ids: Sequence[int]) -> list[OrderItemRow]:
        """
        Select the line items of every order in ``order_ids`` in one statement.

        Raises:
            DatabaseError: If database operation fails
        """
        if not order_ids:
            return []

        statement = (
            select(
                OrderItem.order_id.label("order_id"),
                Item.name.label("item_name"),
                OrderItem.order_price.label("order_price"),
                OrderItem.count.label("count"),
            )
            .join(Item, OrderItem.item_id == Item.id)
            .where(OrderItem.order_id.in_(order_ids))
            .order_by(OrderItem.order_id, OrderItem.id)
        )
        try:
            rows = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Error selecting order line items: {str(e)}") from e
        return [OrderItemRow(**row._mapping) for row in rows]

    def find_all_by_flat(self) -> list[OrderQueryDto]:
        rows = self.find_flat_rows()
        orders = group_flat_rows(rows)
        logger.debug("Flat rows grouped", rows=len(rows), orders=len(orders))
        return orders

    def find_all_by_bulk_lookup(
        self, offset: int | None = None, limit: int | None = None
    ) -> list[OrderQueryDto]:
        """Two-phase read: headers (pageable), then one lookup for their lines."""
        headers = self.headers.find_order_dtos(offset, limit)
        line_items = self.find_line_items(collect_order_ids(headers))
        return attach_line_items(headers, line_items)

    def find_order_query_dtos(self) -> list[OrderQueryDto]:
        """Headers, then a separate line-item query per order."""
        headers = self.headers.find_order_dtos()
        return [
            attach_line_items([header], self.find_line_items([header.order_id]))[0]
            for header in headers
        ]

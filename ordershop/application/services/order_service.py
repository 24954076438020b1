"""
Order placement, cancellation and reads.

Each operation runs in one unit of work: stock changes and the order rows
commit together or roll back together.
"""

from collections.abc import Sequence

from ordershop.core.observability import get_logger, monitor_operation
from ordershop.domain.ordering.entities import Delivery, Order, OrderItem
from ordershop.domain.ordering.read_models import (
    OrderFlatRow,
    OrderQueryDto,
    OrderSimpleQueryDto,
    project_orders,
)
from ordershop.domain.ordering.value_objects import FetchStrategy, OrderSearch

from .base_service import ApplicationServiceBase

logger = get_logger(__name__)


class OrderService(ApplicationServiceBase):
    """Application service for the Order aggregate."""

    @monitor_operation("place_order")
    def place_order(self, member_id: int, item_id: int, count: int) -> int:
        """
        Order ``count`` units of one item for a member.

        The delivery address is the member's address; the line price is the
        item's current price.

        Args:
            member_id: Ordering member
            item_id: Item to order
            count: Units to order

        Returns:
            The new order's id

        Raises:
            EntityNotFoundError: If the member or item does not exist
            ValidationError: If count is not positive
            InsufficientStockError: If the item has fewer than ``count`` units;
                nothing is persisted
        """
        self.validate_positive_number(count, "count")

        with self._uow_factory() as uow:
            member = uow.members.get_by_id_required(member_id)
            item = uow.items.get_by_id_required(item_id)

            delivery = Delivery.create(member.address)
            order_item = OrderItem.create(item, item.price, count)
            order = Order.create(member, delivery, order_item)

            uow.orders.save(order)
            order_id = order.id

        logger.info(
            "Order placed",
            order_id=order_id,
            member_id=member_id,
            item_id=item_id,
            count=count,
        )
        return order_id

    @monitor_operation("cancel_order")
    def cancel_order(self, order_id: int) -> None:
        """
        Cancel an order and restore its items' stock.

        Raises:
            EntityNotFoundError: If the order does not exist
            InvalidStateError: If the order is cancelled or its delivery is
                complete; nothing changes
        """
        with self._uow_factory() as uow:
            order = uow.orders.find_one_required(order_id, FetchStrategy.BATCHED)
            order.cancel()

        logger.info("Order cancelled", order_id=order_id)

    def load_order(
        self, order_id: int, strategy: FetchStrategy = FetchStrategy.LAZY
    ) -> Order:
        """
        Load one aggregate.

        Associations ``strategy`` left unloaded are read before the session
        closes, at that strategy's cost, so the returned order is complete.

        Raises:
            EntityNotFoundError: If the order does not exist
        """
        with self._uow_factory() as uow:
            order = uow.orders.find_one_required(order_id, strategy)
            load_associations([order])
        return order

    def query_orders(
        self,
        order_search: OrderSearch,
        strategy: FetchStrategy = FetchStrategy.LAZY,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[Order]:
        """
        Raises:
            InvalidFetchPlanError: If pagination is requested with FULL_JOIN
        """
        with self._uow_factory() as uow:
            orders = uow.orders.search(order_search, strategy, offset, limit)
            load_associations(orders)

        logger.debug(
            "Orders searched",
            strategy=strategy.value,
            status=order_search.order_status,
            member_name=order_search.member_name,
            results=len(orders),
        )
        return orders

    @monitor_operation("project_orders")
    def project_orders(
        self,
        source: FetchStrategy | Sequence[Order] | Sequence[OrderFlatRow],
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[OrderQueryDto]:
        """
        Produce the nested order read model.

        Args:
            source: A fetch strategy to load every order with, or already
                loaded aggregates, or flat rows
            offset: Pagination for strategy loads
            limit: Pagination for strategy loads

        Raises:
            InvalidFetchPlanError: If pagination is requested with FULL_JOIN
        """
        if not isinstance(source, FetchStrategy):
            return project_orders(source)

        with self._uow_factory() as uow:
            orders = uow.orders.find_all(source, offset, limit)
            # Lazy associations must be read before the session closes
            return project_orders(orders)

    def find_order_dtos(self) -> list[OrderSimpleQueryDto]:
        """Order headers selected as columns, one statement."""
        with self._uow_factory() as uow:
            return uow.order_simple_queries.find_order_dtos()

    def find_order_query_dtos(self) -> list[OrderQueryDto]:
        """Per-order line item lookup (1 + N statements)."""
        with self._uow_factory() as uow:
            return uow.order_queries.find_order_query_dtos()

    def find_order_query_dtos_optimized(
        self, offset: int | None = None, limit: int | None = None
    ) -> list[OrderQueryDto]:
        """Headers then one bulk line item lookup (2 statements)."""
        with self._uow_factory() as uow:
            return uow.order_queries.find_all_by_bulk_lookup(offset, limit)

    def find_order_query_dtos_flat(self) -> list[OrderQueryDto]:
        """One denormalized statement, grouped in memory."""
        with self._uow_factory() as uow:
            return uow.order_queries.find_all_by_flat()


def load_associations(orders: Sequence[Order]) -> None:
    """Read every association of each aggregate through the open session."""
    for order in orders:
        _ = order.member, order.delivery
        for order_item in order.order_items:
            _ = order_item.item

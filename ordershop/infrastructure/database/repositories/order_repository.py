"""
Order aggregate repository.

Loads Order aggregates under an explicit FetchStrategy:

- LAZY: ``select(Order)`` only; each association touched later costs a
  statement (1 + N per association).
- TO_ONE_JOIN: member and delivery joined into the root statement; order
  items stay lazy. Pageable.
- FULL_JOIN: member, delivery, order items and items in one statement,
  de-duplicated by order identity. Not pageable.
- BATCHED: the TO_ONE_JOIN statement, then order items by
  ``order_id IN (...)`` and items by ``id IN (...)`` in chunks of
  ``batch_size`` ids. Pageable. With wide enough chunks the whole graph
  costs three statements whatever the number of orders.
"""

from collections import defaultdict
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm.attributes import set_committed_value
from sqlmodel import Session, select
from sqlmodel.sql.expression import SelectOfScalar

from ordershop.core.config import settings
from ordershop.core.observability import get_logger, record_fetch_statements
from ordershop.domain.ordering.entities import Item, Member, Order, OrderItem
from ordershop.domain.ordering.value_objects import FetchStrategy, OrderSearch
from ordershop.domain.shared.exceptions import (
    DatabaseError,
    EntityNotFoundError,
    ValidationError,
)

from ..statement_counter import SessionStatementCounter
from .base import BaseRepository, chunked
from .fetch_plan import FetchPlan

logger = get_logger(__name__)


class OrderRepository(BaseRepository[Order]):
    """Repository for Order aggregates."""

    def __init__(
        self,
        session: Session,
        batch_size: int | None = None,
        max_search_results: int | None = None,
    ):
        super().__init__(session)
        if batch_size is None:
            batch_size = settings.BATCH_FETCH_SIZE
        if max_search_results is None:
            max_search_results = settings.MAX_SEARCH_RESULTS
        self.batch_size = batch_size
        self.max_search_results = max_search_results
        if not 1 <= self.batch_size <= 1000:
            raise ValidationError(
                "batch_size", self.batch_size, "must be between 1 and 1000"
            )

    @property
    def entity_class(self):
        return Order

    def find_one(
        self, order_id: int, strategy: FetchStrategy | FetchPlan = FetchStrategy.LAZY
    ) -> Order | None:
        """
        Load one order under the given strategy.

        Args:
            order_id: Order primary key
            strategy: Fetch strategy or an explicit fetch plan

        Returns:
            The order, or None if no order has this id

        Raises:
            InvalidFetchPlanError: If the plan is illegal
            DatabaseError: If database operation fails
        """
        statement = select(Order).where(Order.id == order_id)
        orders = self._load(statement, self._plan(strategy))
        return orders[0] if orders else None

    def find_one_required(
        self, order_id: int, strategy: FetchStrategy | FetchPlan = FetchStrategy.LAZY
    ) -> Order:
        order = self.find_one(order_id, strategy)
        if order is None:
            raise EntityNotFoundError("Order", order_id)
        return order

    def find_all(
        self,
        strategy: FetchStrategy | FetchPlan = FetchStrategy.LAZY,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[Order]:
        """
        Load all orders in id order.

        Raises:
            InvalidFetchPlanError: If pagination is combined with a joined
                collection, or the plan is otherwise illegal
            DatabaseError: If database operation fails
        """
        return self._load(select(Order), self._plan(strategy), offset, limit)

    def search(
        self,
        order_search: OrderSearch,
        strategy: FetchStrategy | FetchPlan = FetchStrategy.LAZY,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[Order]:
        """
        Find orders matching the search criteria.

        Absent criteria add no predicate; a member name matches as a
        substring. Pageable strategies return at most
        ``max_search_results`` orders. A joined-collection plan is
        uncapped, since a row limit would cut an order's items short.

        Raises:
            InvalidFetchPlanError: If pagination is combined with a joined
                collection
            DatabaseError: If database operation fails
        """
        plan = self._plan(strategy)
        statement = select(Order).join(Order.member).where(
            *self._search_predicates(order_search)
        )

        if not plan.joins_collection:
            if limit is None:
                limit = self.max_search_results
            limit = min(limit, self.max_search_results)

        return self._load(statement, plan, offset, limit, member_joined=True)

    @staticmethod
    def _search_predicates(order_search: OrderSearch) -> list:
        predicates = []
        if order_search.order_status is not None:
            predicates.append(Order.status == order_search.order_status)
        if order_search.member_name:
            predicates.append(
                Member.name.contains(order_search.member_name, autoescape=True)
            )
        return predicates

    @staticmethod
    def _plan(strategy: FetchStrategy | FetchPlan) -> FetchPlan:
        if isinstance(strategy, FetchPlan):
            return strategy
        return FetchPlan.for_strategy(strategy)

    def _load(
        self,
        statement: SelectOfScalar[Order],
        plan: FetchPlan,
        offset: int | None = None,
        limit: int | None = None,
        member_joined: bool = False,
    ) -> list[Order]:
        plan.check_pagination(offset, limit)

        statement = statement.options(*plan.loader_options(member_joined))
        statement = statement.order_by(Order.id)
        if offset:
            statement = statement.offset(offset)
        if limit is not None:
            statement = statement.limit(limit)

        with SessionStatementCounter(self.session) as counter:
            try:
                result = self.session.exec(statement)
                if plan.joins_collection:
                    orders = list(result.unique().all())
                else:
                    orders = list(result.all())
                if plan.batch_collections:
                    self._batch_load_order_items(orders)
            except SQLAlchemyError as e:
                raise DatabaseError(
                    f"Database error loading orders ({plan.strategy.value}): {str(e)}"
                ) from e

        record_fetch_statements(plan.strategy.value, counter.count)
        logger.debug(
            "Orders fetched",
            strategy=plan.strategy.value,
            orders=len(orders),
            statements=counter.count,
        )
        return orders

    def _batch_load_order_items(self, orders: Sequence[Order]) -> None:
        """
        Populate ``order_items`` (and each line's item) with IN queries.

        Loaded items are set on each line as committed state. The identity
        map holds objects weakly, so items held only there would be lost.
        """
        if not orders:
            return

        order_ids = [order.id for order in orders]
        order_items_by_order: dict[int, list[OrderItem]] = defaultdict(list)
        for chunk in chunked(order_ids, self.batch_size):
            statement = (
                select(OrderItem)
                .where(OrderItem.order_id.in_(chunk))
                .order_by(OrderItem.id)
            )
            for order_item in self.session.exec(statement):
                order_items_by_order[order_item.order_id].append(order_item)

        item_ids = sorted(
            {
                order_item.item_id
                for order_items in order_items_by_order.values()
                for order_item in order_items
            }
        )
        items_by_id: dict[int, Item] = {}
        for chunk in chunked(item_ids, self.batch_size):
            for item in self.session.exec(select(Item).where(Item.id.in_(chunk))):
                items_by_id[item.id] = item

        for order_items in order_items_by_order.values():
            for order_item in order_items:
                item = items_by_id[order_item.item_id]
                set_committed_value(order_item, "item", item)

        for order in orders:
            set_committed_value(
                order, "order_items", order_items_by_order.get(order.id, [])
            )

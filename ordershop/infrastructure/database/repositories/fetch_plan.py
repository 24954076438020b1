"""
Fetch plans: which associations of an Order are loaded, and how.

A plan is checked before any SQL is built. Joining a to-many collection
multiplies the root rows, which makes offset/limit count joined rows instead
of orders; joining two collections at once forms their cartesian product.
Both are rejected with InvalidFetchPlanError.
"""

from dataclasses import dataclass

from sqlalchemy.orm import contains_eager, joinedload
from sqlalchemy.sql.base import ExecutableOption

from ordershop.domain.ordering.entities import Member, Order, OrderItem
from ordershop.domain.ordering.value_objects import FetchStrategy
from ordershop.domain.shared.exceptions import InvalidFetchPlanError

ORDER_ITEMS = "order_items"
MEMBER_ORDERS = "member.orders"

# To-many paths a plan may join, each with the options that load it
_COLLECTION_OPTIONS = {
    ORDER_ITEMS: lambda: joinedload(Order.order_items).joinedload(
        OrderItem.item, innerjoin=True
    ),
    MEMBER_ORDERS: lambda: joinedload(Order.member, innerjoin=True).joinedload(
        Member.orders
    ),
}


@dataclass(frozen=True)
class FetchPlan:
    """
    Loader configuration for one Order query.

    Attributes:
        strategy: The strategy this plan implements (used for metrics/logs)
        join_to_one: Join member and delivery into the root statement
        joined_collections: To-many paths joined into the root statement
        batch_collections: Load order items with follow-up IN (...) queries
    """

    strategy: FetchStrategy
    join_to_one: bool = False
    joined_collections: tuple[str, ...] = ()
    batch_collections: bool = False

    def __post_init__(self) -> None:
        unknown = set(self.joined_collections) - set(_COLLECTION_OPTIONS)
        if unknown:
            raise InvalidFetchPlanError(
                f"Unknown collection path(s): {', '.join(sorted(unknown))}"
            )
        if len(self.joined_collections) > 1:
            raise InvalidFetchPlanError(
                "At most one to-many collection may be joined per query",
                {"collections": ", ".join(self.joined_collections)},
            )
        if self.joined_collections and self.batch_collections:
            raise InvalidFetchPlanError(
                "A collection cannot be both joined and batch-loaded"
            )

    @classmethod
    def for_strategy(cls, strategy: FetchStrategy) -> "FetchPlan":
        if strategy == FetchStrategy.LAZY:
            return cls(strategy)
        if strategy == FetchStrategy.TO_ONE_JOIN:
            return cls(strategy, join_to_one=True)
        if strategy == FetchStrategy.FULL_JOIN:
            return cls(strategy, join_to_one=True, joined_collections=(ORDER_ITEMS,))
        if strategy == FetchStrategy.BATCHED:
            return cls(strategy, join_to_one=True, batch_collections=True)
        raise InvalidFetchPlanError(f"Unsupported fetch strategy: {strategy}")

    @property
    def joins_collection(self) -> bool:
        return bool(self.joined_collections)

    def check_pagination(self, offset: int | None, limit: int | None) -> None:
        """
        Raises:
            InvalidFetchPlanError: If the plan joins a collection and a page
                was requested
        """
        if self.joins_collection and (offset or limit is not None):
            raise InvalidFetchPlanError(
                "Pagination cannot be combined with a joined collection fetch",
                {"strategy": self.strategy.value, "offset": offset, "limit": limit},
            )

    def loader_options(self, member_joined: bool = False) -> list[ExecutableOption]:
        """
        Build loader options for ``select(Order)``.

        Args:
            member_joined: The statement already joins Member explicitly
                (search); populate ``Order.member`` from that join instead of
                adding a second one
        """
        options: list[ExecutableOption] = []
        if self.join_to_one:
            if member_joined:
                options.append(contains_eager(Order.member))
            else:
                options.append(joinedload(Order.member, innerjoin=True))
            options.append(joinedload(Order.delivery, innerjoin=True))
        for path in self.joined_collections:
            options.append(_COLLECTION_OPTIONS[path]())
        return options

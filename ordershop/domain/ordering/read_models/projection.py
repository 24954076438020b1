"""
Flat-to-nested reconstruction of the order read model.

Three inputs produce the same ``list[OrderQueryDto]``:

- flat rows, one per (order, line item), via ``group_flat_rows``;
- order headers plus a bulk line-item lookup, via ``attach_line_items``;
- loaded Order aggregates (any fetch strategy), via ``project_aggregates``.

Output order always follows the order in which headers were first seen.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..entities.order import Order
from ..value_objects.address import Address
from ..value_objects.enums import OrderStatus
from .order_query import (
    OrderFlatRow,
    OrderItemRow,
    OrderLineItemDto,
    OrderQueryDto,
    OrderSimpleQueryDto,
)


@dataclass(frozen=True, eq=False)
class OrderHeaderKey:
    """
    Grouping key for flat rows.

    Carries the header fields so the first row of a group can rebuild the
    header, but compares and hashes on ``order_id`` alone: duplicated header
    columns never split one order into two groups.
    """

    order_id: int
    member_name: str
    order_date: datetime | None
    status: OrderStatus
    address: Address

    @classmethod
    def from_row(cls, row: OrderFlatRow) -> "OrderHeaderKey":
        return cls(
            order_id=row.order_id,
            member_name=row.member_name,
            order_date=row.order_date,
            status=row.status,
            address=row.address,
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, OrderHeaderKey):
            return NotImplemented
        return self.order_id == other.order_id

    def __hash__(self) -> int:
        return hash(self.order_id)

    def to_dto(self, line_items: list[OrderLineItemDto]) -> OrderQueryDto:
        return OrderQueryDto(
            order_id=self.order_id,
            member_name=self.member_name,
            order_date=self.order_date,
            status=self.status,
            address=self.address,
            line_items=line_items,
        )


def group_flat_rows(rows: Iterable[OrderFlatRow]) -> list[OrderQueryDto]:
    """Group denormalized rows by order identity, keeping row order."""
    grouped: dict[OrderHeaderKey, list[OrderLineItemDto]] = {}
    for row in rows:
        line_items = grouped.setdefault(OrderHeaderKey.from_row(row), [])
        if row.has_line_item:
            line_items.append(row.to_line_item())
    return [key.to_dto(line_items) for key, line_items in grouped.items()]


def collect_order_ids(headers: Iterable[OrderSimpleQueryDto]) -> list[int]:
    return [header.order_id for header in headers]


def attach_line_items(
    headers: Sequence[OrderSimpleQueryDto], line_items: Iterable[OrderItemRow]
) -> list[OrderQueryDto]:
    """
    Second phase of two-phase reconstruction.

    ``line_items`` is the result of one bulk lookup over the header ids. A
    header with no matching rows gets an empty list.
    """
    line_items_by_order: dict[int, list[OrderLineItemDto]] = defaultdict(list)
    for row in line_items:
        line_items_by_order[row.order_id].append(row.to_line_item())

    return [
        OrderQueryDto.from_header(header, line_items_by_order.get(header.order_id, []))
        for header in headers
    ]


def project_aggregate(order: Order) -> OrderQueryDto:
    return OrderQueryDto.from_header(
        OrderSimpleQueryDto.from_order(order),
        [
            OrderLineItemDto(
                item_name=order_item.item.name,
                unit_price=order_item.order_price,
                count=order_item.count,
            )
            for order_item in order.order_items
        ],
    )


def project_aggregates(orders: Iterable[Order]) -> list[OrderQueryDto]:
    return [project_aggregate(order) for order in orders]


def project_orders(
    source: Sequence[Order] | Sequence[OrderFlatRow],
) -> list[OrderQueryDto]:
    """
    Project either loaded aggregates or flat rows to the canonical read model.

    Raises:
        TypeError: If ``source`` mixes element types or holds anything else
    """
    items = list(source)
    if all(isinstance(element, OrderFlatRow) for element in items):
        return group_flat_rows(items)
    if all(isinstance(element, Order) for element in items):
        return project_aggregates(items)
    raise TypeError(
        "project_orders expects only Order aggregates or only OrderFlatRow rows"
    )

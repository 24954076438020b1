"""
Read models for order queries.

These DTOs are the canonical nested shape handed to callers. They serialize
with camelCase aliases (``model_dump(by_alias=True)``) and are built only by
the projection functions, never by the persistence layer directly.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..value_objects.address import Address
from ..value_objects.enums import OrderStatus

if TYPE_CHECKING:
    from ..entities.order import Order


class ReadModel(BaseModel):
    """Base for read models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderLineItemDto(ReadModel):
    """One line item of an order as seen by readers."""

    item_name: str
    unit_price: int = Field(description="Price per unit captured at order time")
    count: int


class OrderSimpleQueryDto(ReadModel):
    """Order header: one per order, no line items."""

    order_id: int
    member_name: str
    order_date: datetime | None = None
    status: OrderStatus
    address: Address

    @classmethod
    def from_order(cls, order: "Order") -> "OrderSimpleQueryDto":
        # Touches order.member and order.delivery; lazy strategies pay for it here.
        return cls(
            order_id=order.id,
            member_name=order.member.name,
            order_date=order.order_date,
            status=order.status,
            address=order.delivery.address,
        )


class OrderQueryDto(OrderSimpleQueryDto):
    """Order header with its line items."""

    line_items: list[OrderLineItemDto] = Field(default_factory=list)

    @classmethod
    def from_header(
        cls, header: OrderSimpleQueryDto, line_items: list[OrderLineItemDto]
    ) -> "OrderQueryDto":
        return cls(
            order_id=header.order_id,
            member_name=header.member_name,
            order_date=header.order_date,
            status=header.status,
            address=header.address,
            line_items=line_items,
        )


class OrderItemRow(ReadModel):
    """Line item row keyed by its parent order, as returned by the bulk lookup."""

    order_id: int
    item_name: str
    order_price: int
    count: int

    def to_line_item(self) -> OrderLineItemDto:
        return OrderLineItemDto(
            item_name=self.item_name, unit_price=self.order_price, count=self.count
        )


class OrderFlatRow(ReadModel):
    """
    One denormalized (order, line item) row.

    Header fields repeat on every row of the same order. An order without
    line items yields a single row whose item fields are None.
    """

    order_id: int
    member_name: str
    order_date: datetime | None = None
    status: OrderStatus
    address: Address

    item_name: str | None = None
    order_price: int | None = None
    count: int | None = None

    @property
    def has_line_item(self) -> bool:
        return self.item_name is not None

    def to_line_item(self) -> OrderLineItemDto:
        return OrderLineItemDto(
            item_name=self.item_name, unit_price=self.order_price, count=self.count
        )

"""
Order aggregate root and its line items.

An Order owns its Delivery and OrderItems: they are created by
``Order.create`` and share the order's lifecycle (cascade all,
delete-orphan). Member and Item are referenced, never owned.

Every bidirectional link is written through one connect operation on the
aggregate root. The mapper's ``back_populates`` instrumentation updates the
inverse side in the same assignment, so neither side is ever set alone.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship

from ...shared.exceptions import InvalidStateError, ValidationError
from ..value_objects.enums import OrderStatus
from .base import IdentifiedModel

if TYPE_CHECKING:
    from .delivery import Delivery
    from .item import Item
    from .member import Member


class OrderItem(IdentifiedModel, table=True):
    """
    A priced, counted reference to an Item within an Order.

    ``order_price`` is a snapshot taken at order time; later price changes
    on the Item do not alter it.
    """

    __tablename__ = "order_items"

    order_id: int | None = Field(default=None, foreign_key="orders.id", index=True)
    item_id: int | None = Field(default=None, foreign_key="items.id", index=True)
    order_price: int = Field(default=0, ge=0)
    count: int = Field(default=0, ge=0)

    # Relationships
    order: Optional["Order"] = Relationship(back_populates="order_items")
    item: Optional["Item"] = Relationship()

    @classmethod
    def create(cls, item: "Item", order_price: int, count: int) -> "OrderItem":
        """
        Take ``count`` units out of ``item`` and build the line item.

        Stock is removed before the line item exists, so an
        InsufficientStockError leaves neither a line item nor a stock change.
        """
        if count < 0:
            raise ValidationError("count", count, "must not be negative")
        item.remove_stock(count)

        order_item = cls(order_price=order_price, count=count)
        order_item.item = item
        return order_item

    def cancel(self) -> None:
        """Return this line's units to stock. The owning order calls it once."""
        self.item.add_stock(self.count)

    def total_price(self) -> int:
        return self.order_price * self.count


class Order(IdentifiedModel, table=True):
    """
    Order aggregate root.

    State machine: ORDER -> CANCEL, CANCEL is terminal.
    """

    __tablename__ = "orders"

    member_id: int | None = Field(default=None, foreign_key="members.id", index=True)
    delivery_id: int | None = Field(
        default=None, foreign_key="deliveries.id", unique=True
    )
    order_date: datetime | None = None
    status: OrderStatus = Field(default=OrderStatus.ORDER)

    # Relationships
    member: Optional["Member"] = Relationship(back_populates="orders")
    delivery: Optional["Delivery"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "single_parent": True},
    )
    order_items: list[OrderItem] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "OrderItem.id",
        },
    )

    @classmethod
    def create(
        cls, member: "Member", delivery: "Delivery", *order_items: OrderItem
    ) -> "Order":
        """
        Wire a new, fully connected order.

        Stock has already been taken by each ``OrderItem.create``; this only
        connects references and stamps the order date.
        """
        order = cls(status=OrderStatus.ORDER, order_date=datetime.now(timezone.utc))
        order.connect_member(member)
        order.connect_delivery(delivery)
        for order_item in order_items:
            order.add_order_item(order_item)
        return order

    # Association helpers
    def connect_member(self, member: "Member") -> None:
        self.member = member  # also appends to member.orders

    def connect_delivery(self, delivery: "Delivery") -> None:
        self.delivery = delivery  # also sets delivery.order

    def add_order_item(self, order_item: OrderItem) -> None:
        self.order_items.append(order_item)  # also sets order_item.order

    # Business logic
    def cancel(self) -> None:
        """
        Cancel the order and put every line item's units back in stock.

        Raises:
            InvalidStateError: If the delivery has completed or the order is
                already cancelled
        """
        if self.delivery is not None and self.delivery.is_completed:
            raise InvalidStateError(
                "Order whose delivery is complete cannot be cancelled",
                {"order_id": self.id, "delivery_status": self.delivery.status.value},
            )
        if not self.status.can_transition_to(OrderStatus.CANCEL):
            raise InvalidStateError(
                f"Order cannot change from {self.status.value} to CANCEL",
                {"order_id": self.id, "status": self.status.value},
            )

        self.status = OrderStatus.CANCEL
        for order_item in self.order_items:
            order_item.cancel()

    def total_price(self) -> int:
        return sum(order_item.total_price() for order_item in self.order_items)

    @property
    def is_cancelled(self) -> bool:
        return self.status == OrderStatus.CANCEL

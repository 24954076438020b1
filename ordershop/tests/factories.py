"""
Test Data Factories

Factory classes for creating ordering entities and read-model rows.
Entities are built through their domain constructors so every link is
wired the same way production code wires it.
"""

from datetime import datetime
from uuid import uuid4

from sqlmodel import Session

from ordershop.domain.ordering.entities import Delivery, Item, Member, Order, OrderItem
from ordershop.domain.ordering.read_models import OrderFlatRow
from ordershop.domain.ordering.value_objects import Address, OrderStatus


class MemberFactory:
    """Factory for creating Member test instances."""

    @staticmethod
    def create(name: str | None = None, city: str = "Seoul") -> Member:
        if name is None:
            name = f"member-{uuid4().hex[:8]}"
        return Member.create(name, Address(city=city, street="1", zipcode="1"))


class ItemFactory:
    """Factory for creating Item test instances."""

    @staticmethod
    def create_book(
        name: str | None = None,
        price: int = 10000,
        stock_quantity: int = 10,
        author: str | None = "kim",
        isbn: str | None = None,
    ) -> Item:
        if name is None:
            name = f"book-{uuid4().hex[:8]}"
        return Item.create_book(name, price, stock_quantity, author=author, isbn=isbn)


class OrderFactory:
    """Factory for creating Order aggregates."""

    @staticmethod
    def create(
        member: Member | None = None, lines: list[tuple[Item, int]] | None = None
    ) -> Order:
        """
        Build an order; each line orders ``count`` units at the item's price.

        Stock is taken from each item exactly as placing an order would.
        """
        member = member or MemberFactory.create()
        order_items = [
            OrderItem.create(item, item.price, count) for item, count in lines or []
        ]
        return Order.create(member, Delivery.create(member.address), *order_items)


class FlatRowFactory:
    """Factory for denormalized (order, line item) rows."""

    @staticmethod
    def create(
        order_id: int,
        item_name: str | None = None,
        order_price: int | None = None,
        count: int | None = None,
        member_name: str = "userA",
        status: OrderStatus = OrderStatus.ORDER,
    ) -> OrderFlatRow:
        return OrderFlatRow(
            order_id=order_id,
            member_name=member_name,
            order_date=datetime(2024, 1, 1, 12, 0),
            status=status,
            address=Address(city="Seoul", street="1", zipcode="1"),
            item_name=item_name,
            order_price=order_price,
            count=count,
        )


class TestDataBuilder:
    """Persists small order graphs for database and service tests."""

    __test__ = False

    @staticmethod
    def persist(session: Session, *entities) -> None:
        for entity in entities:
            session.add(entity)
        session.commit()

    @staticmethod
    def order_with_books(
        session: Session, member_name: str, books: list[tuple[str, int, int, int]]
    ) -> int:
        """
        Persist a member and one order over new books.

        Args:
            books: (name, price, stock_quantity, count) per line

        Returns:
            The order id
        """
        member = MemberFactory.create(member_name)
        lines = [
            (ItemFactory.create_book(name, price, stock), count)
            for name, price, stock, count in books
        ]
        order = OrderFactory.create(member, lines)
        TestDataBuilder.persist(session, member, order)
        return order.id

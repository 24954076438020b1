"""Item entity and its inventory arithmetic."""

from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from ...shared.exceptions import InsufficientStockError, ValidationError
from ..value_objects.enums import ItemKind
from .base import IdentifiedModel
from .category import CategoryItem

if TYPE_CHECKING:
    from .category import Category


class Item(IdentifiedModel, table=True):
    """
    Sellable item.

    Variants share this one table: ``kind`` is the tag and the nullable
    payload columns (``author``, ``isbn`` for books) carry the
    variant-specific data. Price and stock are common to every variant.

    Stock changes are plain read-modify-write on the loaded row. Two
    concurrent sessions touching the same item must be serialized by the
    surrounding transaction (or replaced by an atomic UPDATE); nothing here
    guards against lost updates.
    """

    __tablename__ = "items"

    kind: ItemKind = Field(default=ItemKind.BOOK)
    name: str = Field(max_length=255)
    price: int = Field(default=0, ge=0)
    stock_quantity: int = Field(default=0, ge=0)

    # Book payload
    author: str | None = Field(None, max_length=100)
    isbn: str | None = Field(None, max_length=20)

    # Relationships
    categories: list["Category"] = Relationship(
        back_populates="items", link_model=CategoryItem
    )

    @classmethod
    def create_book(
        cls,
        name: str,
        price: int,
        stock_quantity: int,
        author: str | None = None,
        isbn: str | None = None,
    ) -> "Item":
        return cls(
            kind=ItemKind.BOOK,
            name=name,
            price=price,
            stock_quantity=stock_quantity,
            author=author,
            isbn=isbn,
        )

    @property
    def is_book(self) -> bool:
        return self.kind == ItemKind.BOOK

    def add_stock(self, quantity: int) -> None:
        """Increase stock. Only cancellation restores stock this way."""
        if quantity < 0:
            raise ValidationError("quantity", quantity, "must not be negative")
        self.stock_quantity += quantity

    def remove_stock(self, quantity: int) -> None:
        """
        Decrease stock by ``quantity``.

        Raises:
            ValidationError: If quantity is negative
            InsufficientStockError: If fewer than ``quantity`` units are left;
                stock is left untouched
        """
        if quantity < 0:
            raise ValidationError("quantity", quantity, "must not be negative")
        rest_stock = self.stock_quantity - quantity
        if rest_stock < 0:
            raise InsufficientStockError(self.id, self.stock_quantity, quantity)
        self.stock_quantity = rest_stock

    def change_details(self, name: str, price: int, stock_quantity: int) -> None:
        if price < 0:
            raise ValidationError("price", price, "must not be negative")
        if stock_quantity < 0:
            raise ValidationError(
                "stock_quantity", stock_quantity, "must not be negative"
            )
        self.name = name
        self.price = price
        self.stock_quantity = stock_quantity

"""Member entity: the customer who places orders."""

from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship

from ..value_objects.address import Address
from .base import AddressedModel, IdentifiedModel

if TYPE_CHECKING:
    from .order import Order


class Member(AddressedModel, IdentifiedModel, table=True):
    """
    Member table definition.

    ``orders`` is the inverse side of ``Order.member``. It is populated by
    ``Order.connect_member`` and never written directly.
    """

    __tablename__ = "members"

    name: str = Field(max_length=100, index=True)

    # Relationships
    orders: list["Order"] = Relationship(back_populates="member")

    @classmethod
    def create(cls, name: str, address: Address | None = None) -> "Member":
        return cls(name=name, **cls.address_columns(address))

    def rename(self, name: str) -> None:
        self.name = name

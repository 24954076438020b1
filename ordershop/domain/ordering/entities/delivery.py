"""Delivery entity owned by a single order."""

from typing import TYPE_CHECKING, Optional

from sqlmodel import Field, Relationship

from ..value_objects.address import Address
from ..value_objects.enums import DeliveryStatus
from .base import AddressedModel, IdentifiedModel

if TYPE_CHECKING:
    from .order import Order


class Delivery(AddressedModel, IdentifiedModel, table=True):
    """Delivery table definition. The order row holds the foreign key."""

    __tablename__ = "deliveries"

    status: DeliveryStatus = Field(default=DeliveryStatus.READY)

    # Relationships
    order: Optional["Order"] = Relationship(
        back_populates="delivery", sa_relationship_kwargs={"uselist": False}
    )

    @classmethod
    def create(cls, address: Address | None) -> "Delivery":
        return cls(status=DeliveryStatus.READY, **cls.address_columns(address))

    @property
    def is_completed(self) -> bool:
        return self.status == DeliveryStatus.COMP

    def complete(self) -> None:
        self.status = DeliveryStatus.COMP

"""Shared table bases for ordering entities."""

from sqlmodel import Field, SQLModel

from ..value_objects.address import Address


class IdentifiedModel(SQLModel):
    """Base model with a generated integer surrogate key."""

    id: int | None = Field(default=None, primary_key=True)


class AddressedModel(SQLModel):
    """Base model for tables that embed an Address as plain columns."""

    city: str | None = Field(None, max_length=100)
    street: str | None = Field(None, max_length=255)
    zipcode: str | None = Field(None, max_length=20)

    @property
    def address(self) -> Address:
        return Address(city=self.city, street=self.street, zipcode=self.zipcode)

    @staticmethod
    def address_columns(address: Address | None) -> dict[str, str | None]:
        """Flatten an Address into the column values of this table."""
        return (address or Address()).model_dump()

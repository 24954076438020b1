"""Address value object embedded in members and deliveries."""

from pydantic import Field

from ...shared.base import ValueObject


class Address(ValueObject):
    """Postal address; stored as plain columns on the owning table."""

    city: str | None = Field(None, max_length=100)
    street: str | None = Field(None, max_length=255)
    zipcode: str | None = Field(None, max_length=20)

"""Search criteria for order queries."""

from pydantic import field_validator

from ...shared.base import ValueObject
from .enums import OrderStatus


class OrderSearch(ValueObject):
    """
    Optional filters for order search.

    Either criterion may be absent; a blank member name counts as absent.
    """

    order_status: OrderStatus | None = None
    member_name: str | None = None

    @field_validator("member_name")
    @classmethod
    def blank_name_is_absent(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v

"""Header-only order queries selecting DTO columns directly."""

from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select
from sqlmodel.sql.expression import Select

from ordershop.domain.ordering.entities import Delivery, Member, Order
from ordershop.domain.ordering.read_models import OrderSimpleQueryDto
from ordershop.domain.ordering.value_objects import Address
from ordershop.domain.shared.exceptions import DatabaseError


def header_columns() -> tuple:
    """Labelled columns of one order header row."""
    return (
        Order.id.label("order_id"),
        Member.name.label("member_name"),
        Order.order_date.label("order_date"),
        Order.status.label("status"),
        Delivery.city.label("city"),
        Delivery.street.label("street"),
        Delivery.zipcode.label("zipcode"),
    )


def header_statement(*extra_columns: Any) -> Select:
    """``orders`` inner-joined to member and delivery, one row per order."""
    return (
        select(*header_columns(), *extra_columns)
        .join(Member, Order.member_id == Member.id)
        .join(Delivery, Order.delivery_id == Delivery.id)
    )


def row_values(row: Any) -> dict[str, Any]:
    """Mapping of a result row with the address columns folded into Address."""
    values = dict(row._mapping)
    values["address"] = Address(
        city=values.pop("city"),
        street=values.pop("street"),
        zipcode=values.pop("zipcode"),
    )
    return values


class OrderSimpleQueryRepository:
    """Reads order headers as OrderSimpleQueryDto without loading entities."""

    def __init__(self, session: Session):
        self.session = session

    def find_order_dtos(
        self, offset: int | None = None, limit: int | None = None
    ) -> list[OrderSimpleQueryDto]:
        """
        Select order headers in one statement, in order id order.

        Raises:
            DatabaseError: If database operation fails
        """
        statement = header_statement().order_by(Order.id)
        if offset:
            statement = statement.offset(offset)
        if limit is not None:
            statement = statement.limit(limit)

        try:
            rows = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Error selecting order headers: {str(e)}") from e
        return [OrderSimpleQueryDto(**row_values(row)) for row in rows]

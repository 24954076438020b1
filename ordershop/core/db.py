from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

# make sure all SQLModel models are imported before creating tables or
# initializing the DB, otherwise string relationship targets cannot resolve
from ordershop.domain.ordering.entities import Delivery, Item, Member, Order, OrderItem
from ordershop.domain.ordering.value_objects import Address

from .config import settings
from .observability import get_logger

logger = get_logger(__name__)


def create_db_engine(url: str | None = None, echo: bool | None = None) -> Engine:
    """
    Build an engine for ``url`` (defaults to ``settings.DATABASE_URL``).

    In-memory SQLite gets a single shared connection so every session sees
    the same database.
    """
    url = url or settings.DATABASE_URL
    engine_kwargs: dict = {
        "echo": settings.DATABASE_ECHO if echo is None else echo,
    }

    if url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_pre_ping"] = True

    return create_engine(url, **engine_kwargs)


def create_db_and_tables(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)


def drop_db_and_tables(engine: Engine) -> None:
    SQLModel.metadata.drop_all(engine)


def _seed_order(
    session: Session, name: str, city: str, lines: list[tuple[str, int, int, int]]
) -> Order:
    address = Address(city=city, street="1", zipcode="1")
    member = Member.create(name, address)
    session.add(member)

    order_items = []
    for item_name, price, stock_quantity, count in lines:
        item = Item.create_book(item_name, price, stock_quantity)
        session.add(item)
        order_items.append(OrderItem.create(item, price, count))

    order = Order.create(member, Delivery.create(member.address), *order_items)
    session.add(order)
    return order


def init_db(session: Session) -> None:
    """
    Insert the sample members, books and orders.

    Idempotent: does nothing once any member exists. Commits on success.
    """
    existing = session.exec(select(Member)).first()
    if existing:
        logger.info("Sample data already present, skipping seed")
        return

    _seed_order(
        session,
        "userA",
        "Seoul",
        [("JPA1 BOOK", 10000, 100, 1), ("JPA2 BOOK", 20000, 100, 2)],
    )
    _seed_order(
        session,
        "userB",
        "Busan",
        [("SPRING1 BOOK", 20000, 200, 3), ("SPRING2 BOOK", 40000, 300, 4)],
    )
    session.commit()
    logger.info("Sample data seeded", members=2, orders=2)

"""Database bootstrap tests."""

from sqlmodel import Session, select

from ordershop.core.db import init_db
from ordershop.domain.ordering.entities import Item, Member, Order


class TestInitDb:
    def test_seeds_sample_data(self, engine):
        with Session(engine) as session:
            init_db(session)

        with Session(engine) as session:
            members = session.exec(select(Member).order_by(Member.id)).all()
            items = session.exec(select(Item).order_by(Item.id)).all()

            assert [m.name for m in members] == ["userA", "userB"]
            assert [m.address.city for m in members] == ["Seoul", "Busan"]
            assert [i.stock_quantity for i in items] == [99, 98, 197, 296]
            assert len(session.exec(select(Order)).all()) == 2

    def test_idempotent(self, engine):
        with Session(engine) as session:
            init_db(session)
            init_db(session)

        with Session(engine) as session:
            assert len(session.exec(select(Member)).all()) == 2

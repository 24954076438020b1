"""
Order Query Repository Tests

Column-query read paths against the sample data.
"""

import pytest
from sqlmodel import Session

from ordershop.domain.ordering.entities import Delivery, Order
from ordershop.domain.ordering.read_models import project_aggregates
from ordershop.domain.ordering.value_objects import FetchStrategy
from ordershop.infrastructure.database import StatementCounter
from ordershop.infrastructure.database.repositories import (
    OrderQueryRepository,
    OrderRepository,
    OrderSimpleQueryRepository,
)
from ordershop.tests.factories import MemberFactory

pytestmark = pytest.mark.usefixtures("seeded")


class TestFlatRows:
    def test_one_row_per_line_item(self, db_session):
        rows = OrderQueryRepository(db_session).find_flat_rows()

        assert len(rows) == 4
        assert [(r.order_id, r.item_name) for r in rows] == [
            (1, "JPA1 BOOK"),
            (1, "JPA2 BOOK"),
            (2, "SPRING1 BOOK"),
            (2, "SPRING2 BOOK"),
        ]
        assert rows[0].address.city == "Seoul"


class TestReadPathsAgree:
    def test_flat_bulk_and_per_order_paths_match_aggregates(self, engine):
        with Session(engine) as session:
            repository = OrderQueryRepository(session)
            flat = repository.find_all_by_flat()
            bulk = repository.find_all_by_bulk_lookup()
            per_order = repository.find_order_query_dtos()
            aggregates = project_aggregates(
                OrderRepository(session).find_all(FetchStrategy.FULL_JOIN)
            )

        assert flat == bulk == per_order == aggregates
        assert [len(o.line_items) for o in flat] == [2, 2]

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("find_all_by_flat", 1),
            ("find_all_by_bulk_lookup", 2),
            ("find_order_query_dtos", 1 + 2),
        ],
    )
    def test_statement_counts(self, engine, method, expected):
        with Session(engine) as session, StatementCounter(engine) as counter:
            getattr(OrderQueryRepository(session), method)()

        assert counter.count == expected


class TestOrdersWithoutItems:
    def test_empty_order_has_empty_line_items_on_every_path(self, engine):
        with Session(engine) as session:
            member = MemberFactory.create("userC")
            session.add(Order.create(member, Delivery.create(member.address)))
            session.commit()

        with Session(engine) as session:
            repository = OrderQueryRepository(session)
            flat = repository.find_all_by_flat()
            bulk = repository.find_all_by_bulk_lookup()

        assert flat == bulk
        assert flat[-1].member_name == "userC"
        assert flat[-1].line_items == []


class TestSimpleQuery:
    def test_headers_match_aggregate_headers(self, engine):
        with Session(engine) as session:
            headers = OrderSimpleQueryRepository(session).find_order_dtos()
            orders = OrderRepository(session).find_all(FetchStrategy.TO_ONE_JOIN)

            assert [h.order_id for h in headers] == [o.id for o in orders]
            assert [h.member_name for h in headers] == ["userA", "userB"]
            assert headers[1].address.city == "Busan"

    def test_headers_pageable(self, db_session):
        headers = OrderSimpleQueryRepository(db_session).find_order_dtos(offset=1)

        assert [h.member_name for h in headers] == ["userB"]

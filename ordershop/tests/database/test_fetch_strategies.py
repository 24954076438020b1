"""
Fetch Strategy Tests

Pins the round trips each strategy costs on the sample data (two orders,
two line items each, four distinct items, two members) and checks every
strategy yields the same read model.
"""

import pytest
from sqlmodel import Session

from ordershop.domain.ordering.read_models import project_aggregates
from ordershop.domain.ordering.value_objects import FetchStrategy
from ordershop.domain.shared.exceptions import InvalidFetchPlanError, ValidationError
from ordershop.infrastructure.database import StatementCounter
from ordershop.infrastructure.database.repositories import FetchPlan, OrderRepository
from ordershop.infrastructure.database.repositories.fetch_plan import (
    MEMBER_ORDERS,
    ORDER_ITEMS,
)

pytestmark = pytest.mark.usefixtures("seeded")


def load_and_project(engine, strategy, batch_size=None, **page):
    """Load every order and read the whole graph inside one fresh session."""
    with Session(engine) as session, StatementCounter(engine) as counter:
        repository = OrderRepository(session, batch_size=batch_size)
        orders = repository.find_all(strategy, **page)
        projected = project_aggregates(orders)
    return projected, counter.count


class TestStatementCounts:
    """Test round trips per strategy when the whole graph is read."""

    def test_lazy_issues_one_statement_per_association(self, engine):
        """Test 1 for orders + per order: member, delivery, lines, 2 items."""
        _, statements = load_and_project(engine, FetchStrategy.LAZY)

        assert statements == 1 + 2 * (1 + 1 + 1 + 2)

    def test_to_one_join_leaves_line_items_lazy(self, engine):
        _, statements = load_and_project(engine, FetchStrategy.TO_ONE_JOIN)

        assert statements == 1 + 2 * (1 + 2)

    def test_full_join_single_statement(self, engine):
        _, statements = load_and_project(engine, FetchStrategy.FULL_JOIN)

        assert statements == 1

    def test_batched_three_statements(self, engine):
        """Test orders, then one IN for lines, then one IN for items."""
        _, statements = load_and_project(engine, FetchStrategy.BATCHED)

        assert statements == 3

    def test_batched_narrow_batches_cost_more_round_trips(self, engine):
        """Test batch size 1: 1 + 2 line batches + 4 item batches."""
        wide, _ = load_and_project(engine, FetchStrategy.BATCHED)
        narrow, statements = load_and_project(
            engine, FetchStrategy.BATCHED, batch_size=1
        )

        assert statements == 1 + 2 + 4
        assert narrow == wide


class TestStrategiesAgree:
    def test_every_strategy_projects_the_same_orders(self, engine):
        """Test the read model does not depend on how the graph was loaded."""
        results = [load_and_project(engine, s)[0] for s in FetchStrategy]

        assert all(result == results[0] for result in results)
        assert [o.member_name for o in results[0]] == ["userA", "userB"]
        assert [len(o.line_items) for o in results[0]] == [2, 2]

    def test_full_join_deduplicates_orders(self, db_session):
        orders = OrderRepository(db_session).find_all(FetchStrategy.FULL_JOIN)

        assert len(orders) == 2
        assert len({id(order) for order in orders}) == 2


class TestPagination:
    @pytest.mark.parametrize(
        "strategy",
        [FetchStrategy.LAZY, FetchStrategy.TO_ONE_JOIN, FetchStrategy.BATCHED],
    )
    def test_pageable_strategies_page_by_order(self, engine, strategy):
        """Test offset/limit count orders, not joined rows."""
        projected, _ = load_and_project(engine, strategy, offset=1, limit=1)

        assert len(projected) == 1
        assert projected[0].member_name == "userB"
        assert [line.item_name for line in projected[0].line_items] == [
            "SPRING1 BOOK",
            "SPRING2 BOOK",
        ]

    @pytest.mark.parametrize("page", [{"limit": 1}, {"offset": 1}])
    def test_full_join_rejects_pagination(self, db_session, page):
        """Test pagination with a joined collection fails before any SQL."""
        with pytest.raises(InvalidFetchPlanError):
            OrderRepository(db_session).find_all(FetchStrategy.FULL_JOIN, **page)


class TestFetchPlan:
    def test_two_joined_collections_rejected(self):
        with pytest.raises(InvalidFetchPlanError):
            FetchPlan(
                FetchStrategy.FULL_JOIN,
                join_to_one=True,
                joined_collections=(ORDER_ITEMS, MEMBER_ORDERS),
            )

    def test_unknown_collection_rejected(self):
        with pytest.raises(InvalidFetchPlanError):
            FetchPlan(FetchStrategy.FULL_JOIN, joined_collections=("payments",))

    def test_explicit_plan_accepted_by_repository(self, db_session):
        plan = FetchPlan.for_strategy(FetchStrategy.TO_ONE_JOIN)

        orders = OrderRepository(db_session).find_all(plan)

        assert len(orders) == 2

    def test_batch_size_bounds(self, db_session):
        with pytest.raises(ValidationError):
            OrderRepository(db_session, batch_size=1001)

"""
Unit of Work Tests

Tests commit on success, rollback on error and the statement counter.
"""

import pytest
from sqlalchemy import text

from ordershop.domain.ordering.entities import Member
from ordershop.domain.shared.exceptions import DatabaseError
from ordershop.infrastructure.database import SqlModelUnitOfWork
from ordershop.tests.factories import MemberFactory


class TestSqlModelUnitOfWork:
    def test_commits_on_success(self, uow_factory):
        with uow_factory() as uow:
            uow.members.save(MemberFactory.create("kim"))

        with uow_factory() as uow:
            assert [m.name for m in uow.members.find_by_name("kim")] == ["kim"]

    def test_rolls_back_and_reraises(self, uow_factory):
        with pytest.raises(RuntimeError):
            with uow_factory() as uow:
                uow.members.save(MemberFactory.create("kim"))
                raise RuntimeError("boom")

        with uow_factory() as uow:
            assert uow.members.find_by_name("kim") == []

    def test_repositories_share_one_session(self, uow_factory):
        with uow_factory() as uow:
            assert uow.members.session is uow.orders.session
            assert uow.items.session is uow.session

    def test_session_outside_context_raises(self, session_factory):
        uow = SqlModelUnitOfWork(session_factory)

        with pytest.raises(DatabaseError):
            uow.session

    def test_commit_failure_wrapped(self, uow_factory):
        """Test a failing flush at commit surfaces as DatabaseError."""
        with pytest.raises(DatabaseError):
            with uow_factory() as uow:
                uow.session.add(Member(id=1, name="a"))
                uow.session.add(Member(id=1, name="b"))

        with uow_factory() as uow:
            assert uow.members.find_all() == []


class TestStatementCounter:
    def test_counts_only_while_active(self, engine, statement_counter):
        with engine.connect() as connection:
            with statement_counter:
                connection.execute(text("SELECT 1"))
                connection.execute(text("SELECT 2"))
            connection.execute(text("SELECT 3"))

        assert statement_counter.count == 2
        assert statement_counter.statements == ["SELECT 1", "SELECT 2"]

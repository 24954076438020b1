"""Count SQL statements issued by an engine or by one session."""

from typing import Any

from sqlalchemy import Engine, event
from sqlalchemy.orm import ORMExecuteState
from sqlmodel import Session


class StatementCounter:
    """
    Context manager counting ``before_cursor_execute`` events on an engine.

    Counts every statement on the engine while active, so callers sharing
    the engine across threads see each other's statements. Meant for tests.

    Example:
        with StatementCounter(engine) as counter:
            repository.find_all(FetchStrategy.BATCHED)
        assert counter.count == 3
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.count = 0
        self.statements: list[str] = []
        # event.remove() matches on the same callable object
        self._listener = self._on_execute

    def _on_execute(
        self,
        conn: Any,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        self.count += 1
        self.statements.append(statement)

    def reset(self) -> None:
        self.count = 0
        self.statements.clear()

    def __enter__(self) -> "StatementCounter":
        event.listen(self.engine, "before_cursor_execute", self._listener)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        event.remove(self.engine, "before_cursor_execute", self._listener)


class SessionStatementCounter:
    """
    Context manager counting ORM executions on one session.

    Listens to ``do_orm_execute`` on the session instance only, so other
    sessions on the same engine are never counted. Relationship loads
    emitted through the session count too.
    """

    def __init__(self, session: Session):
        self.session = session
        self.count = 0
        self._listener = self._on_execute

    def _on_execute(self, orm_execute_state: ORMExecuteState) -> None:
        self.count += 1

    def __enter__(self) -> "SessionStatementCounter":
        event.listen(self.session, "do_orm_execute", self._listener)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        event.remove(self.session, "do_orm_execute", self._listener)

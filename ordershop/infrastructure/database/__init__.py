from .statement_counter import SessionStatementCounter, StatementCounter
from .unit_of_work import SqlModelUnitOfWork

__all__ = ["SessionStatementCounter", "SqlModelUnitOfWork", "StatementCounter"]

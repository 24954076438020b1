"""
Observability Infrastructure

Structured logging and Prometheus metrics for ordering operations and
fetch-plan statement costs.
"""

import functools
import logging
import sys
import time
from collections.abc import Callable
from typing import Any, TypeVar

import structlog
from prometheus_client import Counter, Histogram

from .config import settings

F = TypeVar("F", bound=Callable[..., Any])

# Prometheus metrics
ORDER_OPERATIONS = Counter(
    "ordershop_operations_total",
    "Total ordering operations",
    ["operation", "status"],
)

ORDER_OPERATION_DURATION = Histogram(
    "ordershop_operation_duration_seconds",
    "Ordering operation duration",
    ["operation"],
)

FETCH_STATEMENTS = Histogram(
    "ordershop_fetch_statements",
    "SQL statements issued per order load, by fetch strategy",
    ["strategy"],
    buckets=(1, 2, 3, 5, 10, 25, 50, 100, 250),
)


def setup_structured_logging() -> None:
    """Configure structlog and the standard library root logger."""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.add_log_level,
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(colors=settings.ENVIRONMENT == "local")
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # SQL echo goes through the sqlalchemy.engine logger
    if settings.LOG_SQL:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
    else:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance bound to its logger name."""
    return structlog.get_logger(name, logger_name=name)


def record_fetch_statements(strategy: str, statements: int) -> None:
    """Record how many statements one order load cost."""
    if settings.ENABLE_METRICS:
        FETCH_STATEMENTS.labels(strategy=strategy).observe(statements)


def monitor_operation(operation: str) -> Callable[[F], F]:
    """Decorator that logs an ordering operation and records its outcome."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger(func.__module__)
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                duration = time.perf_counter() - start_time
                if settings.ENABLE_METRICS:
                    ORDER_OPERATIONS.labels(operation=operation, status="error").inc()
                logger.warning(
                    "Operation failed",
                    operation=operation,
                    duration_seconds=duration,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

            duration = time.perf_counter() - start_time
            if settings.ENABLE_METRICS:
                ORDER_OPERATIONS.labels(operation=operation, status="success").inc()
                ORDER_OPERATION_DURATION.labels(operation=operation).observe(duration)
            logger.debug(
                "Operation completed",
                operation=operation,
                duration_seconds=duration,
            )
            return result

        return wrapper  # type: ignore[return-value]

    return decorator


def initialize_observability() -> None:
    setup_structured_logging()
    get_logger("observability").info(
        "Observability initialized",
        project=settings.PROJECT_NAME,
        environment=settings.ENVIRONMENT,
        log_format=settings.LOG_FORMAT,
        log_level=settings.LOG_LEVEL,
        metrics_enabled=settings.ENABLE_METRICS,
    )

import os
import time
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar

from psycopg2 import InterfaceError, OperationalError
from psycopg2.extensions import connection as PgConnection
from psycopg2.extensions import cursor as PgCursor

from .connection import DBConnectionManager, log

_T = TypeVar("_T")

MAX_RETRIES = int(os.getenv("DB_MAX_RETRIES", "3"))
RETRY_DELAY = float(os.getenv("DB_RETRY_DELAY", "0.5"))

# Serialization failure, deadlock, connection exceptions, cannot connect now
RETRYABLE_PGCODES = frozenset(
    {"40P01", "40001", "08000", "08001", "08003", "08004", "08006", "57P03"}
)
# Integrity constraint violations and syntax/access errors
NON_RETRYABLE_PGCODE_PREFIXES = ("23", "42")


class DBDoNotRetryError(Exception):
    """Raised for errors that should never be retried (e.g., constraint violations)."""


def _truncate_sql(sql: str, limit: int = 150) -> str:
    return sql if len(sql) <= limit else f"{sql[:limit]}...(truncated)"


def _log_sql_error(context: str, sql: str, params: Optional[Sequence[Any]], exc: Exception) -> None:
    log.error(
        "DB_ERROR|context=%s|sql=%s|params=%s|error=%s",
        context,
        _truncate_sql(" ".join(sql.split())),
        params,
        exc,
    )


def _is_retryable_error(exc: Exception) -> bool:
    if isinstance(exc, (OperationalError, InterfaceError)):
        return True

    pgcode = getattr(exc, "pgcode", None)
    return bool(pgcode) and pgcode in RETRYABLE_PGCODES


def _is_do_not_retry_error(exc: Exception) -> bool:
    if isinstance(exc, DBDoNotRetryError):
        return True

    pgcode = getattr(exc, "pgcode", None)
    return bool(pgcode) and pgcode.startswith(NON_RETRYABLE_PGCODE_PREFIXES)


def _execute_with_retry(
    operation: Callable[[], _T], context: str = "", retry: bool = True, max_retries: int = MAX_RETRIES
) -> _T:
    if not retry:
        return operation()

    for attempt in range(max_retries):
        try:
            return operation()
        except Exception as exc:
            if _is_do_not_retry_error(exc):
                raise

            if not _is_retryable_error(exc) or attempt == max_retries - 1:
                raise

            delay = RETRY_DELAY * (2**attempt)
            log.warning(
                "DB_RETRY|context=%s|attempt=%d|max=%d|delay=%.2f|error=%s",
                context,
                attempt + 1,
                max_retries,
                delay,
                exc,
            )
            time.sleep(delay)

    raise RuntimeError(f"{context}: retry loop exited without result")


def _fetch_results(cursor: PgCursor, fetch: Optional[str]) -> Any:
    if fetch == "one":
        return cursor.fetchone()
    if fetch == "all":
        rows = cursor.fetchall()
        return rows if rows is not None else []
    return True


class DBExecutor:
    @classmethod
    def _run(
        cls,
        work: Callable[[PgCursor], _T],
        cursor_factory: Optional[Callable[..., PgCursor]],
        context: str,
        sql: str,
        params: Optional[Sequence[Any]],
        retry: bool,
    ) -> _T:
        def operation() -> _T:
            conn: Optional[PgConnection] = None
            error: Optional[Exception] = None

            try:
                conn = DBConnectionManager.get_connection()
                # 'with conn' commits on success and rolls back on exception
                with conn:
                    with conn.cursor(cursor_factory=cursor_factory) as cursor:
                        return work(cursor)
            except Exception as exc:
                error = exc
                _log_sql_error(context, sql, params, exc)
                raise
            finally:
                if conn is not None:
                    DBConnectionManager.release_connection(conn, error)

        return _execute_with_retry(operation, context=context, retry=retry)

    @classmethod
    def _execute(
        cls,
        sql: str,
        params: Optional[Sequence[Any]] = None,
        fetch: Optional[str] = None,
        cursor_factory: Optional[Callable[..., PgCursor]] = None,
        context: str = "",
        retry: bool = True,
    ) -> Any:
        def work(cursor: PgCursor) -> Any:
            cursor.execute(sql, params)
            return _fetch_results(cursor, fetch)

        return cls._run(work, cursor_factory, context, sql, params, retry)

    @classmethod
    def execute_non_query(
        cls, sql: str, params: Optional[Sequence[Any]] = None, context: str = "non_query", retry: bool = True
    ) -> bool:
        return bool(cls._execute(sql, params=params, context=context, retry=retry))

    @classmethod
    def execute_many(
        cls,
        sql: str,
        param_sets: Iterable[Sequence[Any]],
        context: str = "batch",
        retry: bool = True,
    ) -> bool:
        params_list = list(param_sets)
        for idx, param_set in enumerate(params_list):
            if not isinstance(param_set, (list, tuple)):
                raise ValueError(f"Batch parameter set at index {idx} must be a list or tuple")

        def work(cursor: PgCursor) -> bool:
            cursor.executemany(sql, params_list)
            return True

        return cls._run(work, None, context, sql, None, retry)

    @classmethod
    def fetch_one(
        cls,
        sql: str,
        params: Optional[Sequence[Any]] = None,
        cursor_factory: Optional[Callable[..., PgCursor]] = None,
        context: str = "fetch_one",
        retry: bool = True,
    ) -> Optional[Any]:
        return cls._execute(
            sql, params=params, fetch="one", cursor_factory=cursor_factory, context=context, retry=retry
        )

    @classmethod
    def fetch_all(
        cls,
        sql: str,
        params: Optional[Sequence[Any]] = None,
        cursor_factory: Optional[Callable[..., PgCursor]] = None,
        context: str = "fetch_all",
        retry: bool = True,
    ) -> list[Any]:
        return cls._execute(
            sql, params=params, fetch="all", cursor_factory=cursor_factory, context=context, retry=retry
        )

    @classmethod
    def execute_transaction(
        cls,
        work: Callable[[PgCursor], _T],
        context: str = "transaction",
        cursor_factory: Optional[Callable[..., PgCursor]] = None,
        retry: bool = True,
    ) -> _T:
        return cls._run(work, cursor_factory, context, "<transaction>", None, retry)

import os
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from psycopg2 import InterfaceError, OperationalError
from psycopg2.extensions import connection as PgConnection
from psycopg2.pool import ThreadedConnectionPool

from ltp_engine.logger import get_logger

log = get_logger(__name__)

CONNECTION_TIMEOUT = int(os.getenv("DB_CONNECTION_TIMEOUT", "30"))


class DBConnectionError(Exception):
    """Raised when the database connection cannot be acquired."""


class DBConnectionManager:
    _pool: Optional[ThreadedConnectionPool] = None
    _pool_lock = threading.Lock()

    @classmethod
    def init_pool(cls, minconn: Optional[int] = None, maxconn: Optional[int] = None) -> ThreadedConnectionPool:
        if cls._pool:
            return cls._pool

        with cls._pool_lock:
            if cls._pool:
                return cls._pool

            # Deferred import so settings are read after .env is loaded
            from ltp_engine.configuration import POSTGRES_DB

            min_conn = int(os.getenv("DB_POOL_MIN_CONN", minconn or 1))
            max_conn = int(os.getenv("DB_POOL_MAX_CONN", maxconn or 10))

            try:
                db_config = dict(POSTGRES_DB)
                db_config.setdefault("connect_timeout", CONNECTION_TIMEOUT)
                cls._pool = ThreadedConnectionPool(min_conn, max_conn, **db_config)
            except Exception as exc:
                cls._pool = None
                log.error("DB_POOL_INIT_FAILED|error=%s", exc, exc_info=True)
                raise

        log.info("DB_POOL_INITIALIZED|min=%d|max=%d", min_conn, max_conn)
        return cls._pool

    @classmethod
    def get_connection(cls) -> PgConnection:
        try:
            return cls.init_pool().getconn()
        except Exception as exc:
            log.error("DB_CONNECTION_RETRIEVE_FAILED|error=%s", exc, exc_info=True)
            raise DBConnectionError("Failed to acquire database connection") from exc

    @classmethod
    def release_connection(
        cls, conn: Optional[PgConnection], error: Optional[Exception] = None
    ) -> None:
        if not conn or not cls._pool:
            return

        close_conn = isinstance(error, (OperationalError, InterfaceError))
        if close_conn:
            log.warning("DB_CLOSING_BAD_CONNECTION|error_type=%s", type(error).__name__)

        try:
            cls._pool.putconn(conn, close=close_conn)
        except Exception as exc:
            log.error("DB_CONNECTION_RELEASE_FAILED|error=%s", exc, exc_info=True)

    @classmethod
    @contextmanager
    def get_connection_context(cls) -> Iterator[PgConnection]:
        conn = None
        error = None
        try:
            conn = cls.get_connection()
            yield conn
        except Exception as exc:
            error = exc
            raise
        finally:
            if conn is not None:
                cls.release_connection(conn, error)

    @classmethod
    def close_pool(cls) -> None:
        with cls._pool_lock:
            if cls._pool:
                try:
                    cls._pool.closeall()
                    log.info("DB_POOL_CLOSED")
                except Exception as exc:
                    log.error("DB_POOL_CLOSE_FAILED|error=%s", exc, exc_info=True)
                finally:
                    cls._pool = None

    @classmethod
    def get_pool_stats(cls) -> dict:
        if not cls._pool:
            return {"status": "not_initialized"}

        return {
            "status": "active",
            "minconn": cls._pool.minconn,
            "maxconn": cls._pool.maxconn,
        }

"""Database access layer consolidating connection, execution, and validation logic."""

from .connection import DBConnectionError, DBConnectionManager
from .executor import DBDoNotRetryError, DBExecutor
from .validation import DBValidator


def init_pool(minconn=None, maxconn=None):
    return DBConnectionManager.init_pool(minconn=minconn, maxconn=maxconn)


def close_pool():
    return DBConnectionManager.close_pool()


def get_pool_stats():
    return DBConnectionManager.get_pool_stats()


__all__ = [
    "init_pool",
    "close_pool",
    "get_pool_stats",
    "DBConnectionError",
    "DBDoNotRetryError",
    "DBExecutor",
    "DBConnectionManager",
    "DBValidator",
]

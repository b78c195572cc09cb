from .base import SetupStore
from .postgres import PostgresSetupStore

__all__ = ["SetupStore", "PostgresSetupStore"]

import os

from ltp_engine.logger import get_logger

logger = get_logger(__name__)

POSTGRES_DB = {
    "dbname": os.getenv("DB_NAME", "ltp"),
    "user": os.getenv("DB_USER", "postgres"),
    "password": os.getenv("DB_PASSWORD"),  # No default for password!
    "host": os.getenv("DB_HOST", "localhost"),
    "port": os.getenv("DB_PORT", "5432"),
    "options": os.getenv("DB_OPTIONS", "-c search_path=public"),
}

if POSTGRES_DB["password"] is None:
    logger.warning("DB_PASSWORD environment variable not set.")

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from psycopg2.extras import RealDictCursor

from ltp_engine.configuration.ltp_config import KEY_LEVEL_EXPIRY_MINUTES
from ltp_engine.database.executor import DBExecutor
from ltp_engine.database.queries import CLEAR_KEY_LEVELS, FETCH_ACTIVE_KEY_LEVELS, INSERT_KEY_LEVEL
from ltp_engine.database.validation import DBValidator
from ltp_engine.logger import get_logger
from ltp_engine.models import KeyLevel

logger = get_logger(__name__)


def fetch_key_levels(symbol: str, now: Optional[datetime] = None) -> List[KeyLevel]:
    """Return the symbol's non-expired levels, or ``[]`` on any failure."""
    normalized_symbol = DBValidator.validate_symbol(symbol)
    if not normalized_symbol:
        return []

    reference = now or datetime.now(timezone.utc)
    try:
        rows = DBExecutor.fetch_all(
            FETCH_ACTIVE_KEY_LEVELS,
            (normalized_symbol, reference),
            cursor_factory=RealDictCursor,
            context="fetch_key_levels",
            retry=False,
        )
    except Exception:
        logger.exception(f"Failed to fetch key levels for {normalized_symbol}")
        return []

    levels: List[KeyLevel] = []
    for row in rows or []:
        try:
            levels.append(KeyLevel.from_row(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Skipping malformed key level row for {normalized_symbol}: {exc}")
    return levels


def store_key_levels(
    symbol: str,
    levels: Sequence[KeyLevel],
    expires_in_minutes: int = KEY_LEVEL_EXPIRY_MINUTES,
    now: Optional[datetime] = None,
) -> None:
    """Replace the symbol's stored levels with ``levels`` in one transaction."""
    normalized_symbol = DBValidator.validate_symbol(symbol)
    if not normalized_symbol:
        return

    expires_at = (now or datetime.now(timezone.utc)) + timedelta(minutes=expires_in_minutes)
    param_sets = []
    for level in levels:
        if not isinstance(level, KeyLevel):
            logger.error("DB_VALIDATION: levels must be KeyLevel instances")
            return
        if not DBValidator.validate_positive_float(level.price, "price"):
            return
        param_sets.append(
            (
                normalized_symbol,
                level.level_type,
                level.timeframe,
                level.price,
                level.strength,
                expires_at,
            )
        )

    def work(cursor) -> bool:
        cursor.execute(CLEAR_KEY_LEVELS, (normalized_symbol,))
        if param_sets:
            cursor.executemany(INSERT_KEY_LEVEL, param_sets)
        return True

    DBExecutor.execute_transaction(work, context="store_key_levels")

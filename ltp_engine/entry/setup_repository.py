"""Repository for detected LTP setups."""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from psycopg2.extras import RealDictCursor

from ltp_engine.configuration.ltp_config import RECENT_WINDOW_MINUTES
from ltp_engine.database.executor import DBExecutor
from ltp_engine.database.queries import (
    DETECTED_SETUP_COLUMNS,
    FETCH_RECENT_SETUPS,
    FETCH_RECENT_SETUPS_FOR_SYMBOLS,
    UPSERT_DETECTED_SETUP,
)
from ltp_engine.database.validation import DBValidator
from ltp_engine.logger import get_logger
from ltp_engine.models import DetectedSetup

logger = get_logger(__name__)

SETUP_FIELDS = tuple(column.strip() for column in DETECTED_SETUP_COLUMNS.split(","))


def fetch_detected_setups(
    symbols: Optional[Iterable[str]] = None,
    window_minutes: int = RECENT_WINDOW_MINUTES,
    now: Optional[datetime] = None,
) -> List[DetectedSetup]:
    """
    Fetch setups detected within the trailing window, best confluence first.

    Args:
        symbols: Optional symbol filter, None or empty for all symbols;
            invalid symbols are dropped
        window_minutes: Size of the recency window
        now: Reference time (defaults to current UTC time)

    Returns:
        List of DetectedSetup, empty on any failure
    """
    since = (now or datetime.now(timezone.utc)) - timedelta(minutes=window_minutes)

    symbols = list(symbols) if symbols is not None else []
    if not symbols:
        sql, params = FETCH_RECENT_SETUPS, (since,)
    else:
        normalized = [s for s in (DBValidator.validate_symbol(sym) for sym in symbols) if s]
        if not normalized:
            return []
        sql, params = FETCH_RECENT_SETUPS_FOR_SYMBOLS, (since, normalized)

    try:
        rows = DBExecutor.fetch_all(
            sql,
            params,
            cursor_factory=RealDictCursor,
            context="fetch_detected_setups",
            retry=False,
        )
    except Exception:
        logger.exception("Failed to fetch detected setups")
        return []

    setups: List[DetectedSetup] = []
    for row in rows or []:
        try:
            setups.append(DetectedSetup.from_row(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Skipping malformed detected setup row: {exc}")
    return setups


def store_detected_setup(setup: DetectedSetup, detected_at: Optional[datetime] = None) -> bool:
    """Upsert ``setup`` as the symbol's current setup (one row per symbol)."""
    normalized_symbol = DBValidator.validate_symbol(setup.symbol)
    if not normalized_symbol:
        return False
    for field_name in (
        "primary_level_price",
        "suggested_entry",
        "suggested_stop",
        "target_1",
        "target_2",
        "target_3",
        "risk_reward",
    ):
        if not DBValidator.validate_nullable_float(getattr(setup, field_name), field_name):
            return False

    stamped = replace(
        setup,
        symbol=normalized_symbol,
        detected_at=detected_at or setup.detected_at or datetime.now(timezone.utc),
    )
    record = stamped.to_record()

    return DBExecutor.execute_non_query(
        UPSERT_DETECTED_SETUP,
        tuple(record[column] for column in SETUP_FIELDS),
        context="store_detected_setup",
    )

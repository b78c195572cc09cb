from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from psycopg2.extras import RealDictCursor

from ltp_engine.configuration.ltp_config import RECENT_WINDOW_MINUTES
from ltp_engine.database.executor import DBExecutor
from ltp_engine.database.queries import FETCH_RECENT_MTF_ANALYSIS, UPSERT_MTF_ANALYSIS
from ltp_engine.database.validation import DBValidator
from ltp_engine.logger import get_logger
from ltp_engine.models import MTFAnalysis, TrendDirection

logger = get_logger(__name__)


def fetch_mtf_analysis(
    symbol: str,
    window_minutes: int = RECENT_WINDOW_MINUTES,
    now: Optional[datetime] = None,
) -> List[MTFAnalysis]:
    """Return the symbol's MTF rows calculated within the trailing window."""
    normalized_symbol = DBValidator.validate_symbol(symbol)
    if not normalized_symbol:
        return []

    since = (now or datetime.now(timezone.utc)) - timedelta(minutes=window_minutes)
    try:
        rows = DBExecutor.fetch_all(
            FETCH_RECENT_MTF_ANALYSIS,
            (normalized_symbol, since),
            cursor_factory=RealDictCursor,
            context="fetch_mtf_analysis",
            retry=False,
        )
    except Exception:
        logger.exception(f"Failed to fetch MTF analysis for {normalized_symbol}")
        return []

    analyses: List[MTFAnalysis] = []
    for row in rows or []:
        try:
            analyses.append(MTFAnalysis.from_row(row))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Skipping malformed MTF row for {normalized_symbol}: {exc}")
    return analyses


def store_mtf_analysis(symbol: str, analyses: Sequence[MTFAnalysis]) -> None:
    normalized_symbol = DBValidator.validate_symbol(symbol)
    if not normalized_symbol:
        return

    param_sets = []
    for analysis in analyses:
        normalized_timeframe = DBValidator.validate_timeframe(analysis.timeframe)
        if not normalized_timeframe:
            return
        if not isinstance(analysis.trend, TrendDirection):
            logger.error("DB_VALIDATION: trend must be provided as a TrendDirection")
            return
        param_sets.append(
            (
                normalized_symbol,
                normalized_timeframe,
                analysis.trend.value,
                analysis.structure,
                analysis.ema_position,
                analysis.momentum,
                analysis.orb_status,
                analysis.vwap_position,
            )
        )

    if param_sets:
        DBExecutor.execute_many(UPSERT_MTF_ANALYSIS, param_sets, context="store_mtf_analysis")

"""Key level refresh job for a single symbol."""

from __future__ import annotations

from typing import List, Optional

from ltp_engine.levels.identification import BarsInput, build_key_levels, identify_key_levels
from ltp_engine.levels.level_repository import store_key_levels
from ltp_engine.logger import get_logger
from ltp_engine.models import KeyLevel

logger = get_logger(__name__)


def refresh_key_levels(
    symbol: str,
    daily_bars: Optional[BarsInput],
    intraday_bars: Optional[BarsInput],
    weekly_bars: Optional[BarsInput] = None,
    *,
    swing_bars: Optional[BarsInput] = None,
) -> List[KeyLevel]:
    """Recompute the symbol's levels and replace the stored set.

    Swing support/resistance clusters from ``swing_bars`` are appended to the
    standard level set when provided.
    """
    levels = build_key_levels(daily_bars, intraday_bars, weekly_bars)
    if swing_bars is not None:
        levels.extend(identify_key_levels(swing_bars))

    if not levels:
        logger.info(f"  -> No key levels derived for {symbol}, keeping stored set.")
        return []

    store_key_levels(symbol, levels)
    logger.info(f"  -> Stored {len(levels)} key levels for {symbol}")
    return levels

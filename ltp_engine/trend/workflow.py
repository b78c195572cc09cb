"""Multi-timeframe analysis refresh for a single symbol.

Keeps the per-timeframe orchestration separate from the classification
logic in ``trend.analysis``.
"""

from __future__ import annotations

from typing import Iterable, List, Mapping, Optional

from ltp_engine.configuration.ltp_config import DEFAULT_TIMEFRAMES
from ltp_engine.logger import get_logger
from ltp_engine.models import MTFAnalysis
from ltp_engine.trend.analysis import BarsInput, analyze_timeframe
from ltp_engine.trend.mtf_repository import store_mtf_analysis

logger = get_logger(__name__)


def analyze_symbol_timeframes(
    symbol: str,
    bars_by_timeframe: Mapping[str, Optional[BarsInput]],
    timeframes: Iterable[str] = DEFAULT_TIMEFRAMES,
) -> List[MTFAnalysis]:
    """Analyze each requested timeframe that has bars; failures are skipped."""
    analyses: List[MTFAnalysis] = []
    for timeframe in timeframes:
        bars = bars_by_timeframe.get(timeframe)
        if bars is None:
            logger.info(f"  -> No candles for {symbol} on TF {timeframe}, skipping.")
            continue
        try:
            analyses.append(analyze_timeframe(timeframe, bars))
        except (KeyError, TypeError, ValueError) as exc:
            logger.error(f"Failed to analyze {symbol}/{timeframe}: {exc}")
    return analyses


def refresh_mtf_analysis(
    symbol: str,
    bars_by_timeframe: Mapping[str, Optional[BarsInput]],
    timeframes: Iterable[str] = DEFAULT_TIMEFRAMES,
) -> List[MTFAnalysis]:
    """Recompute and upsert the symbol's per-timeframe trend reads."""
    logger.info(f"\n--- 🔄 Running MTF analysis for {symbol} ---")
    analyses = analyze_symbol_timeframes(symbol, bars_by_timeframe, timeframes)
    if analyses:
        store_mtf_analysis(symbol, analyses)
    logger.info(f"  -> {symbol}: {len(analyses)} timeframes analyzed")
    return analyses

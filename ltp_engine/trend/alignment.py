"""Trend (T): multi-timeframe alignment scoring and direction selection."""

from typing import Mapping, Optional, Sequence

from ltp_engine.configuration.ltp_config import DEFAULT_TIMEFRAME_WEIGHTS, UNKNOWN_TIMEFRAME_WEIGHT
from ltp_engine.constants import TREND_BEARISH, TREND_BULLISH, TREND_NEUTRAL
from ltp_engine.models import MTFAnalysis, TrendDirection
from ltp_engine.utils.numbers import round_score


def score_trend_alignment(
    mtf_analyses: Sequence[MTFAnalysis],
    direction: TrendDirection,
    weights: Optional[Mapping[str, float]] = None,
) -> int:
    """Sum ``weight * 100`` over timeframes trending with ``direction``.

    Timeframes missing from ``weights`` count with the unknown-timeframe
    weight. Neutral or opposing timeframes add nothing, and a neutral
    ``direction`` always scores 0.
    """
    direction = TrendDirection.from_raw(direction)
    if direction not in (TREND_BULLISH, TREND_BEARISH):
        return 0

    weight_map = DEFAULT_TIMEFRAME_WEIGHTS if weights is None else weights
    total = 0.0
    for analysis in mtf_analyses:
        if analysis.trend != direction:
            continue
        total += weight_map.get(analysis.timeframe, UNKNOWN_TIMEFRAME_WEIGHT) * 100

    return round_score(total)


def determine_direction(mtf_analyses: Sequence[MTFAnalysis]) -> TrendDirection:
    """Bullish only when bullish timeframes outnumber bearish ones."""
    bullish = sum(1 for a in mtf_analyses if a.trend == TREND_BULLISH)
    bearish = sum(1 for a in mtf_analyses if a.trend == TREND_BEARISH)
    return TREND_BULLISH if bullish > bearish else TREND_BEARISH


def aligned_timeframes(mtf_analyses: Sequence[MTFAnalysis], direction: TrendDirection) -> list[str]:
    direction = TrendDirection.from_raw(direction)
    if direction in (None, TREND_NEUTRAL):
        return []
    return [a.timeframe for a in mtf_analyses if a.trend == direction]

"""Per-timeframe trend classification from raw bars."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

import numpy as np

from ltp_engine.configuration.ltp_config import (
    MOMENTUM_MODERATE_PERCENT,
    MOMENTUM_STRONG_PERCENT,
    MTF_MIN_BARS,
)
from ltp_engine.constants import (
    EMA_ABOVE_ALL,
    EMA_BELOW_ALL,
    EMA_MIXED,
    MOMENTUM_MODERATE,
    MOMENTUM_STRONG,
    MOMENTUM_WEAK,
    STRUCTURE_DOWNTREND,
    STRUCTURE_RANGE,
    STRUCTURE_UPTREND,
    TREND_BEARISH,
    TREND_BULLISH,
    TREND_NEUTRAL,
)
from ltp_engine.models import Bar, MTFAnalysis, TrendDirection
from ltp_engine.utils.candles import prepare_bars
from ltp_engine.utils.indicators import calculate_ema

BarsInput = Sequence[Union[Bar, Mapping[str, Any]]]

FAST_EMA_PERIOD = 9
SLOW_EMA_PERIOD = 21
STRUCTURE_WINDOW = 5
DETERMINE_TREND_MIN_BARS = 5


def determine_trend(bars: BarsInput) -> Optional[str]:
    """Classify a bar run as uptrend, downtrend or range by swing majority.

    Counts bar-over-bar higher/lower highs and lows; a direction wins when
    both its counts reach half the bar count. ``None`` below five bars.
    """
    normalized = prepare_bars(bars)
    if len(normalized) < DETERMINE_TREND_MIN_BARS:
        return None

    high_steps = np.diff(np.array([bar.high for bar in normalized], dtype=float))
    low_steps = np.diff(np.array([bar.low for bar in normalized], dtype=float))

    higher_highs = np.count_nonzero(high_steps > 0)
    higher_lows = np.count_nonzero(low_steps > 0)
    lower_highs = np.count_nonzero(high_steps < 0)
    lower_lows = np.count_nonzero(low_steps < 0)

    threshold = len(normalized) * 0.5
    if higher_highs >= threshold and higher_lows >= threshold:
        return STRUCTURE_UPTREND
    if lower_highs >= threshold and lower_lows >= threshold:
        return STRUCTURE_DOWNTREND
    return STRUCTURE_RANGE


def classify_structure(bars: List[Bar]) -> str:
    """Uptrend when the last five highs and lows never step down, downtrend when they never step up."""
    recent = bars[-STRUCTURE_WINDOW:]
    high_steps = np.diff(np.array([bar.high for bar in recent], dtype=float))
    low_steps = np.diff(np.array([bar.low for bar in recent], dtype=float))

    if np.all(high_steps >= 0) and np.all(low_steps >= 0):
        return STRUCTURE_UPTREND
    if np.all(high_steps <= 0) and np.all(low_steps <= 0):
        return STRUCTURE_DOWNTREND
    return STRUCTURE_RANGE


def classify_trend(price: float, fast_ema: float, slow_ema: float) -> TrendDirection:
    if price > fast_ema > slow_ema:
        return TREND_BULLISH
    if price < fast_ema < slow_ema:
        return TREND_BEARISH
    return TREND_NEUTRAL


def classify_ema_position(price: float, fast_ema: float, slow_ema: float) -> str:
    if price > fast_ema and price > slow_ema:
        return EMA_ABOVE_ALL
    if price < fast_ema and price < slow_ema:
        return EMA_BELOW_ALL
    return EMA_MIXED


def classify_momentum(first_close: float, last_close: float) -> str:
    if first_close <= 0:
        return MOMENTUM_WEAK

    change = abs(last_close - first_close) / first_close * 100
    if change > MOMENTUM_STRONG_PERCENT:
        return MOMENTUM_STRONG
    if change > MOMENTUM_MODERATE_PERCENT:
        return MOMENTUM_MODERATE
    return MOMENTUM_WEAK


def analyze_timeframe(timeframe: str, bars: BarsInput) -> MTFAnalysis:
    """Build the ``MTFAnalysis`` for one timeframe's bars.

    Fewer than 21 bars yields a neutral read (range structure, mixed EMA
    position, weak momentum).
    """
    normalized = prepare_bars(bars)
    if len(normalized) < MTF_MIN_BARS:
        return MTFAnalysis(
            timeframe=timeframe,
            trend=TREND_NEUTRAL,
            structure=STRUCTURE_RANGE,
            ema_position=EMA_MIXED,
            momentum=MOMENTUM_WEAK,
        )

    closes = [bar.close for bar in normalized]
    price = closes[-1]
    fast_ema = calculate_ema(closes, FAST_EMA_PERIOD)
    slow_ema = calculate_ema(closes, SLOW_EMA_PERIOD)

    return MTFAnalysis(
        timeframe=timeframe,
        trend=classify_trend(price, fast_ema, slow_ema),
        structure=classify_structure(normalized),
        ema_position=classify_ema_position(price, fast_ema, slow_ema),
        momentum=classify_momentum(closes[0], price),
    )

from __future__ import annotations

from typing import Any, List, Mapping, Sequence, Union

from ltp_engine.configuration.ltp_config import (
    PATIENCE_LOOKBACK_BARS,
    PATIENCE_MAX_BODY_PERCENT,
    PATIENCE_MAX_DISTANCE_PERCENT,
    PATIENCE_MIN_BARS,
    PATIENCE_MIN_COUNT,
)
from ltp_engine.models import Bar, PatienceResult
from ltp_engine.utils.candles import prepare_bars

BarsInput = Sequence[Union[Bar, Mapping[str, Any]]]


def body_size_percent(bar: Bar) -> float:
    return bar.body / bar.open * 100


def distance_percent(price: float, level_price: float) -> float:
    return abs(price - level_price) / level_price * 100


def _is_patience_candle(
    bar: Bar, level_price: float, max_body_percent: float, max_distance_percent: float
) -> bool:
    if bar.open <= 0 or level_price <= 0:
        return False
    return (
        body_size_percent(bar) < max_body_percent
        and distance_percent(bar.close, level_price) < max_distance_percent
    )


def detect_patience_candle(
    bars: BarsInput,
    level_price: float,
    max_candle_size: float = PATIENCE_MAX_BODY_PERCENT,
    *,
    max_distance_percent: float = PATIENCE_MAX_DISTANCE_PERCENT,
    lookback: int = PATIENCE_LOOKBACK_BARS,
) -> PatienceResult:
    """Count small-bodied candles closing tight to ``level_price``.

    Only the last ``lookback`` bars are examined. A bar qualifies when its
    body is under ``max_candle_size`` percent of its open and its close is
    within ``max_distance_percent`` of the level. Fewer than three bars is
    not enough context and always yields ``PatienceResult(False, 0)``.
    """
    normalized = prepare_bars(bars)
    if len(normalized) < PATIENCE_MIN_BARS:
        return PatienceResult.none()

    count = sum(
        1
        for bar in normalized[-lookback:]
        if _is_patience_candle(bar, level_price, max_candle_size, max_distance_percent)
    )
    return PatienceResult(detected=count >= PATIENCE_MIN_COUNT, count=count)


def identify_patience_candles(bars: BarsInput) -> List[Bar]:
    """Inside bars whose body is under half the sequence's average body."""
    normalized = prepare_bars(bars)
    if len(normalized) < 2:
        return []

    average_body = sum(bar.body for bar in normalized) / len(normalized)
    if average_body <= 0:
        return []

    return [
        bar
        for prev, bar in zip(normalized, normalized[1:])
        if bar.body < average_body * 0.5 and bar.high <= prev.high and bar.low >= prev.low
    ]

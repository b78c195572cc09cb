"""Technical indicator utilities."""

from __future__ import annotations

from typing import Any, Mapping, Sequence, Union

import pandas as pd

from ltp_engine.models import Bar
from .candles import bars_to_frame

SeriesLike = Union[Sequence[float], pd.Series]


def _to_series(values: SeriesLike) -> pd.Series:
    if isinstance(values, pd.Series):
        return values.astype("float64").reset_index(drop=True)
    return pd.Series(list(values), dtype="float64")


def calculate_ema(series: SeriesLike, period: int) -> float:
    """Exponential moving average of ``series``, returned as its latest value.

    Seeded with the simple average of the first ``period`` points, then
    smoothed with multiplier ``2 / (period + 1)``. With fewer than ``period``
    points the latest value is returned instead (0.0 for empty input).
    """
    values = _to_series(series)
    if values.empty or period <= 0:
        return 0.0
    if len(values) < period:
        return float(values.iloc[-1])

    seed = values.iloc[:period].mean()
    remainder = values.iloc[period:]
    if remainder.empty:
        return float(seed)

    seeded = pd.concat([pd.Series([seed], dtype="float64"), remainder], ignore_index=True)
    ema = seeded.ewm(alpha=2 / (period + 1), adjust=False).mean()
    return float(ema.iloc[-1])


def calculate_sma(series: SeriesLike, period: int) -> float:
    """Simple average of the last ``period`` values (latest value if too short)."""
    values = _to_series(series)
    if values.empty or period <= 0:
        return 0.0
    if len(values) < period:
        return float(values.iloc[-1])
    return float(values.iloc[-period:].mean())


def calculate_vwap(bars: Union[pd.DataFrame, Sequence[Union[Bar, Mapping[str, Any]]]]) -> float:
    """Volume-weighted average of the typical price ``(h + l + c) / 3``.

    Returns 0.0 for empty input or when total volume is zero.
    """
    df = bars_to_frame(bars)
    if df.empty:
        return 0.0

    total_volume = df["volume"].sum()
    if total_volume <= 0:
        return 0.0

    typical_price = (df["high"] + df["low"] + df["close"]) / 3
    return float((typical_price * df["volume"]).sum() / total_volume)

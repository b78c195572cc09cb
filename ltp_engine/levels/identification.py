"""Key level derivation from daily, weekly and intraday bars."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
from scipy.signal import argrelextrema

from ltp_engine.constants import (
    LEVEL_EMA_21,
    LEVEL_EMA_9,
    LEVEL_HOD,
    LEVEL_LOD,
    LEVEL_ORB_HIGH,
    LEVEL_ORB_LOW,
    LEVEL_PDC,
    LEVEL_PDH,
    LEVEL_PDL,
    LEVEL_RESISTANCE,
    LEVEL_SMA_200,
    LEVEL_SUPPORT,
    LEVEL_VWAP,
    LEVEL_WEEKLY_HIGH,
    LEVEL_WEEKLY_LOW,
    TIMEFRAME_DAILY,
    TIMEFRAME_INTRADAY,
    TIMEFRAME_SWING,
    TIMEFRAME_WEEKLY,
)
from ltp_engine.models import Bar, KeyLevel
from ltp_engine.utils.candles import prepare_bars
from ltp_engine.utils.indicators import calculate_ema, calculate_sma, calculate_vwap
from ltp_engine.utils.numbers import round_half_up

BarsInput = Sequence[Union[Bar, Mapping[str, Any]]]

# Opening range: first three 5-minute bars
ORB_BAR_COUNT = 3
SMA_200_PERIOD = 200

# Swing clustering
SWING_MIN_BARS = 10
# Bars on each side a swing must beat
SWING_WINDOW = 2
SWING_CLUSTER_TOLERANCE = 0.005
SWING_MIN_TOUCHES = 2
SWING_STRENGTH_PER_TOUCH = 25
MAX_IDENTIFIED_LEVELS = 10


def build_key_levels(
    daily_bars: Optional[BarsInput],
    intraday_bars: Optional[BarsInput],
    weekly_bars: Optional[BarsInput] = None,
) -> List[KeyLevel]:
    """Derive the standard level set for one symbol.

    Prior-day and weekly extremes, intraday VWAP, opening range, high/low of
    day, intraday EMA 9/21 and the daily 200 SMA, each with a fixed strength.
    Sections with too little data are skipped.
    """
    daily = prepare_bars(daily_bars)
    weekly = prepare_bars(weekly_bars)
    intraday = prepare_bars(intraday_bars)
    levels: List[KeyLevel] = []

    if len(daily) >= 2:
        prev_day = daily[-2]
        levels.extend(
            [
                KeyLevel(LEVEL_PDH, prev_day.high, TIMEFRAME_DAILY, 80),
                KeyLevel(LEVEL_PDL, prev_day.low, TIMEFRAME_DAILY, 80),
                KeyLevel(LEVEL_PDC, prev_day.close, TIMEFRAME_DAILY, 70),
            ]
        )

    if len(weekly) >= 2:
        prev_week, curr_week = weekly[-2], weekly[-1]
        levels.extend(
            [
                KeyLevel(LEVEL_WEEKLY_HIGH, prev_week.high, TIMEFRAME_WEEKLY, 90),
                KeyLevel(LEVEL_WEEKLY_LOW, prev_week.low, TIMEFRAME_WEEKLY, 90),
                KeyLevel(LEVEL_WEEKLY_HIGH, curr_week.high, TIMEFRAME_WEEKLY, 85),
                KeyLevel(LEVEL_WEEKLY_LOW, curr_week.low, TIMEFRAME_WEEKLY, 85),
            ]
        )

    if intraday:
        levels.append(KeyLevel(LEVEL_VWAP, calculate_vwap(intraday), TIMEFRAME_INTRADAY, 75))

        if len(intraday) >= ORB_BAR_COUNT:
            orb_bars = intraday[:ORB_BAR_COUNT]
            levels.extend(
                [
                    KeyLevel(LEVEL_ORB_HIGH, max(b.high for b in orb_bars), TIMEFRAME_INTRADAY, 85),
                    KeyLevel(LEVEL_ORB_LOW, min(b.low for b in orb_bars), TIMEFRAME_INTRADAY, 85),
                ]
            )

        levels.extend(
            [
                KeyLevel(LEVEL_HOD, max(b.high for b in intraday), TIMEFRAME_INTRADAY, 70),
                KeyLevel(LEVEL_LOD, min(b.low for b in intraday), TIMEFRAME_INTRADAY, 70),
            ]
        )

        if len(intraday) >= 21:
            closes = [b.close for b in intraday]
            levels.extend(
                [
                    KeyLevel(LEVEL_EMA_9, calculate_ema(closes, 9), TIMEFRAME_INTRADAY, 65),
                    KeyLevel(LEVEL_EMA_21, calculate_ema(closes, 21), TIMEFRAME_INTRADAY, 70),
                ]
            )

    if len(daily) >= SMA_200_PERIOD:
        sma_200 = calculate_sma([b.close for b in daily], SMA_200_PERIOD)
        levels.append(KeyLevel(LEVEL_SMA_200, sma_200, TIMEFRAME_DAILY, 95))

    return levels


@dataclass
class _Cluster:
    price: float
    level_type: str
    count: int


def _swing_points(bars: List[Bar]) -> List[Tuple[float, str]]:
    """Swing highs/lows that beat the two bars on either side, oldest first."""
    highs = np.array([bar.high for bar in bars], dtype=float)
    lows = np.array([bar.low for bar in bars], dtype=float)
    last_full_window = len(bars) - SWING_WINDOW - 1

    (high_indices,) = argrelextrema(highs, np.greater, order=SWING_WINDOW)
    (low_indices,) = argrelextrema(lows, np.less, order=SWING_WINDOW)

    points: List[Tuple[int, int, float, str]] = []
    for idx in high_indices:
        if SWING_WINDOW <= idx <= last_full_window:
            points.append((int(idx), 0, float(highs[idx]), LEVEL_RESISTANCE))
    for idx in low_indices:
        if SWING_WINDOW <= idx <= last_full_window:
            points.append((int(idx), 1, float(lows[idx]), LEVEL_SUPPORT))

    points.sort()
    return [(price, level_type) for _, _, price, level_type in points]


def identify_key_levels(bars: BarsInput) -> List[KeyLevel]:
    """Cluster repeated swing prices into support/resistance levels.

    Swing prices within 0.5% of an existing cluster merge into it. Clusters
    touched at least twice become levels with strength ``25 * touches``
    (capped at 100). Returns the ten strongest, strongest first.
    """
    normalized = prepare_bars(bars)
    if len(normalized) < SWING_MIN_BARS:
        return []

    clusters: List[_Cluster] = []
    for price, level_type in _swing_points(normalized):
        existing = next(
            (c for c in clusters if abs(c.price - price) / price < SWING_CLUSTER_TOLERANCE),
            None,
        )
        if existing is not None:
            existing.count += 1
            existing.price = (existing.price + price) / 2
        else:
            clusters.append(_Cluster(price=price, level_type=level_type, count=1))

    levels = [
        KeyLevel(
            level_type=cluster.level_type,
            price=round_half_up(cluster.price, 2),
            timeframe=TIMEFRAME_SWING,
            strength=min(cluster.count * SWING_STRENGTH_PER_TOUCH, 100),
        )
        for cluster in clusters
        if cluster.count >= SWING_MIN_TOUCHES
    ]
    levels.sort(key=lambda level: level.strength, reverse=True)
    return levels[:MAX_IDENTIFIED_LEVELS]

"""LTP detection thresholds, weights and the tunable ``LTPConfig``.

Module constants are the documented defaults. Scorers take each threshold as
a keyword argument defaulting to these constants; ``LTPConfig`` bundles the
tunable subset for the detection pipeline.
"""

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Mapping, Tuple

from ltp_engine.logger import get_logger

logger = get_logger(__name__)

# =============================================================================
# Level (L)
# =============================================================================
# Max distance (percent of current price) for a level to count as "at" price
LEVEL_PROXIMITY_PERCENT: Final[float] = 0.3

# =============================================================================
# Patience (P)
# =============================================================================
PATIENCE_MAX_BODY_PERCENT: Final[float] = 0.5
PATIENCE_MAX_DISTANCE_PERCENT: Final[float] = 0.3
PATIENCE_LOOKBACK_BARS: Final[int] = 5
PATIENCE_MIN_BARS: Final[int] = 3
PATIENCE_MIN_COUNT: Final[int] = 2

PATIENCE_BASE_SCORE: Final[int] = 40
PATIENCE_PER_CANDLE_SCORE: Final[int] = 20
PATIENCE_MAX_COUNT_SCORE: Final[int] = 60

# =============================================================================
# Trend (T)
# =============================================================================
DEFAULT_TIMEFRAME_WEIGHTS: Final[Mapping[str, float]] = MappingProxyType(
    {
        "weekly": 0.15,
        "daily": 0.20,
        "4h": 0.15,
        "1h": 0.20,
        "15m": 0.15,
        "5m": 0.10,
        "2m": 0.05,
    }
)
UNKNOWN_TIMEFRAME_WEIGHT: Final[float] = 0.1
DEFAULT_TIMEFRAMES: Final[Tuple[str, ...]] = ("2m", "5m", "15m", "1h", "4h", "daily", "weekly")

# Bars needed before a timeframe gets a non-neutral read (EMA 21)
MTF_MIN_BARS: Final[int] = 21
MOMENTUM_STRONG_PERCENT: Final[float] = 2.0
MOMENTUM_MODERATE_PERCENT: Final[float] = 1.0

# =============================================================================
# Composite score and grade
# =============================================================================
LEVEL_WEIGHT: Final[float] = 0.35
TREND_WEIGHT: Final[float] = 0.35
PATIENCE_WEIGHT: Final[float] = 0.30

# (min overall score, grade), checked top-down
GRADE_THRESHOLDS: Final[Tuple[Tuple[int, str], ...]] = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
)
FAILING_GRADE: Final[str] = "F"

# =============================================================================
# Trade parameters
# =============================================================================
# Flat volatility proxy: ATR estimated as 1% of current price
ATR_PROXY_PERCENT: Final[float] = 1.0
TARGET_R_MULTIPLES: Final[Tuple[int, int, int]] = (1, 2, 3)

# =============================================================================
# Coach note
# =============================================================================
STRONG_NOTE_THRESHOLD: Final[int] = 70
WEAK_NOTE_THRESHOLD: Final[int] = 50

# =============================================================================
# Pipeline / store
# =============================================================================
READY_THRESHOLD: Final[int] = 70
MIN_CONFLUENCE_SCORE: Final[int] = 50
RECENT_WINDOW_MINUTES: Final[int] = 30
KEY_LEVEL_EXPIRY_MINUTES: Final[int] = 60


@dataclass(frozen=True)
class LTPConfig:
    """Tunable detection thresholds used by the detection pipeline."""

    level_proximity_percent: float = LEVEL_PROXIMITY_PERCENT
    patience_max_body_percent: float = PATIENCE_MAX_BODY_PERCENT
    ready_threshold: int = READY_THRESHOLD
    min_confluence_score: int = MIN_CONFLUENCE_SCORE
    enabled_timeframes: Tuple[str, ...] = DEFAULT_TIMEFRAMES
    timeframe_weights: Mapping[str, float] = field(
        default_factory=lambda: DEFAULT_TIMEFRAME_WEIGHTS
    )


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Invalid value for {name}: {raw!r}, using default {default}")
        return default


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Invalid value for {name}: {raw!r}, using default {default}")
        return default


def _parse_timeframes(raw: str | None) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_TIMEFRAMES
    timeframes = tuple(tf.strip().lower() for tf in raw.split(",") if tf.strip())
    return timeframes or DEFAULT_TIMEFRAMES


def _parse_weights(raw: str | None) -> Mapping[str, float]:
    """Parse ``tf:weight,tf:weight`` into a read-only mapping."""
    if not raw:
        return DEFAULT_TIMEFRAME_WEIGHTS

    weights = {}
    for pair in raw.split(","):
        if not pair.strip():
            continue
        timeframe, sep, value = pair.partition(":")
        try:
            if not sep:
                raise ValueError("missing ':'")
            weights[timeframe.strip().lower()] = float(value)
        except ValueError:
            logger.warning(f"Invalid timeframe weight {pair!r}, using default weights")
            return DEFAULT_TIMEFRAME_WEIGHTS

    return MappingProxyType(weights) if weights else DEFAULT_TIMEFRAME_WEIGHTS


def load_ltp_config_from_env() -> LTPConfig:
    """
    Load LTP configuration from environment variables.

    Environment variables:
        LTP_LEVEL_PROXIMITY_PERCENT: Level proximity threshold (default: 0.3)
        LTP_PATIENCE_MAX_BODY_PERCENT: Max patience candle body (default: 0.5)
        LTP_READY_THRESHOLD: Confluence needed for "ready" (default: 70)
        LTP_MIN_CONFLUENCE_SCORE: Confluence needed to keep a setup (default: 50)
        LTP_ENABLED_TIMEFRAMES: Comma separated timeframe labels
        LTP_TIMEFRAME_WEIGHTS: ``tf:weight`` pairs, comma separated

    Returns:
        LTPConfig loaded from environment
    """
    return LTPConfig(
        level_proximity_percent=_float_from_env(
            "LTP_LEVEL_PROXIMITY_PERCENT", LEVEL_PROXIMITY_PERCENT
        ),
        patience_max_body_percent=_float_from_env(
            "LTP_PATIENCE_MAX_BODY_PERCENT", PATIENCE_MAX_BODY_PERCENT
        ),
        ready_threshold=_int_from_env("LTP_READY_THRESHOLD", READY_THRESHOLD),
        min_confluence_score=_int_from_env("LTP_MIN_CONFLUENCE_SCORE", MIN_CONFLUENCE_SCORE),
        enabled_timeframes=_parse_timeframes(os.getenv("LTP_ENABLED_TIMEFRAMES")),
        timeframe_weights=_parse_weights(os.getenv("LTP_TIMEFRAME_WEIGHTS")),
    )

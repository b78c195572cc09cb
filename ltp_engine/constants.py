from typing import Final

from ltp_engine.models import TrendDirection

# --- Trend Constants ---
TREND_BULLISH: Final[TrendDirection] = TrendDirection.BULLISH
TREND_BEARISH: Final[TrendDirection] = TrendDirection.BEARISH
TREND_NEUTRAL: Final[TrendDirection] = TrendDirection.NEUTRAL

# --- Structure Constants ---
STRUCTURE_UPTREND: Final[str] = "uptrend"
STRUCTURE_DOWNTREND: Final[str] = "downtrend"
STRUCTURE_RANGE: Final[str] = "range"

# --- EMA Stack Position ---
EMA_ABOVE_ALL: Final[str] = "above_all"
EMA_BELOW_ALL: Final[str] = "below_all"
EMA_MIXED: Final[str] = "mixed"

# --- Momentum ---
MOMENTUM_STRONG: Final[str] = "strong"
MOMENTUM_MODERATE: Final[str] = "moderate"
MOMENTUM_WEAK: Final[str] = "weak"

# --- Key Level Types ---
LEVEL_SUPPORT: Final[str] = "support"
LEVEL_RESISTANCE: Final[str] = "resistance"
LEVEL_PDH: Final[str] = "pdh"
LEVEL_PDL: Final[str] = "pdl"
LEVEL_PDC: Final[str] = "pdc"
LEVEL_WEEKLY_HIGH: Final[str] = "weekly_high"
LEVEL_WEEKLY_LOW: Final[str] = "weekly_low"
LEVEL_VWAP: Final[str] = "vwap"
LEVEL_ORB_HIGH: Final[str] = "orb_high"
LEVEL_ORB_LOW: Final[str] = "orb_low"
LEVEL_HOD: Final[str] = "hod"
LEVEL_LOD: Final[str] = "lod"
LEVEL_EMA_9: Final[str] = "ema_9"
LEVEL_EMA_21: Final[str] = "ema_21"
LEVEL_SMA_200: Final[str] = "sma_200"

# --- Level Source Timeframes ---
TIMEFRAME_DAILY: Final[str] = "daily"
TIMEFRAME_WEEKLY: Final[str] = "weekly"
TIMEFRAME_INTRADAY: Final[str] = "intraday"
TIMEFRAME_SWING: Final[str] = "5m"

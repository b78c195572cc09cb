import ltp_engine.core.env  # noqa: F401

from .database import POSTGRES_DB
from .ltp_config import (
    DEFAULT_TIMEFRAME_WEIGHTS,
    DEFAULT_TIMEFRAMES,
    KEY_LEVEL_EXPIRY_MINUTES,
    LEVEL_PROXIMITY_PERCENT,
    MIN_CONFLUENCE_SCORE,
    PATIENCE_MAX_BODY_PERCENT,
    READY_THRESHOLD,
    RECENT_WINDOW_MINUTES,
    LTPConfig,
    load_ltp_config_from_env,
)

__all__ = [
    "POSTGRES_DB",
    "DEFAULT_TIMEFRAME_WEIGHTS",
    "DEFAULT_TIMEFRAMES",
    "KEY_LEVEL_EXPIRY_MINUTES",
    "LEVEL_PROXIMITY_PERCENT",
    "MIN_CONFLUENCE_SCORE",
    "PATIENCE_MAX_BODY_PERCENT",
    "READY_THRESHOLD",
    "RECENT_WINDOW_MINUTES",
    "LTPConfig",
    "load_ltp_config_from_env",
]

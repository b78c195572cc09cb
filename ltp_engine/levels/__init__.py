"""Level (L): key price levels and how close price sits to them."""

from ltp_engine.levels.identification import build_key_levels, identify_key_levels
from ltp_engine.levels.level_repository import fetch_key_levels, store_key_levels
from ltp_engine.levels.proximity import score_level_proximity
from ltp_engine.levels.workflow import refresh_key_levels

__all__ = [
    "build_key_levels",
    "identify_key_levels",
    "fetch_key_levels",
    "store_key_levels",
    "score_level_proximity",
    "refresh_key_levels",
]

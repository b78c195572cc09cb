"""Patience (P): small-bodied candles holding at a decision level."""

from .detector import detect_patience_candle, identify_patience_candles
from .quality import score_patience_quality

__all__ = [
    "detect_patience_candle",
    "identify_patience_candles",
    "score_patience_quality",
]

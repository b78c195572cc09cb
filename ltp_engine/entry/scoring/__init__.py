"""Composite LTP scoring.

Components:
- Level: proximity to the best key level (0-100)
- Trend: weighted multi-timeframe alignment (0-100)
- Patience: patience-candle quality (0-100)
"""

from .calculator import calculate_ltp_score, get_ltp_grade

__all__ = [
    "calculate_ltp_score",
    "get_ltp_grade",
]

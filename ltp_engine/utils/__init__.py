from .candles import bars_to_frame, prepare_bars, to_bar
from .indicators import calculate_ema, calculate_sma, calculate_vwap
from .numbers import clamp, round_half_up, round_score

__all__ = [
    "bars_to_frame",
    "prepare_bars",
    "to_bar",
    "calculate_ema",
    "calculate_sma",
    "calculate_vwap",
    "clamp",
    "round_half_up",
    "round_score",
]

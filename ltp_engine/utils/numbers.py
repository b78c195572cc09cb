import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves going up (``2.5 -> 3``), unlike the built-in ``round``."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def round_score(value: float) -> int:
    return int(round_half_up(value))


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    return max(lower, min(upper, value))

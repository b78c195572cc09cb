from typing import List

from ltp_engine.configuration.ltp_config import STRONG_NOTE_THRESHOLD, WEAK_NOTE_THRESHOLD
from ltp_engine.models import LevelResult, PatienceResult, TrendDirection


def generate_coach_note(
    level_result: LevelResult,
    trend_score: float,
    patience: PatienceResult,
    direction: TrendDirection,
) -> str:
    """Template a one-line rationale in level, trend, patience order."""
    direction = TrendDirection.from_raw(direction) or TrendDirection.NEUTRAL
    notes: List[str] = []
    level_type = level_result.level.level_type.upper() if level_result.level else ""

    if level_result.score >= STRONG_NOTE_THRESHOLD:
        notes.append(f"Strong {level_type} level confluence.")
    elif level_result.score >= WEAK_NOTE_THRESHOLD:
        notes.append(f"Price near {level_type}.")

    if trend_score >= STRONG_NOTE_THRESHOLD:
        notes.append(f"MTF trend strongly {direction.value}.")
    elif trend_score >= WEAK_NOTE_THRESHOLD:
        notes.append(f"Trend leaning {direction.value}.")

    if patience.detected:
        notes.append(f"{patience.count} patience candle(s) confirmed.")
    else:
        notes.append("Waiting for patience candle confirmation.")

    return " ".join(notes)

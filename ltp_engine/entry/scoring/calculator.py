"""Composite LTP score and letter grade.

overall = round(0.35 * level + 0.35 * trend + 0.30 * patience)
Each component is clamped to [0, 100] before weighting.
"""

from ltp_engine.configuration.ltp_config import (
    FAILING_GRADE,
    GRADE_THRESHOLDS,
    LEVEL_WEIGHT,
    PATIENCE_WEIGHT,
    TREND_WEIGHT,
)
from ltp_engine.models import LTPScore
from ltp_engine.utils.numbers import clamp, round_score


def calculate_ltp_score(level_score: float, trend_score: float, patience_score: float) -> LTPScore:
    level = clamp(level_score)
    trend = clamp(trend_score)
    patience = clamp(patience_score)

    overall = round_score(level * LEVEL_WEIGHT + trend * TREND_WEIGHT + patience * PATIENCE_WEIGHT)

    return LTPScore(level=level, trend=trend, patience=patience, overall=overall)


def get_ltp_grade(overall_score: float) -> str:
    """Map an overall score to A-F. Lower bounds are inclusive."""
    for threshold, grade in GRADE_THRESHOLDS:
        if overall_score >= threshold:
            return grade
    return FAILING_GRADE

"""Deterministic score breakdown for display and coaching.

Consumers present these numbers and reasons as-is; nothing downstream
recomputes a score.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence

from ltp_engine.entry.scoring import calculate_ltp_score, get_ltp_grade
from ltp_engine.models import (
    LevelResult,
    MTFAnalysis,
    PatienceResult,
    ScoreExplanation,
    ScoreInputs,
    ScoreReasons,
    TrendDirection,
)
from ltp_engine.patience import score_patience_quality
from ltp_engine.trend.alignment import aligned_timeframes


def _level_reason(current_price: float, level_result: LevelResult) -> str:
    level = level_result.level
    if level is None:
        return "No key level nearby - price is in no-man's land"

    distance = abs(current_price - level.price) / current_price * 100 if current_price > 0 else 0.0
    strength = int(level.strength) if float(level.strength).is_integer() else level.strength
    return (
        f"Price within {distance:.2f}% of {level.price:.2f} {level.level_type} "
        f"(strength: {strength})"
    )


def _trend_reason(mtf_analyses: Sequence[MTFAnalysis], direction: TrendDirection) -> str:
    aligned = aligned_timeframes(mtf_analyses, direction)
    if not aligned:
        return f"Trend not aligned with {direction.value} direction"
    return f"{direction.value.capitalize()} trend aligned on {', '.join(aligned)} timeframes"


def _patience_reason(patience: PatienceResult) -> str:
    if patience.detected:
        return f"{patience.count} patience candle(s) confirmed at level"
    return "No patience candles detected - waiting for confirmation"


def generate_score_explanation(
    symbol: str,
    direction: TrendDirection,
    current_price: float,
    level_result: LevelResult,
    trend_score: float,
    patience: PatienceResult,
    mtf_analyses: Sequence[MTFAnalysis],
    timestamp: Optional[datetime] = None,
) -> ScoreExplanation:
    direction = TrendDirection.from_raw(direction) or TrendDirection.NEUTRAL
    scores = calculate_ltp_score(level_result.score, trend_score, score_patience_quality(patience))
    level = level_result.level

    return ScoreExplanation(
        scores=scores,
        grade=get_ltp_grade(scores.overall),
        reasons=ScoreReasons(
            level=_level_reason(current_price, level_result),
            trend=_trend_reason(mtf_analyses, direction),
            patience=_patience_reason(patience),
        ),
        inputs=ScoreInputs(
            symbol=symbol,
            direction=direction,
            current_price=current_price,
            level_used=(level.level_type, level.price) if level else None,
            timeframes_analyzed=tuple(a.timeframe for a in mtf_analyses),
            patience_candle_count=patience.count,
            timestamp=timestamp or datetime.now(timezone.utc),
        ),
    )

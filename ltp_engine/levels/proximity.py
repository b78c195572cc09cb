from __future__ import annotations

from typing import Optional, Sequence

from ltp_engine.configuration.ltp_config import LEVEL_PROXIMITY_PERCENT
from ltp_engine.models import KeyLevel, LevelResult
from ltp_engine.utils.numbers import round_score


def score_level_proximity(
    current_price: float,
    levels: Sequence[KeyLevel],
    proximity_threshold: float = LEVEL_PROXIMITY_PERCENT,
) -> LevelResult:
    """Score the best level within ``proximity_threshold`` percent of price.

    Each qualifying level earns up to 50 points for closeness and up to 50
    for strength. The highest-scoring level wins; ties keep the first one.
    """
    if current_price <= 0 or proximity_threshold <= 0:
        return LevelResult.none()

    max_score = 0.0
    best_level: Optional[KeyLevel] = None

    for level in levels:
        distance = abs(current_price - level.price) / current_price * 100
        if distance > proximity_threshold:
            continue

        proximity_score = (1 - distance / proximity_threshold) * 50
        strength_score = level.strength / 100 * 50
        score = proximity_score + strength_score

        if score > max_score:
            max_score = score
            best_level = level

    return LevelResult(score=round_score(max_score), level=best_level)

from ltp_engine.configuration.ltp_config import (
    PATIENCE_BASE_SCORE,
    PATIENCE_MAX_COUNT_SCORE,
    PATIENCE_PER_CANDLE_SCORE,
)
from ltp_engine.models import PatienceResult


def score_patience_quality(patience: PatienceResult) -> int:
    """Map a patience detection onto 0-100.

    Base credit for any confirmed patience plus 20 per qualifying candle,
    capped so three or more candles score 100.
    """
    if not patience.detected:
        return 0

    count_score = min(patience.count * PATIENCE_PER_CANDLE_SCORE, PATIENCE_MAX_COUNT_SCORE)
    return PATIENCE_BASE_SCORE + count_score

"""LTP setup detection pipeline.

Per symbol: fetch levels and MTF reads (concurrently), pick a direction,
score Level / Trend / Patience, combine, then synthesize trade parameters
and a coach note into a ``DetectedSetup``.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from ltp_engine.configuration.ltp_config import LTPConfig
from ltp_engine.entry.coach_note import generate_coach_note
from ltp_engine.entry.scoring import calculate_ltp_score
from ltp_engine.entry.trade_params import calculate_trade_params
from ltp_engine.levels.proximity import score_level_proximity
from ltp_engine.logger import get_logger
from ltp_engine.models import (
    Bar,
    DetectedSetup,
    KeyLevel,
    MarketSnapshot,
    MTFAnalysis,
    PatienceResult,
    SetupStage,
)
from ltp_engine.patience import detect_patience_candle, score_patience_quality
from ltp_engine.store.base import SetupStore
from ltp_engine.trend.alignment import determine_direction, score_trend_alignment

logger = get_logger(__name__)

BarsInput = Sequence[Union[Bar, Mapping[str, Any]]]
PersistFn = Callable[[DetectedSetup], Any]


def determine_setup_stage(
    confluence_score: float, patience: PatienceResult, ready_threshold: float
) -> SetupStage:
    """READY needs both the confluence threshold and confirmed patience.

    TRIGGERED is never assigned here; it belongs to the store lifecycle.
    """
    if confluence_score >= ready_threshold and patience.detected:
        return SetupStage.READY
    return SetupStage.FORMING


def _is_valid_price(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def build_detected_setup(
    symbol: str,
    current_price: float,
    bars: BarsInput,
    levels: Sequence[KeyLevel],
    mtf_analyses: Sequence[MTFAnalysis],
    config: Optional[LTPConfig] = None,
    detected_at: Optional[datetime] = None,
) -> Optional[DetectedSetup]:
    """Score one symbol from already-fetched inputs.

    Returns None when the price is unusable or either input list is empty.
    """
    config = config or LTPConfig()
    if not _is_valid_price(current_price) or not levels:
        return None

    enabled = set(config.enabled_timeframes)
    analyses = [a for a in mtf_analyses if a.timeframe in enabled]
    if not analyses:
        return None

    direction = determine_direction(analyses)

    level_result = score_level_proximity(current_price, levels, config.level_proximity_percent)
    trend_score = score_trend_alignment(analyses, direction, config.timeframe_weights)

    if level_result.level is not None:
        patience = detect_patience_candle(
            bars, level_result.level.price, config.patience_max_body_percent
        )
    else:
        patience = PatienceResult.none()
    patience_score = score_patience_quality(patience)

    ltp_score = calculate_ltp_score(level_result.score, trend_score, patience_score)
    level = level_result.level

    return DetectedSetup(
        symbol=symbol,
        direction=direction,
        setup_stage=determine_setup_stage(ltp_score.overall, patience, config.ready_threshold),
        confluence_score=ltp_score.overall,
        level_score=level_result.score,
        trend_score=trend_score,
        patience_score=patience_score,
        mtf_score=trend_score,
        primary_level_type=level.level_type if level else None,
        primary_level_price=level.price if level else None,
        patience_candles=patience.count,
        trade_params=calculate_trade_params(current_price, level, direction),
        coach_note=generate_coach_note(level_result, trend_score, patience, direction),
        detected_at=detected_at or datetime.now(timezone.utc),
    )


def analyze_symbol(
    symbol: str,
    current_price: float,
    bars: BarsInput,
    store: SetupStore,
    config: Optional[LTPConfig] = None,
) -> Optional[DetectedSetup]:
    """Fetch the symbol's levels and MTF reads, then score it."""
    if not _is_valid_price(current_price):
        logger.info(f"  -> Skipping {symbol}: invalid current price {current_price!r}")
        return None

    # The two reads are independent
    with ThreadPoolExecutor(max_workers=2) as pool:
        levels_future = pool.submit(store.fetch_key_levels, symbol)
        mtf_future = pool.submit(store.fetch_mtf_analysis, symbol)
        levels = levels_future.result()
        mtf_analyses = mtf_future.result()

    if not levels:
        logger.info(f"  -> No active key levels for {symbol}")
        return None
    if not mtf_analyses:
        logger.info(f"  -> No recent MTF analysis for {symbol}")
        return None

    return build_detected_setup(symbol, current_price, bars, levels, mtf_analyses, config)


def run_detection_cycle(
    snapshots: Mapping[str, MarketSnapshot],
    store: SetupStore,
    config: Optional[LTPConfig] = None,
    persist: Optional[PersistFn] = None,
) -> List[DetectedSetup]:
    """Analyze every symbol and keep setups at or above the minimum confluence.

    A failure on one symbol is logged and does not stop the cycle. When
    ``persist`` is given it is called with each kept setup.
    """
    config = config or LTPConfig()
    logger.info(f"\n--- 🔍 Running LTP detection for {len(snapshots)} symbols ---")

    results: List[DetectedSetup] = []
    for symbol, snapshot in snapshots.items():
        try:
            setup = analyze_symbol(symbol, snapshot.current_price, snapshot.bars, store, config)
        except Exception:
            logger.exception(f"  ❌ Failed to analyze {symbol}")
            continue

        if setup is None or setup.confluence_score < config.min_confluence_score:
            continue

        results.append(setup)
        logger.info(
            f"  ✅ {symbol} {setup.direction.value} setup: confluence={setup.confluence_score} "
            f"stage={setup.setup_stage.value}"
        )

        if persist is not None:
            try:
                persist(setup)
            except Exception:
                logger.exception(f"  ❌ Failed to persist setup for {symbol}")

    logger.info(f"--- ✅ LTP detection complete: {len(results)} setups ---")
    return results

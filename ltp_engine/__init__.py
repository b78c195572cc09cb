"""LTP (Level / Trend / Patience) setup detection and scoring engine."""

from ltp_engine.configuration import LTPConfig, load_ltp_config_from_env
from ltp_engine.entry import (
    analyze_symbol,
    build_detected_setup,
    calculate_ltp_score,
    calculate_trade_params,
    determine_setup_stage,
    fetch_detected_setups,
    generate_coach_note,
    generate_score_explanation,
    get_ltp_grade,
    run_detection_cycle,
    store_detected_setup,
)
from ltp_engine.levels import (
    build_key_levels,
    fetch_key_levels,
    identify_key_levels,
    score_level_proximity,
    store_key_levels,
)
from ltp_engine.models import (
    Bar,
    DetectedSetup,
    KeyLevel,
    LevelResult,
    LTPScore,
    MarketSnapshot,
    MTFAnalysis,
    PatienceResult,
    ScoreExplanation,
    SetupStage,
    TradeParams,
    TrendDirection,
)
from ltp_engine.patience import detect_patience_candle, identify_patience_candles, score_patience_quality
from ltp_engine.store import PostgresSetupStore, SetupStore
from ltp_engine.trend import (
    analyze_timeframe,
    determine_direction,
    determine_trend,
    fetch_mtf_analysis,
    score_trend_alignment,
    store_mtf_analysis,
)
from ltp_engine.utils import calculate_ema, calculate_sma, calculate_vwap

__all__ = [
    "LTPConfig",
    "load_ltp_config_from_env",
    "analyze_symbol",
    "build_detected_setup",
    "calculate_ltp_score",
    "calculate_trade_params",
    "determine_setup_stage",
    "fetch_detected_setups",
    "generate_coach_note",
    "generate_score_explanation",
    "get_ltp_grade",
    "run_detection_cycle",
    "store_detected_setup",
    "build_key_levels",
    "fetch_key_levels",
    "identify_key_levels",
    "score_level_proximity",
    "store_key_levels",
    "Bar",
    "DetectedSetup",
    "KeyLevel",
    "LevelResult",
    "LTPScore",
    "MarketSnapshot",
    "MTFAnalysis",
    "PatienceResult",
    "ScoreExplanation",
    "SetupStage",
    "TradeParams",
    "TrendDirection",
    "detect_patience_candle",
    "identify_patience_candles",
    "score_patience_quality",
    "PostgresSetupStore",
    "SetupStore",
    "analyze_timeframe",
    "determine_direction",
    "determine_trend",
    "fetch_mtf_analysis",
    "score_trend_alignment",
    "store_mtf_analysis",
    "calculate_ema",
    "calculate_sma",
    "calculate_vwap",
]

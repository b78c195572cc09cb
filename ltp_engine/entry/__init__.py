from ltp_engine.entry.coach_note import generate_coach_note
from ltp_engine.entry.detector import (
    analyze_symbol,
    build_detected_setup,
    determine_setup_stage,
    run_detection_cycle,
)
from ltp_engine.entry.explanation import generate_score_explanation
from ltp_engine.entry.scoring import calculate_ltp_score, get_ltp_grade
from ltp_engine.entry.setup_repository import fetch_detected_setups, store_detected_setup
from ltp_engine.entry.trade_params import calculate_trade_params

__all__ = [
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
]

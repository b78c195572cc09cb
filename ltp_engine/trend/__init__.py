from ltp_engine.trend.alignment import aligned_timeframes, determine_direction, score_trend_alignment
from ltp_engine.trend.analysis import analyze_timeframe, determine_trend
from ltp_engine.trend.mtf_repository import fetch_mtf_analysis, store_mtf_analysis
from ltp_engine.trend.workflow import analyze_symbol_timeframes, refresh_mtf_analysis

__all__ = [
    "aligned_timeframes",
    "analyze_symbol_timeframes",
    "analyze_timeframe",
    "determine_direction",
    "determine_trend",
    "fetch_mtf_analysis",
    "refresh_mtf_analysis",
    "score_trend_alignment",
    "store_mtf_analysis",
]

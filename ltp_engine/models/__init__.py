from .market import Bar, KeyLevel, MarketSnapshot, MTFAnalysis, TrendDirection
from .setup import (
    DetectedSetup,
    LevelResult,
    LTPScore,
    PatienceResult,
    ScoreExplanation,
    ScoreInputs,
    ScoreReasons,
    SetupStage,
    TradeParams,
)

__all__ = [
    "Bar",
    "KeyLevel",
    "MarketSnapshot",
    "MTFAnalysis",
    "TrendDirection",
    "DetectedSetup",
    "LevelResult",
    "LTPScore",
    "PatienceResult",
    "ScoreExplanation",
    "ScoreInputs",
    "ScoreReasons",
    "SetupStage",
    "TradeParams",
]

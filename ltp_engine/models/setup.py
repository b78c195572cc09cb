"""Result records produced by the LTP scorers and the detection pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from .market import KeyLevel, TrendDirection


class SetupStage(Enum):
    FORMING = "forming"
    READY = "ready"
    TRIGGERED = "triggered"

    @classmethod
    def from_raw(cls, raw: Any) -> "SetupStage":
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        return cls.FORMING


@dataclass(frozen=True)
class PatienceResult:
    detected: bool
    count: int

    @staticmethod
    def none() -> "PatienceResult":
        return PatienceResult(detected=False, count=0)


@dataclass(frozen=True)
class LevelResult:
    score: float
    level: Optional[KeyLevel]

    @staticmethod
    def none() -> "LevelResult":
        return LevelResult(score=0, level=None)


@dataclass(frozen=True)
class LTPScore:
    """Clamped component scores and their weighted, rounded overall."""
    level: float
    trend: float
    patience: float
    overall: int


@dataclass(frozen=True)
class TradeParams:
    """Entry, stop and 1R/2R/3R targets. All ``None`` when no level qualified."""
    suggested_entry: Optional[float] = None
    suggested_stop: Optional[float] = None
    target_1: Optional[float] = None
    target_2: Optional[float] = None
    target_3: Optional[float] = None
    risk_reward: Optional[float] = None

    @staticmethod
    def empty() -> "TradeParams":
        return TradeParams()

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass(frozen=True)
class DetectedSetup:
    """Output record of one completed pipeline run."""

    symbol: str
    direction: TrendDirection
    setup_stage: SetupStage
    confluence_score: int
    level_score: float
    trend_score: float
    patience_score: float
    mtf_score: float
    primary_level_type: Optional[str]
    primary_level_price: Optional[float]
    patience_candles: int
    trade_params: TradeParams
    coach_note: str
    detected_at: Optional[datetime] = None

    @property
    def suggested_entry(self) -> Optional[float]:
        return self.trade_params.suggested_entry

    @property
    def suggested_stop(self) -> Optional[float]:
        return self.trade_params.suggested_stop

    @property
    def target_1(self) -> Optional[float]:
        return self.trade_params.target_1

    @property
    def target_2(self) -> Optional[float]:
        return self.trade_params.target_2

    @property
    def target_3(self) -> Optional[float]:
        return self.trade_params.target_3

    @property
    def risk_reward(self) -> Optional[float]:
        return self.trade_params.risk_reward

    def to_record(self) -> dict[str, Any]:
        """Flatten into the ``detected_setups`` row shape."""
        record = {
            "symbol": self.symbol,
            "direction": self.direction.value,
            "setup_stage": self.setup_stage.value,
            "confluence_score": self.confluence_score,
            "level_score": self.level_score,
            "trend_score": self.trend_score,
            "patience_score": self.patience_score,
            "mtf_score": self.mtf_score,
            "primary_level_type": self.primary_level_type,
            "primary_level_price": self.primary_level_price,
            "patience_candles": self.patience_candles,
        }
        record.update(asdict(self.trade_params))
        record["coach_note"] = self.coach_note
        record["detected_at"] = self.detected_at
        return record

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DetectedSetup":
        direction = TrendDirection.from_raw(row["direction"])
        if direction is None:
            raise ValueError(f"Invalid setup direction {row['direction']!r}")

        def _opt_float(key: str) -> Optional[float]:
            value = row.get(key)
            return float(value) if value is not None else None

        trade_params = TradeParams(
            suggested_entry=_opt_float("suggested_entry"),
            suggested_stop=_opt_float("suggested_stop"),
            target_1=_opt_float("target_1"),
            target_2=_opt_float("target_2"),
            target_3=_opt_float("target_3"),
            risk_reward=_opt_float("risk_reward"),
        )
        return cls(
            symbol=str(row["symbol"]),
            direction=direction,
            setup_stage=SetupStage.from_raw(row.get("setup_stage")),
            confluence_score=int(row.get("confluence_score") or 0),
            level_score=float(row.get("level_score") or 0),
            trend_score=float(row.get("trend_score") or 0),
            patience_score=float(row.get("patience_score") or 0),
            mtf_score=float(row.get("mtf_score") or 0),
            primary_level_type=row.get("primary_level_type"),
            primary_level_price=_opt_float("primary_level_price"),
            patience_candles=int(row.get("patience_candles") or 0),
            trade_params=trade_params,
            coach_note=str(row.get("coach_note") or ""),
            detected_at=row.get("detected_at"),
        )


@dataclass(frozen=True)
class ScoreReasons:
    level: str
    trend: str
    patience: str


@dataclass(frozen=True)
class ScoreInputs:
    """Audit trail of the inputs behind a score."""
    symbol: str
    direction: TrendDirection
    current_price: float
    level_used: Optional[Tuple[str, float]]
    timeframes_analyzed: Tuple[str, ...]
    patience_candle_count: int
    timestamp: datetime


@dataclass(frozen=True)
class ScoreExplanation:
    """Deterministic breakdown of an LTP score, ready for display or coaching."""
    scores: LTPScore
    grade: str
    reasons: ScoreReasons
    inputs: ScoreInputs

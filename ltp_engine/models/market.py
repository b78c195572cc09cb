from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

# Epoch values above this are treated as milliseconds
_MILLISECOND_EPOCH_THRESHOLD = 10**11


class TrendDirection(Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"

    @classmethod
    def from_raw(cls, raw: Any) -> "TrendDirection | None":
        """Normalize raw trend input from strings or mappings into an enum value."""

        if isinstance(raw, Mapping):
            raw = raw.get("trend")

        if isinstance(raw, cls):
            return raw

        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower())
            except ValueError:
                return None

        return None


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    raise KeyError(keys[0])


@dataclass(frozen=True)
class Bar:
    """One OHLCV observation. Sequences are ordered oldest to newest."""

    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
    time: datetime | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Bar":
        """Build a bar from long (``open``) or short (``o``) OHLCV keys."""
        raw_time = data.get("time", data.get("t"))
        raw_volume = data.get("volume", data.get("v"))

        return cls(
            open=float(_first_present(data, "open", "o")),
            high=float(_first_present(data, "high", "h")),
            low=float(_first_present(data, "low", "l")),
            close=float(_first_present(data, "close", "c")),
            volume=float(raw_volume) if raw_volume is not None else 0.0,
            time=cls._normalize_time(raw_time) if raw_time is not None else None,
        )

    @property
    def body(self) -> float:
        return abs(self.close - self.open)

    @property
    def typical_price(self) -> float:
        return (self.high + self.low + self.close) / 3

    @staticmethod
    def _normalize_time(value: Any) -> datetime:
        if isinstance(value, datetime):
            return value

        if hasattr(value, "to_pydatetime"):
            return value.to_pydatetime()  # type: ignore[no-any-return]

        if isinstance(value, (int, float)):
            seconds = value / 1000 if value > _MILLISECOND_EPOCH_THRESHOLD else value
            return datetime.fromtimestamp(seconds, tz=timezone.utc)

        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value)
            except ValueError:
                pass

        raise TypeError("Bar time value must be datetime-compatible")


@dataclass(frozen=True)
class KeyLevel:
    """A significant price level with a strength in [0, 100]."""

    level_type: str
    price: float
    timeframe: str
    strength: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "KeyLevel":
        price = row["price"]
        strength = row.get("strength")
        return cls(
            level_type=str(row["level_type"]),
            price=float(price),
            timeframe=str(row.get("timeframe") or ""),
            strength=float(strength) if strength is not None else 50.0,
        )


@dataclass(frozen=True)
class MTFAnalysis:
    """One timeframe's trend read."""

    timeframe: str
    trend: TrendDirection
    structure: str
    ema_position: str
    momentum: str
    orb_status: str | None = None
    vwap_position: str | None = None

    def __post_init__(self) -> None:
        trend = TrendDirection.from_raw(self.trend)
        if trend is None:
            raise ValueError(f"Unknown trend direction: {self.trend!r}")
        object.__setattr__(self, "trend", trend)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "MTFAnalysis":
        trend = TrendDirection.from_raw(row.get("trend")) or TrendDirection.NEUTRAL
        return cls(
            timeframe=str(row["timeframe"]),
            trend=trend,
            structure=str(row.get("structure") or "range"),
            ema_position=str(row.get("ema_position") or "mixed"),
            momentum=str(row.get("momentum") or "weak"),
            orb_status=row.get("orb_status"),
            vwap_position=row.get("vwap_position"),
        )


@dataclass(frozen=True)
class MarketSnapshot:
    """Latest quote plus recent execution-timeframe bars for one symbol."""

    current_price: float
    bars: tuple[Bar, ...] = ()

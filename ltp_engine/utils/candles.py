from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Sequence

import pandas as pd

from ltp_engine.models import Bar

BAR_COLUMNS = ("open", "high", "low", "close", "volume")


def to_bar(entry: Bar | Mapping[str, Any]) -> Bar:
    """Convert a mapping or Bar instance into a Bar object."""

    if isinstance(entry, Bar):
        return entry
    if isinstance(entry, Mapping):
        return Bar.from_mapping(entry)
    raise TypeError("Unsupported bar input type")


def prepare_bars(
    bars: "pd.DataFrame | Sequence[Bar | Mapping[str, Any]] | None",
    *,
    limit: int | None = None,
) -> List[Bar]:
    """Normalize mixed bar inputs into a (optionally tail-sliced) list of Bars."""

    if limit is not None and limit <= 0:
        raise ValueError("limit must be positive when provided")

    if bars is None:
        return []

    if isinstance(bars, pd.DataFrame):
        source = bars.tail(limit) if limit is not None else bars
        raw_entries: Iterable[Mapping[str, Any]] = source.to_dict(orient="records")
    else:
        sequence = list(bars)
        raw_entries = sequence[-limit:] if limit is not None else sequence

    return [to_bar(entry) for entry in raw_entries]


def bars_to_frame(bars: "pd.DataFrame | Sequence[Bar | Mapping[str, Any]] | None") -> pd.DataFrame:
    """Return an OHLCV DataFrame (float columns) for any supported bar input."""

    normalized = prepare_bars(bars)
    if not normalized:
        return pd.DataFrame(columns=list(BAR_COLUMNS), dtype="float64")

    return pd.DataFrame(
        {
            "open": [bar.open for bar in normalized],
            "high": [bar.high for bar in normalized],
            "low": [bar.low for bar in normalized],
            "close": [bar.close for bar in normalized],
            "volume": [bar.volume for bar in normalized],
        },
        dtype="float64",
    )

from typing import Iterable, List, Optional

from ltp_engine.configuration.ltp_config import RECENT_WINDOW_MINUTES
from ltp_engine.entry.setup_repository import fetch_detected_setups
from ltp_engine.levels.level_repository import fetch_key_levels
from ltp_engine.models import DetectedSetup, KeyLevel, MTFAnalysis
from ltp_engine.trend.mtf_repository import fetch_mtf_analysis

from .base import SetupStore


class PostgresSetupStore(SetupStore):
    """SetupStore backed by the shared psycopg2 connection pool."""

    def __init__(self, window_minutes: int = RECENT_WINDOW_MINUTES):
        self.window_minutes = window_minutes

    def fetch_detected_setups(self, symbols: Optional[Iterable[str]] = None) -> List[DetectedSetup]:
        return fetch_detected_setups(symbols, window_minutes=self.window_minutes)

    def fetch_key_levels(self, symbol: str) -> List[KeyLevel]:
        return fetch_key_levels(symbol)

    def fetch_mtf_analysis(self, symbol: str) -> List[MTFAnalysis]:
        return fetch_mtf_analysis(symbol, window_minutes=self.window_minutes)

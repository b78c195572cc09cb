"""Read-only store interface consumed by the detection pipeline."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ltp_engine.models import DetectedSetup, KeyLevel, MTFAnalysis


class SetupStore(ABC):
    """Source of levels, MTF reads and recent setups.

    Implementations return empty lists on failure instead of raising.
    """

    @abstractmethod
    def fetch_detected_setups(self, symbols: Optional[Iterable[str]] = None) -> List[DetectedSetup]:
        """Setups from the trailing 30 minutes, best confluence first."""
        pass

    @abstractmethod
    def fetch_key_levels(self, symbol: str) -> List[KeyLevel]:
        """Non-expired levels for ``symbol``."""
        pass

    @abstractmethod
    def fetch_mtf_analysis(self, symbol: str) -> List[MTFAnalysis]:
        """MTF reads for ``symbol`` from the trailing 30 minutes."""
        pass

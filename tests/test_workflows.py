import os
import sys
import unittest
from unittest.mock import patch

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ltp_engine.levels.workflow import refresh_key_levels
from ltp_engine.models import Bar, TrendDirection
from ltp_engine.trend.workflow import refresh_mtf_analysis


def rising_bars(count):
    return [Bar(100 + i - 0.5, 100 + i + 0.5, 100 + i - 1, 100 + i) for i in range(count)]


class TestRefreshKeyLevels(unittest.TestCase):
    @patch("ltp_engine.levels.workflow.store_key_levels")
    def test_derived_levels_are_stored(self, mock_store):
        daily = [Bar(100, 105, 95, 102), Bar(102, 108, 101, 107)]

        levels = refresh_key_levels("AAPL", daily, None)

        self.assertEqual([level.level_type for level in levels], ["pdh", "pdl", "pdc"])
        mock_store.assert_called_once_with("AAPL", levels)

    @patch("ltp_engine.levels.workflow.store_key_levels")
    def test_nothing_derived_keeps_stored_set(self, mock_store):
        self.assertEqual(refresh_key_levels("AAPL", None, None), [])
        mock_store.assert_not_called()


class TestRefreshMTFAnalysis(unittest.TestCase):
    @patch("ltp_engine.trend.workflow.store_mtf_analysis")
    def test_only_timeframes_with_bars_are_analyzed(self, mock_store):
        bars_by_timeframe = {"1h": rising_bars(30), "daily": rising_bars(10)}

        analyses = refresh_mtf_analysis("AAPL", bars_by_timeframe, timeframes=("5m", "1h", "daily"))

        self.assertEqual([a.timeframe for a in analyses], ["1h", "daily"])
        self.assertEqual(analyses[0].trend, TrendDirection.BULLISH)
        self.assertEqual(analyses[1].trend, TrendDirection.NEUTRAL)
        mock_store.assert_called_once_with("AAPL", analyses)

    @patch("ltp_engine.trend.workflow.store_mtf_analysis")
    def test_no_bars_stores_nothing(self, mock_store):
        self.assertEqual(refresh_mtf_analysis("AAPL", {}), [])
        mock_store.assert_not_called()


if __name__ == "__main__":
    unittest.main()

import os
import sys
import unittest
from datetime import datetime, timezone
from decimal import Decimal

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ltp_engine.models import (
    Bar,
    DetectedSetup,
    KeyLevel,
    MTFAnalysis,
    SetupStage,
    TradeParams,
    TrendDirection,
)


class TestTrendDirection(unittest.TestCase):
    def test_from_raw_normalizes_strings(self):
        self.assertEqual(TrendDirection.from_raw(" Bullish "), TrendDirection.BULLISH)
        self.assertEqual(TrendDirection.from_raw({"trend": "bearish"}), TrendDirection.BEARISH)

    def test_from_raw_rejects_unknown(self):
        self.assertIsNone(TrendDirection.from_raw("sideways"))
        self.assertIsNone(TrendDirection.from_raw(None))


class TestBar(unittest.TestCase):
    def test_from_short_keys_with_millisecond_epoch(self):
        bar = Bar.from_mapping({"o": 1, "h": 2, "l": 0.5, "c": 1.5, "v": 10, "t": 1_700_000_000_000})
        self.assertEqual((bar.open, bar.high, bar.low, bar.close, bar.volume), (1.0, 2.0, 0.5, 1.5, 10.0))
        self.assertEqual(bar.time, datetime.fromtimestamp(1_700_000_000, tz=timezone.utc))

    def test_missing_volume_defaults_to_zero(self):
        bar = Bar.from_mapping({"open": 1, "high": 2, "low": 0.5, "close": 1.5})
        self.assertEqual(bar.volume, 0.0)
        self.assertIsNone(bar.time)

    def test_missing_price_raises(self):
        with self.assertRaises(KeyError):
            Bar.from_mapping({"open": 1, "high": 2, "low": 0.5})

    def test_body_and_typical_price(self):
        bar = Bar(open=10, high=12, low=9, close=9.5)
        self.assertEqual(bar.body, 0.5)
        self.assertAlmostEqual(bar.typical_price, 10.1666667, places=5)


class TestRowMapping(unittest.TestCase):
    def test_key_level_from_row(self):
        level = KeyLevel.from_row({"level_type": "pdh", "price": Decimal("101.25"), "timeframe": "daily"})
        self.assertEqual(level, KeyLevel("pdh", 101.25, "daily", 50.0))

    def test_mtf_from_row_defaults_unknown_trend_to_neutral(self):
        analysis = MTFAnalysis.from_row({"timeframe": "1h", "trend": "unknown"})
        self.assertEqual(analysis.trend, TrendDirection.NEUTRAL)
        self.assertEqual(analysis.structure, "range")

    def test_mtf_normalizes_string_trend(self):
        analysis = MTFAnalysis("1h", " Bullish", "uptrend", "above_all", "strong")
        self.assertIs(analysis.trend, TrendDirection.BULLISH)

    def test_mtf_rejects_unknown_trend(self):
        with self.assertRaises(ValueError):
            MTFAnalysis("1h", "sideways", "range", "mixed", "weak")

    def test_setup_stage_from_raw(self):
        self.assertEqual(SetupStage.from_raw("READY"), SetupStage.READY)
        self.assertEqual(SetupStage.from_raw("expired"), SetupStage.FORMING)


class TestDetectedSetup(unittest.TestCase):
    def setUp(self):
        self.detected_at = datetime(2024, 3, 1, 15, 30, tzinfo=timezone.utc)
        self.setup = DetectedSetup(
            symbol="AAPL",
            direction=TrendDirection.BULLISH,
            setup_stage=SetupStage.READY,
            confluence_score=86,
            level_score=80,
            trend_score=80,
            patience_score=100,
            mtf_score=80,
            primary_level_type="pdh",
            primary_level_price=100.0,
            patience_candles=5,
            trade_params=TradeParams(100.0, 99.0, 101.0, 102.0, 103.0, 2.0),
            coach_note="Strong PDH level confluence.",
            detected_at=self.detected_at,
        )

    def test_to_record_flattens_trade_params(self):
        record = self.setup.to_record()
        self.assertEqual(record["direction"], "bullish")
        self.assertEqual(record["setup_stage"], "ready")
        self.assertEqual(record["target_2"], 102.0)
        self.assertEqual(record["risk_reward"], 2.0)
        self.assertEqual(record["detected_at"], self.detected_at)

    def test_from_row_restores_record(self):
        self.assertEqual(DetectedSetup.from_row(self.setup.to_record()), self.setup)

    def test_from_row_rejects_bad_direction(self):
        row = self.setup.to_record()
        row["direction"] = "sideways"
        with self.assertRaises(ValueError):
            DetectedSetup.from_row(row)

    def test_trade_param_shortcuts(self):
        self.assertEqual(self.setup.suggested_entry, 100.0)
        self.assertEqual(self.setup.suggested_stop, 99.0)
        self.assertEqual(self.setup.target_1, 101.0)
        self.assertEqual(self.setup.target_2, 102.0)
        self.assertEqual(self.setup.target_3, 103.0)
        self.assertEqual(self.setup.risk_reward, 2.0)


if __name__ == "__main__":
    unittest.main()

import os
import sys
import unittest

import pandas as pd

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ltp_engine.models import Bar
from ltp_engine.utils import calculate_ema, calculate_sma, calculate_vwap, prepare_bars, round_half_up


class TestCalculateEMA(unittest.TestCase):
    def test_empty_series_returns_zero(self):
        self.assertEqual(calculate_ema([], 9), 0.0)

    def test_short_series_falls_back_to_last_value(self):
        self.assertEqual(calculate_ema([1.0, 2.0, 3.0], 5), 3.0)

    def test_exact_period_returns_simple_average_seed(self):
        self.assertAlmostEqual(calculate_ema([1, 2, 3, 4, 5], 5), 3.0)

    def test_smoothing_after_seed(self):
        # seed 3.0, multiplier 2/6: 3 + (6 - 3) / 3 = 4
        self.assertAlmostEqual(calculate_ema([1, 2, 3, 4, 5, 6], 5), 4.0)

    def test_accepts_pandas_series(self):
        series = pd.Series([1, 2, 3, 4, 5, 6], index=[10, 11, 12, 13, 14, 15])
        self.assertAlmostEqual(calculate_ema(series, 5), 4.0)


class TestCalculateSMA(unittest.TestCase):
    def test_uses_last_period_values(self):
        self.assertAlmostEqual(calculate_sma(list(range(1, 11)), 5), 8.0)

    def test_short_series_falls_back_to_last_value(self):
        self.assertEqual(calculate_sma([4.0, 5.0], 200), 5.0)


class TestCalculateVWAP(unittest.TestCase):
    def test_empty_bars_return_zero(self):
        self.assertEqual(calculate_vwap([]), 0.0)

    def test_zero_volume_returns_zero(self):
        bars = [Bar(10, 11, 9, 10, volume=0), Bar(20, 21, 19, 20, volume=0)]
        self.assertEqual(calculate_vwap(bars), 0.0)

    def test_volume_weighted_typical_price(self):
        bars = [
            {"open": 10, "high": 11, "low": 9, "close": 10, "volume": 100},
            {"open": 20, "high": 21, "low": 19, "close": 20, "volume": 300},
        ]
        self.assertAlmostEqual(calculate_vwap(bars), 17.5)

    def test_accepts_dataframe(self):
        df = pd.DataFrame(
            {"open": [10, 20], "high": [11, 21], "low": [9, 19], "close": [10, 20], "volume": [100, 300]}
        )
        self.assertAlmostEqual(calculate_vwap(df), 17.5)


class TestPrepareBars(unittest.TestCase):
    def test_none_returns_empty_list(self):
        self.assertEqual(prepare_bars(None), [])

    def test_limit_keeps_newest_bars(self):
        bars = [Bar(i, i, i, i) for i in range(1, 6)]
        self.assertEqual([b.close for b in prepare_bars(bars, limit=2)], [4, 5])

    def test_non_positive_limit_rejected(self):
        with self.assertRaises(ValueError):
            prepare_bars([], limit=0)


class TestRoundHalfUp(unittest.TestCase):
    def test_halves_round_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(4.5), 5)

    def test_decimal_places(self):
        self.assertAlmostEqual(round_half_up(123.456, 2), 123.46)


if __name__ == "__main__":
    unittest.main()

import os
import sys
import unittest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ltp_engine.models import Bar, PatienceResult
from ltp_engine.patience import detect_patience_candle, identify_patience_candles, score_patience_quality


def quiet_bar():
    """Body 0.1% of open, close 0.1% from a level at 100."""
    return Bar(open=100.0, high=100.2, low=99.9, close=100.1)


def wide_bar():
    return Bar(open=100.0, high=102.5, low=99.5, close=102.0)


class TestDetectPatienceCandle(unittest.TestCase):
    def test_fewer_than_three_bars_is_never_detected(self):
        result = detect_patience_candle([quiet_bar(), quiet_bar()], 100.0)
        self.assertEqual(result, PatienceResult(detected=False, count=0))

    def test_single_qualifying_bar_is_not_enough(self):
        bars = [wide_bar()] * 4 + [quiet_bar()]
        result = detect_patience_candle(bars, 100.0)
        self.assertFalse(result.detected)
        self.assertEqual(result.count, 1)

    def test_two_qualifying_bars_detected(self):
        bars = [wide_bar()] * 3 + [quiet_bar(), quiet_bar()]
        result = detect_patience_candle(bars, 100.0)
        self.assertTrue(result.detected)
        self.assertEqual(result.count, 2)

    def test_five_quiet_bars_at_level(self):
        bars = [wide_bar()] * 3 + [quiet_bar()] * 5
        result = detect_patience_candle(bars, 100.0)
        self.assertEqual(result, PatienceResult(detected=True, count=5))
        self.assertEqual(score_patience_quality(result), 100)

    def test_only_last_five_bars_are_examined(self):
        bars = [quiet_bar()] * 8
        self.assertEqual(detect_patience_candle(bars, 100.0).count, 5)

    def test_bars_away_from_level_do_not_qualify(self):
        bars = [quiet_bar()] * 5
        result = detect_patience_candle(bars, 101.0)
        self.assertEqual(result, PatienceResult(detected=False, count=0))

    def test_custom_body_threshold(self):
        bars = [quiet_bar()] * 5
        self.assertEqual(detect_patience_candle(bars, 100.0, max_candle_size=0.05).count, 0)

    def test_non_positive_level_never_qualifies(self):
        self.assertEqual(detect_patience_candle([quiet_bar()] * 5, 0.0).count, 0)

    def test_accepts_short_key_mappings(self):
        bars = [{"o": 100.0, "h": 100.2, "l": 99.9, "c": 100.1, "v": 10}] * 3
        self.assertEqual(detect_patience_candle(bars, 100.0).count, 3)


class TestScorePatienceQuality(unittest.TestCase):
    def test_not_detected_scores_zero(self):
        self.assertEqual(score_patience_quality(PatienceResult(detected=False, count=1)), 0)

    def test_two_candles(self):
        self.assertEqual(score_patience_quality(PatienceResult(detected=True, count=2)), 80)

    def test_capped_at_three_candles(self):
        self.assertEqual(score_patience_quality(PatienceResult(detected=True, count=3)), 100)
        self.assertEqual(score_patience_quality(PatienceResult(detected=True, count=5)), 100)


class TestIdentifyPatienceCandles(unittest.TestCase):
    def test_small_inside_bar_is_identified(self):
        mother = Bar(open=100, high=112, low=98, close=110)
        inside = Bar(open=104, high=106, low=102, close=104.5)
        self.assertEqual(identify_patience_candles([mother, inside]), [inside])

    def test_small_bar_outside_previous_range_is_ignored(self):
        mother = Bar(open=100, high=112, low=98, close=110)
        breakout = Bar(open=111, high=114, low=110, close=111.5)
        self.assertEqual(identify_patience_candles([mother, breakout]), [])

    def test_single_bar_returns_empty(self):
        self.assertEqual(identify_patience_candles([quiet_bar()]), [])


if __name__ == "__main__":
    unittest.main()

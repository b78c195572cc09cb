"""
Unit tests for the composite score, grade, trade parameters, coach note
and score explanation.
"""

import os
import sys
import unittest
from datetime import datetime, timezone

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ltp_engine.entry import (
    calculate_ltp_score,
    calculate_trade_params,
    generate_coach_note,
    generate_score_explanation,
    get_ltp_grade,
)
from ltp_engine.models import KeyLevel, LevelResult, MTFAnalysis, PatienceResult, TradeParams, TrendDirection

BULLISH = TrendDirection.BULLISH
BEARISH = TrendDirection.BEARISH


class TestCalculateLTPScore(unittest.TestCase):
    def test_weighted_overall(self):
        score = calculate_ltp_score(80, 80, 100)
        self.assertEqual(score.overall, 86)
        self.assertEqual(get_ltp_grade(score.overall), "B")

    def test_inputs_are_clamped(self):
        self.assertEqual(calculate_ltp_score(150, -10, 50), calculate_ltp_score(100, 0, 50))
        self.assertEqual(calculate_ltp_score(150, -10, 50).overall, 50)

    def test_halves_round_up(self):
        # 0.30 * 15 = 4.5
        self.assertEqual(calculate_ltp_score(0, 0, 15).overall, 5)

    def test_extremes(self):
        self.assertEqual(calculate_ltp_score(0, 0, 0).overall, 0)
        self.assertEqual(calculate_ltp_score(100, 100, 100).overall, 100)


class TestGetLTPGrade(unittest.TestCase):
    def test_lower_bounds_are_inclusive(self):
        cases = {100: "A", 90: "A", 89: "B", 80: "B", 79: "C", 70: "C", 69: "D", 60: "D", 59: "F", 0: "F"}
        for score, grade in cases.items():
            with self.subTest(score=score):
                self.assertEqual(get_ltp_grade(score), grade)


class TestCalculateTradeParams(unittest.TestCase):
    def test_bullish_setup(self):
        level = KeyLevel("pdl", 98.0, "daily", 80)
        params = calculate_trade_params(100.0, level, BULLISH)
        self.assertEqual(
            params,
            TradeParams(
                suggested_entry=100.0,
                suggested_stop=97.0,
                target_1=103.0,
                target_2=106.0,
                target_3=109.0,
                risk_reward=2.0,
            ),
        )

    def test_bearish_setup_is_mirrored(self):
        level = KeyLevel("pdh", 102.0, "daily", 80)
        params = calculate_trade_params(100.0, level, BEARISH)
        self.assertEqual(params.suggested_stop, 103.0)
        self.assertEqual((params.target_1, params.target_2, params.target_3), (97.0, 94.0, 91.0))
        self.assertEqual(params.risk_reward, 2.0)

    def test_no_level_yields_empty_params(self):
        for direction in (BULLISH, BEARISH):
            with self.subTest(direction=direction):
                params = calculate_trade_params(100.0, None, direction)
                self.assertTrue(params.is_empty)

    def test_prices_rounded_to_cents(self):
        level = KeyLevel("vwap", 120.0, "intraday", 75)
        params = calculate_trade_params(123.456, level, BULLISH)
        self.assertAlmostEqual(params.suggested_entry, 123.46)
        self.assertAlmostEqual(params.suggested_stop, 118.77)

    def test_zero_risk_gives_zero_ratio(self):
        level = KeyLevel("vwap", 100.0, "intraday", 75)
        params = calculate_trade_params(100.0, level, BULLISH, atr_percent=0.0)
        self.assertEqual(params.risk_reward, 0.0)

    def test_string_direction_is_accepted(self):
        level = KeyLevel("pdh", 102.0, "daily", 80)
        self.assertEqual(
            calculate_trade_params(100.0, level, "bearish"),
            calculate_trade_params(100.0, level, BEARISH),
        )


class TestGenerateCoachNote(unittest.TestCase):
    def test_strong_setup(self):
        level_result = LevelResult(score=90, level=KeyLevel("pdh", 100.0, "daily", 80))
        note = generate_coach_note(level_result, 80, PatienceResult(True, 3), BULLISH)
        self.assertEqual(
            note,
            "Strong PDH level confluence. MTF trend strongly bullish. 3 patience candle(s) confirmed.",
        )

    def test_moderate_setup(self):
        level_result = LevelResult(score=55, level=KeyLevel("vwap", 100.0, "intraday", 40))
        note = generate_coach_note(level_result, 55, PatienceResult(False, 1), BEARISH)
        self.assertEqual(
            note,
            "Price near VWAP. Trend leaning bearish. Waiting for patience candle confirmation.",
        )

    def test_weak_setup_only_mentions_patience(self):
        note = generate_coach_note(LevelResult.none(), 10, PatienceResult.none(), BULLISH)
        self.assertEqual(note, "Waiting for patience candle confirmation.")

    def test_string_direction_is_accepted(self):
        note = generate_coach_note(LevelResult.none(), 55, PatienceResult.none(), "bearish")
        self.assertEqual(note, "Trend leaning bearish. Waiting for patience candle confirmation.")


class TestGenerateScoreExplanation(unittest.TestCase):
    def setUp(self):
        self.timestamp = datetime(2024, 3, 1, 15, 30, tzinfo=timezone.utc)
        self.analyses = [
            MTFAnalysis("daily", BULLISH, "uptrend", "above_all", "strong"),
            MTFAnalysis("1h", BULLISH, "uptrend", "above_all", "moderate"),
            MTFAnalysis("4h", BEARISH, "range", "mixed", "weak"),
        ]

    def test_explanation_with_level(self):
        level = KeyLevel("vwap", 99.8, "intraday", 75)
        explanation = generate_score_explanation(
            "AAPL",
            BULLISH,
            100.0,
            LevelResult(score=80, level=level),
            40,
            PatienceResult(True, 2),
            self.analyses,
            timestamp=self.timestamp,
        )

        self.assertEqual(explanation.scores.overall, 66)
        self.assertEqual(explanation.grade, "D")
        self.assertEqual(explanation.reasons.level, "Price within 0.20% of 99.80 vwap (strength: 75)")
        self.assertEqual(explanation.reasons.trend, "Bullish trend aligned on daily, 1h timeframes")
        self.assertEqual(explanation.reasons.patience, "2 patience candle(s) confirmed at level")
        self.assertEqual(explanation.inputs.level_used, ("vwap", 99.8))
        self.assertEqual(explanation.inputs.timeframes_analyzed, ("daily", "1h", "4h"))
        self.assertEqual(explanation.inputs.patience_candle_count, 2)
        self.assertEqual(explanation.inputs.timestamp, self.timestamp)

    def test_explanation_without_level(self):
        explanation = generate_score_explanation(
            "AAPL",
            BEARISH,
            100.0,
            LevelResult.none(),
            0,
            PatienceResult.none(),
            [self.analyses[0]],
            timestamp=self.timestamp,
        )

        self.assertEqual(explanation.scores.overall, 0)
        self.assertEqual(explanation.grade, "F")
        self.assertEqual(explanation.reasons.level, "No key level nearby - price is in no-man's land")
        self.assertEqual(explanation.reasons.trend, "Trend not aligned with bearish direction")
        self.assertEqual(
            explanation.reasons.patience, "No patience candles detected - waiting for confirmation"
        )
        self.assertIsNone(explanation.inputs.level_used)


if __name__ == "__main__":
    unittest.main()

import unittest

from backend.indicators import IndicatorEngine


class EmaTests(unittest.TestCase):
    def test_returns_none_when_shorter_than_period(self):
        self.assertIsNone(IndicatorEngine.calculate_ema([1.0] * 8, 9))
        self.assertIsNone(IndicatorEngine.calculate_ema([], 9))

    def test_exact_period_is_the_simple_mean(self):
        self.assertAlmostEqual(IndicatorEngine.calculate_ema([1.0, 2.0, 3.0], 3), 2.0)

    def test_smooths_values_after_the_seed(self):
        # seed = 2, k = 0.5: 4 -> 3, 5 -> 4
        self.assertAlmostEqual(IndicatorEngine.calculate_ema([1.0, 2.0, 3.0, 4.0, 5.0], 3), 4.0)

    def test_flat_series_stays_flat(self):
        self.assertEqual(IndicatorEngine.calculate_ema([100.0] * 30, 20), 100.0)

    def test_result_ends_on_last_value(self):
        rising = [float(v) for v in range(1, 31)]
        self.assertGreater(IndicatorEngine.calculate_ema(rising, 9), IndicatorEngine.calculate_ema(rising, 20))
        falling = rising[::-1]
        self.assertLess(IndicatorEngine.calculate_ema(falling, 9), IndicatorEngine.calculate_ema(falling, 20))

    def test_rejects_non_positive_period(self):
        with self.assertRaises(ValueError):
            IndicatorEngine.calculate_ema([1.0, 2.0], 0)


class MomentumTests(unittest.TestCase):
    def test_latest_minus_previous(self):
        self.assertEqual(IndicatorEngine.calculate_momentum([105.5, 103.0, 90.0]), 105.5 - 103.0)

    def test_negative_delta(self):
        self.assertEqual(IndicatorEngine.calculate_momentum([99.0, 100.0]), -1.0)

    def test_zero_with_fewer_than_two_closes(self):
        self.assertEqual(IndicatorEngine.calculate_momentum([100.0]), 0.0)
        self.assertEqual(IndicatorEngine.calculate_momentum([]), 0.0)


if __name__ == "__main__":
    unittest.main()

"""
Trend indicators for the local analyzer
=======================================
EMA and momentum over close prices.
"""

from typing import List, Optional


# ============================================================
# TREND ESTIMATOR
# ============================================================

class IndicatorEngine:
    """Technical indicator calculation engine"""

    @staticmethod
    def calculate_ema(values: List[float], period: int) -> Optional[float]:
        """EMA (Exponential Moving Average)

        Expects ``values`` ordered oldest-first. Returns the EMA at the last
        value, or None when there are fewer values than ``period``.

        - Multiplier = 2 / (period + 1)
        - Initial value = SMA of the first ``period`` values
        - Subsequent: EMA = (Price - Previous EMA) × Multiplier + Previous EMA
        """
        if period <= 0:
            raise ValueError(f"EMA period must be positive, got {period}")
        if not values or len(values) < period:
            return None

        multiplier = 2.0 / (period + 1.0)
        ema = sum(values[:period]) / float(period)

        for price in values[period:]:
            ema = (price - ema) * multiplier + ema

        return ema

    @staticmethod
    def calculate_momentum(closes: List[float]) -> float:
        """One-step momentum: most recent close minus the previous close.

        ``closes`` is newest-first.
        """
        if not closes or len(closes) < 2:
            return 0.0
        return closes[0] - closes[1]

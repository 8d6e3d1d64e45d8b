"""
Local analyzer
==============
Deterministic fallback analysis: series preparation, trend estimate,
structure scan and bias/levels synthesis.
"""

import math
from typing import Any, Dict, Iterable, List, Optional

from .config import DEFAULT_PAIR
from .indicators import IndicatorEngine
from .patterns import PatternDetector

EMA_FAST = 9
EMA_SLOW = 20

# (tp1, tp2, sl) multipliers applied to the last close
LEVEL_OFFSETS = {
    "Bullish": (1.003, 1.007, 0.995),
    "Bearish": (0.997, 0.993, 1.005),
}

OHLC_FIELDS = ("open", "high", "low", "close")


# ============================================================
# SERIES PREPARATION
# ============================================================

def _read_field(candle: Any, name: str) -> float:
    value = float(candle[name] if isinstance(candle, dict) else getattr(candle, name))
    if not math.isfinite(value):
        raise ValueError(f"Candle {name} must be a finite number, got {value}")
    return value


def normalize_candles(candles: Iterable[Any]) -> List[Dict[str, float]]:
    """Convert raw candles (dicts with numeric or numeric-string values, or
    objects exposing open/high/low/close) into float-only dicts.

    Order is preserved; callers pass newest-first. NaN or infinite
    prices raise ValueError.
    """
    return [{name: _read_field(candle, name) for name in OHLC_FIELDS} for candle in candles]


def extract_closes(candles: List[Dict[str, float]]) -> List[float]:
    """Close prices, newest-first."""
    return [k["close"] for k in candles]


# ============================================================
# SYNTHESIZER
# ============================================================

def determine_bias(ema_fast: Optional[float], ema_slow: Optional[float], momentum: float) -> str:
    """Bullish/Bearish from the EMA cross, momentum sign when either EMA is missing.

    Equal EMAs resolve to Bearish.
    """
    if ema_fast is not None and ema_slow is not None:
        return "Bullish" if ema_fast > ema_slow else "Bearish"

    if momentum > 0:
        return "Bullish"
    if momentum < 0:
        return "Bearish"
    return "Neutral"


def recommend_levels(last_price: float, bias: str) -> Dict[str, float]:
    """Entry, two take-profits and a stop-loss at fixed offsets from the last close.

    Anything other than Bullish uses the Bearish offsets.
    """
    tp1, tp2, sl = LEVEL_OFFSETS["Bullish" if bias == "Bullish" else "Bearish"]
    return {
        "entry": last_price,
        "tp1": round(last_price * tp1, 4),
        "tp2": round(last_price * tp2, 4),
        "sl": round(last_price * sl, 4),
    }


def build_reasoning(ema_fast: Optional[float], ema_slow: Optional[float], momentum: float) -> str:
    fast = f"={ema_fast:.2f}" if ema_fast is not None else "n/a"
    slow = f"={ema_slow:.2f}" if ema_slow is not None else "n/a"
    return f"Local-rule: EMA{EMA_FAST} {fast} vs EMA{EMA_SLOW} {slow}; momentum={momentum:.2f}"


def local_analyze(candles: Iterable[Any], pair: str = DEFAULT_PAIR) -> Dict[str, Any]:
    """Run the local rule-based analysis over newest-first candles.

    Raises ValueError when no candles are given.
    """
    klines = normalize_candles(candles)
    if not klines:
        raise ValueError("No candle data available")

    closes = extract_closes(klines)

    # EMA runs oldest-first so its last value belongs to the newest candle
    chronological = closes[::-1]
    ema9 = IndicatorEngine.calculate_ema(chronological, EMA_FAST)
    ema20 = IndicatorEngine.calculate_ema(chronological, EMA_SLOW)
    momentum = IndicatorEngine.calculate_momentum(closes)

    zones = PatternDetector.detect_order_blocks(klines)
    gaps = PatternDetector.detect_fair_value_gaps(klines)

    bias = determine_bias(ema9, ema20, momentum)

    return {
        "pair": pair,
        "bias": bias,
        "ema9": ema9,
        "ema20": ema20,
        "momentum": round(momentum, 4),
        "zones": zones,
        "gaps": gaps,
        "recommended": recommend_levels(closes[0], bias),
        "reasoning": build_reasoning(ema9, ema20, momentum),
    }

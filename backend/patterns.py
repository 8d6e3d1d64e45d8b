"""
Market-structure pattern detection
==================================
Order-block zones and fair value gaps from raw OHLC candles.

Both scans take candles newest-first (index 0 = most recent) and return at
most ``MAX_FINDINGS`` entries in scan order.
"""

from typing import Dict, List, Mapping, Sequence, Union

MAX_FINDINGS = 5
ORDER_BLOCK_SCAN_LIMIT = 30

Finding = Dict[str, Union[str, float, int]]


class PatternDetector:
    """Rule-based structure detection from OHLC data"""

    @staticmethod
    def detect_order_blocks(candles: Sequence[Mapping[str, float]]) -> List[Finding]:
        """Detect demand/supply zones with a 3-candle window.

        For each index ``i`` in ``2 .. min(len, 30) - 1`` the window is
        ``c = candles[i-2]``, ``p = candles[i-1]``, ``n = candles[i]``, taken
        literally in list order.

        - Demand: ``n`` closes above its open, ``n.low < p.low <= c.low``
          -> zone from ``n.low`` to ``n.close``
        - Supply: ``n`` closes below its open, ``n.high > p.high >= c.high``
          -> zone from ``n.close`` to ``n.high``
        """
        zones: List[Finding] = []

        for i in range(2, min(len(candles), ORDER_BLOCK_SCAN_LIMIT)):
            c, p, n = candles[i - 2], candles[i - 1], candles[i]

            if n["close"] > n["open"] and n["low"] < p["low"] and p["low"] <= c["low"]:
                zones.append({"kind": "demand", "low": n["low"], "high": n["close"], "index": i})

            if n["close"] < n["open"] and n["high"] > p["high"] and p["high"] >= c["high"]:
                zones.append({"kind": "supply", "low": n["close"], "high": n["high"], "index": i})

        return zones[:MAX_FINDINGS]

    @staticmethod
    def detect_fair_value_gaps(candles: Sequence[Mapping[str, float]]) -> List[Finding]:
        """Detect Fair Value Gaps between the outer candles of a 3-candle window.

        For each index ``i`` the window is ``c = candles[i]``,
        ``a = candles[i+2]``; the middle candle only shapes the window.

        - Bearish: ``a.high < c.low`` -> gap from ``a.high`` up to ``c.low``
        - Bullish: ``a.low > c.high`` -> gap from ``c.high`` up to ``a.low``
        """
        gaps: List[Finding] = []

        for i in range(len(candles) - 2):
            c, a = candles[i], candles[i + 2]

            if a["high"] < c["low"]:
                gaps.append({"kind": "bearish", "top": c["low"], "bottom": a["high"], "index": i})

            if a["low"] > c["high"]:
                gaps.append({"kind": "bullish", "top": a["low"], "bottom": c["high"], "index": i})

        return gaps[:MAX_FINDINGS]

"""Candle builders shared by the test suites."""


def candle(open_, high, low, close):
    return {"open": open_, "high": high, "low": low, "close": close}


def flat_candles(n, price=100.0):
    return [candle(price, price, price, price) for _ in range(n)]


def trending_candles(n, newest=200.0, step=1.0):
    """Newest-first candles whose closes fall by ``step`` going back in time."""
    rows = []
    for i in range(n):
        close = newest - i * step
        rows.append(candle(close - 0.5, close + 1.0, close - 1.0, close))
    return rows

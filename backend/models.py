"""Request models for the public API."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class Candle(BaseModel):
    """One OHLC candle; numeric strings (TwelveData) are coerced to floats, NaN and infinity are rejected."""

    open: float = Field(allow_inf_nan=False)
    high: float = Field(allow_inf_nan=False)
    low: float = Field(allow_inf_nan=False)
    close: float = Field(allow_inf_nan=False)
    datetime: Optional[str] = Field(default=None, description="Candle timestamp as sent by the data provider")


class AnalyzeRequest(BaseModel):
    pair: Optional[str] = None
    ohlc: Optional[List[Candle]] = Field(default=None, description="Candles, most recent first")
    interval: Optional[str] = None

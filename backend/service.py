"""Analysis orchestration shared by the FastAPI app and the serverless handler."""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional, Protocol

from .analyzer import local_analyze
from .ai import build_analysis_prompt, parse_ai_json
from .config import Settings
from .logging_config import get_logger
from .market_data import MarketDataClient
from .models import AnalyzeRequest

log = get_logger(__name__)


class NoCandleDataError(Exception):
    """Raised when neither the request nor the data provider supplied candles."""


class Analyst(Protocol):
    def generate(self, prompt: str) -> str: ...


async def resolve_candles(payload: AnalyzeRequest, pair: str, settings: Settings, market_data: MarketDataClient):
    if payload.ohlc:
        return payload.ohlc

    if payload.ohlc is None:
        return await market_data.fetch_candles(pair, payload.interval or settings.default_interval)
    return []


async def analyze_request(
    payload: AnalyzeRequest,
    settings: Settings,
    market_data: MarketDataClient,
    analyst: Optional[Analyst] = None,
) -> Dict[str, Any]:
    """Analyse a pair with the remote analyst when available, locally otherwise."""
    pair = payload.pair or settings.default_pair
    candles = await resolve_candles(payload, pair, settings, market_data)
    if not candles:
        raise NoCandleDataError("No candle data available")

    log.info("Analysing %s over %d candles", pair, len(candles))

    if analyst is None:
        return {"status": "success", "source": "local", "analysis": local_analyze(candles, pair)}

    try:
        ai_text = await asyncio.to_thread(analyst.generate, build_analysis_prompt(pair, candles))
    except Exception as e:
        log.error("Gemini error: %s", e)
        return {
            "status": "success",
            "source": "local_fallback",
            "analysis": local_analyze(candles, pair),
            "note": "Gemini failed or quota exceeded",
        }

    parsed = parse_ai_json(ai_text)
    if parsed is not None:
        return {"status": "success", "source": "gemini", "analysis": parsed}

    log.info("Gemini reply for %s was not JSON, attaching local analysis", pair)
    return {"status": "success", "source": "gemini_text", "ai_text": ai_text, "local": local_analyze(candles, pair)}

"""
SmartMoney Analyzer - Gold/FX market-structure analysis API
===========================================================
Implements: TwelveData candles + NewsAPI + Gemini AI + local rule-based fallback
"""

from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .ai import build_analyst
from .config import Settings, get_settings
from .logging_config import configure_logging, get_logger
from .market_data import MarketDataClient, MarketDataError
from .models import AnalyzeRequest
from .service import Analyst, NoCandleDataError, analyze_request

log = get_logger(__name__)


def create_app(
    settings: Settings,
    analyst: Optional[Analyst] = None,
    market_data: Optional[MarketDataClient] = None,
) -> FastAPI:
    """Build the API around injected configuration, analyst and data client."""

    app = FastAPI(title="SmartMoney Analyzer API", version="1.0.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    market_data = market_data or MarketDataClient(settings)
    app.state.settings = settings
    app.state.analyst = analyst
    app.state.market_data = market_data

    # ============================================================
    # MARKET DATA
    # ============================================================

    @app.get("/api/ohlc")
    async def get_ohlc(
        symbol: Optional[str] = None,
        interval: Optional[str] = None,
        outputsize: Optional[int] = Query(default=None, ge=1, le=5000),
    ):
        """GET /api/ohlc - Raw TwelveData time series"""
        try:
            return await market_data.fetch_time_series(symbol, interval, outputsize)
        except MarketDataError as e:
            log.error("TwelveData error: %s", e)
            return JSONResponse(status_code=500, content={"error": "Failed to fetch market data"})

    @app.get("/api/news")
    async def get_news(q: Optional[str] = None):
        """GET /api/news - Latest headlines from NewsAPI"""
        if not settings.newsapi_key:
            return JSONResponse(status_code=400, content={"error": "NEWSAPI_KEY not set"})
        try:
            return await market_data.fetch_news(q)
        except MarketDataError as e:
            log.error("NewsAPI error: %s", e)
            return JSONResponse(status_code=500, content={"error": "Failed to fetch news"})

    # ============================================================
    # ANALYSIS
    # ============================================================

    @app.post("/analyze")
    @app.post("/api/analyze")
    async def analyze(payload: AnalyzeRequest):
        """POST /analyze - Gemini analysis with local rule-based fallback"""
        try:
            return await analyze_request(payload, settings, market_data, analyst)
        except NoCandleDataError as e:
            return JSONResponse(status_code=400, content={"error": str(e)})
        except Exception as e:
            log.exception("Analyze error: %s", e)
            return JSONResponse(status_code=500, content={"error": "Server analyze error"})

    # ============================================================
    # HEALTH CHECK
    # ============================================================

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "SmartMoney Analyzer - server live"

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "model": settings.gemini_model if analyst is not None else "none",
            "timestamp": datetime.now().isoformat(),
        }

    return app


def build_default_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)
    return create_app(settings, analyst=build_analyst(settings))


app = build_default_app()


if __name__ == "__main__":
    import uvicorn

    # python -m backend.main; PORT from environment (Railway/Heroku) or 8002
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)

"""
Vercel Serverless Function for market analysis
Handles: request parsing, candle fetch, Gemini AI, local fallback
"""

from http.server import BaseHTTPRequestHandler
import asyncio
import json
from typing import Any, Dict, Optional, Tuple

from pydantic import ValidationError

from backend.ai import build_analyst
from backend.config import Settings, get_settings
from backend.logging_config import get_logger
from backend.market_data import MarketDataClient
from backend.models import AnalyzeRequest
from backend.service import Analyst, NoCandleDataError, analyze_request

log = get_logger(__name__)


def handle_payload(
    body: Dict[str, Any],
    settings: Settings,
    analyst: Optional[Analyst] = None,
    market_data: Optional[MarketDataClient] = None,
) -> Tuple[int, Dict[str, Any]]:
    """Run one analysis request; returns (HTTP status, JSON body)."""
    try:
        payload = AnalyzeRequest(**(body or {}))
    except ValidationError as e:
        return 400, {"error": "Invalid request body", "detail": json.loads(e.json())}

    market_data = market_data or MarketDataClient(settings)
    try:
        # For Vercel, run the async pipeline synchronously
        return 200, asyncio.run(analyze_request(payload, settings, market_data, analyst))
    except NoCandleDataError as e:
        return 400, {"error": str(e)}
    except Exception as e:
        log.exception("Analyze error: %s", e)
        return 500, {"error": "Server analyze error"}


class handler(BaseHTTPRequestHandler):
    def _send_json(self, status: int, body: Dict[str, Any]):
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Access-Control-Allow-Origin', '*')
        self.end_headers()
        self.wfile.write(json.dumps(body).encode())

    def do_OPTIONS(self):
        self.send_response(204)
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'POST, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')
        self.end_headers()

    def do_POST(self):
        try:
            content_length = int(self.headers.get('Content-Length', 0))
        except (TypeError, ValueError):
            self._send_json(400, {"error": "Invalid Content-Length header"})
            return
        post_data = self.rfile.read(content_length) if content_length > 0 else b''

        try:
            body = json.loads(post_data) if post_data else {}
        except ValueError:
            self._send_json(400, {"error": "Request body must be JSON"})
            return
        if not isinstance(body, dict):
            self._send_json(400, {"error": "Request body must be a JSON object"})
            return

        settings = get_settings()
        status, result = handle_payload(body, settings, analyst=build_analyst(settings))
        self._send_json(status, result)

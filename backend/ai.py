"""
Gemini market analyst
=====================
Prompt building, model invocation and JSON extraction for the remote analysis path.
"""

import json
import re
from typing import Any, Dict, Optional, Sequence

import google.generativeai as genai

from .config import Settings
from .logging_config import get_logger

log = get_logger(__name__)

PROMPT_CANDLES = 30


def build_analysis_prompt(pair: str, candles: Sequence[Any]) -> str:
    """Short Smart Money Concepts prompt over the most recent closes"""
    closes = ", ".join(str(_close_of(c)) for c in list(candles)[:PROMPT_CANDLES])

    return f"""You are a concise Smart Money Concepts market analyst for {pair}.
Candles (most recent first): {closes}
Provide short JSON with:
- bias ("Bullish"/"Bearish"/"Neutral")
- short reasoning (1-2 sentences)
- order_blocks (if any, short)
- recommended (entry,tp1,tp2,sl numeric)
Return ONLY valid JSON."""


def _close_of(candle: Any) -> Any:
    return candle["close"] if isinstance(candle, dict) else getattr(candle, "close")


def parse_ai_json(response_text: str) -> Optional[Dict]:
    """Extract the JSON object from a model reply, or None if there is none.

    Code fences are stripped and the outermost ``{...}`` block is parsed.
    """
    if not response_text:
        return None

    cleaned = re.sub(r'```json\s*', '', response_text)
    cleaned = re.sub(r'```\s*', '', cleaned).strip()

    json_match = re.search(r'\{.*\}', cleaned, re.DOTALL)
    if not json_match:
        return None

    try:
        parsed = json.loads(json_match.group())
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


class GeminiAnalyst:
    """Remote analyst backed by a Gemini generative model."""

    def __init__(self, api_key: str, model_name: str, temperature: float = 0.1, max_output_tokens: int = 400):
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.model = genai.GenerativeModel(model_name)
        self.generation_config = genai.types.GenerationConfig(
            temperature=temperature,
            top_p=0.95,
            max_output_tokens=max_output_tokens,
        )

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` and return the reply text"""
        response = self.model.generate_content(prompt, generation_config=self.generation_config)
        return response.text.strip()


def build_analyst(settings: Settings) -> Optional[GeminiAnalyst]:
    """Return a configured analyst, or None when no Gemini key is set."""
    if not settings.ai_enabled:
        log.warning("GEMINI_API_KEY not set. Using local analysis only.")
        return None

    log.info("Using Gemini model: %s", settings.gemini_model)
    return GeminiAnalyst(settings.gemini_api_key, settings.gemini_model)

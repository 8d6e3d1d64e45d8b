"""Application configuration utilities."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv


DEFAULT_PAIR = "XAU/USD"
DEFAULT_INTERVAL = "1h"
DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class Settings:
    """Immutable container for service configuration and API keys."""

    port: int = 8002
    twelve_api_key: str = ""
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_MODEL
    newsapi_key: str = ""
    default_pair: str = DEFAULT_PAIR
    default_interval: str = DEFAULT_INTERVAL
    outputsize: int = 50
    http_timeout: float = 30.0
    allowed_origins: Tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    @property
    def ai_enabled(self) -> bool:
        return bool(self.gemini_api_key)


def _split_origins(raw: str) -> Tuple[str, ...]:
    origins = tuple(origin.strip() for origin in raw.split(",") if origin.strip())
    return origins or ("*",)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from ``environ`` (defaults to ``os.environ`` plus ``.env``)."""

    if environ is None:
        load_dotenv()
        environ = os.environ

    return Settings(
        port=int(environ.get("PORT", 8002)),
        twelve_api_key=environ.get("TWELVE_API_KEY", ""),
        gemini_api_key=environ.get("GEMINI_API_KEY", ""),
        gemini_model=environ.get("GEMINI_MODEL", DEFAULT_MODEL),
        newsapi_key=environ.get("NEWSAPI_KEY", ""),
        default_pair=environ.get("DEFAULT_PAIR", DEFAULT_PAIR),
        default_interval=environ.get("DEFAULT_INTERVAL", DEFAULT_INTERVAL),
        outputsize=int(environ.get("OHLC_OUTPUTSIZE", 50)),
        http_timeout=float(environ.get("HTTP_TIMEOUT", 30.0)),
        allowed_origins=_split_origins(environ.get("ALLOWED_ORIGINS", "*")),
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return settings derived from the process environment."""

    return load_settings()

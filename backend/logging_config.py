"""Centralised logging configuration utilities."""
from __future__ import annotations

import logging
from typing import Optional, Union


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_LEVEL = logging.INFO


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), DEFAULT_LEVEL)
    return level


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """Configure root logging once; later calls only adjust an explicit level."""

    root = logging.getLogger()
    if root.handlers:
        if level is not None:
            root.setLevel(_resolve_level(level))
        return

    logging.basicConfig(level=_resolve_level(level if level is not None else DEFAULT_LEVEL), format=LOG_FORMAT)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module specific logger with shared configuration."""

    configure_logging()
    return logging.getLogger(name)

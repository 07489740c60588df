"""
Design (logging_config.py)
- Purpose: One place that decides how houselist log lines look, for the console and the UI Logs panel.
- Inputs: level, optional format override, env var HOUSELIST_LOG_FORMAT ("json" or "plain").
- Outputs: Configured root handler; formatters for other handlers.
- Side effects: Replaces root handlers; sets the root and "houselist" logger levels.
- Thread-safety: Call once at startup, before the UI exists.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

APP_LOGGER = "houselist"

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_format(force_format: Optional[str] = None) -> str:
    """force_format wins, then HOUSELIST_LOG_FORMAT; anything unrecognised means json."""
    mode = force_format if force_format is not None else os.getenv("HOUSELIST_LOG_FORMAT", "json")
    return "plain" if mode.strip().lower() == "plain" else "json"


def build_formatter(format_mode: str) -> logging.Formatter:
    if format_mode == "plain":
        return logging.Formatter(PLAIN_FORMAT, datefmt=DATE_FORMAT)
    return JsonFormatter(
        JSON_FIELDS,
        rename_fields={"levelname": "level", "name": "logger"},
        static_fields={"app": APP_LOGGER},
    )


def configure_logging(
        level: int = logging.INFO,
        force_format: Optional[str] = None,
) -> logging.Logger:
    """
    Route all logging through a single stderr handler.

    houselist loggers emit at `level`; third-party libraries (plyer, tkinter helpers)
    only surface warnings. Returns the "houselist" logger.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(resolve_format(force_format)))

    root = logging.getLogger()
    root.setLevel(logging.WARNING)
    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)

    app_logger = logging.getLogger(APP_LOGGER)
    app_logger.setLevel(level)
    return app_logger

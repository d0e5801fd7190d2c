"""
dyncrud logging.

Every runtime component logs under ``dyncrud.<component>`` with a fixed tag
(REGISTRY, COMPILER, STORE, SERVICE, API). ``setup_logging`` attaches two
handlers to the ``dyncrud`` logger: a tagged console stream and a rotating
JSON Lines file whose entries carry the structured context passed to
``log_with_context``.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOG_FILE_NAME = "dyncrud.log"
ROOT_LOGGER = "dyncrud"

# ANSI colour per component tag; unknown tags fall back to CORE
COMPONENT_COLORS = {
    "CORE": "\033[35m",
    "REGISTRY": "\033[36m",
    "COMPILER": "\033[33m",
    "STORE": "\033[32m",
    "SERVICE": "\033[34m",
    "API": "\033[94m",
}

_RESET = "\033[0m"
_LEVEL_COLORS = {
    logging.DEBUG: "\033[2m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}


def _use_color() -> bool:
    return not os.environ.get("NO_COLOR") and sys.stdout.isatty()


def _component(record: logging.LogRecord) -> str:
    return getattr(record, "component", "CORE")


class JSONLFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, component, message, context."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, UTC)
        entry: dict[str, Any] = {
            "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "level": record.levelname,
            "component": _component(record),
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context:
            entry["context"] = context
        if record.levelno >= logging.WARNING:
            entry["source"] = {"file": record.pathname, "line": record.lineno}
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            entry["exception"] = {"type": type(exc).__name__, "message": str(exc)}
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """``HH:MM:SS [COMPONENT] LEVEL: message``; the level is omitted for INFO."""

    def __init__(self, color: bool | None = None) -> None:
        super().__init__()
        self.color = _use_color() if color is None else color

    def format(self, record: logging.LogRecord) -> str:
        component = _component(record)
        clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        level = "" if record.levelno == logging.INFO else f"{record.levelname}: "

        if self.color:
            tag_color = COMPONENT_COLORS.get(component, COMPONENT_COLORS["CORE"])
            component = f"{tag_color}{component}{_RESET}"
            if level:
                level = f"{_LEVEL_COLORS.get(record.levelno, '')}{level}{_RESET}"
        return f"{clock} [{component}] {level}{record.getMessage()}"


class _ComponentFilter(logging.Filter):
    """Stamps records from a component logger with its tag."""

    def __init__(self, component: str) -> None:
        super().__init__()
        self.component = component

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = self.component
        return True


def setup_logging(
    log_dir: Path | str = ".dyncrud/logs",
    level: int | str = logging.INFO,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> Path:
    """
    Attach console and JSONL file handlers to the ``dyncrud`` logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        log_dir: Directory for ``dyncrud.log`` (created if missing)
        level: Minimum level, as a number or a name such as "DEBUG"
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files to keep

    Returns:
        Path to the log file

    Raises:
        ValueError: If ``level`` is an unknown level name
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / LOG_FILE_NAME

    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(ConsoleFormatter())
    file_handler = RotatingFileHandler(
        log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    file_handler.setFormatter(JSONLFormatter())
    for handler in (console, file_handler):
        handler.setLevel(level)
        root.addHandler(handler)

    log_with_context(
        get_logger("CORE"),
        logging.INFO,
        "dyncrud logging initialized",
        {"log_file": str(log_file), "level": logging.getLevelName(level)},
    )
    return log_file


def get_logger(component: str) -> logging.Logger:
    """
    Return the logger for a runtime component, e.g. ``get_logger("STORE")``.

    Records it emits carry ``component`` for both formatters.
    """
    logger = logging.getLogger(f"{ROOT_LOGGER}.{component.lower()}")
    if not any(isinstance(f, _ComponentFilter) for f in logger.filters):
        logger.addFilter(_ComponentFilter(component))
    return logger


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    context: dict[str, Any] | None = None,
    **kwargs: Any,
) -> None:
    """Log ``message`` with structured context (written to the JSONL file)."""
    merged = {**(context or {}), **kwargs}
    logger.log(level, message, extra={"context": merged} if merged else None)

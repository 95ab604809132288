# simpleprogress/utils/logging.py
"""
Structured logging with Rich console output and JSON file logging
Library events go through stdlib logging so they stay silent until configured
"""
from __future__ import annotations
import json
import logging
from logging import Logger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

import structlog
from rich.logging import RichHandler
from structlog.dev import ConsoleRenderer
from structlog.processors import CallsiteParameter, CallsiteParameterAdder, TimeStamper
from structlog.stdlib import LoggerFactory, add_log_level, filter_by_level
from structlog.contextvars import (
    bind_contextvars,
    unbind_contextvars,
    merge_contextvars,
    clear_contextvars,
)

DEFAULT_LOG_PATH = Path.home() / ".cache" / "simpleprogress" / "logs" / "simpleprogress.log"

# ---- public helpers ---------------------------------------------------------

def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger bound to the app. Use .bind(...) to add context.

    Example:
        log = get_logger(__name__)
        log.bind(total=100.0).debug("progress.finish")
    """
    return structlog.get_logger(name or "simpleprogress")

def bind(**kw) -> None:
    """Bind key=value to the implicit context (thread/Task-local)."""
    bind_contextvars(**kw)

def unbind(*keys: str) -> None:
    """Remove keys from the implicit context."""
    unbind_contextvars(*keys)

def clear_context() -> None:
    """Clear all context variables."""
    clear_contextvars()

# ---- renderers --------------------------------------------------------------

def json_renderer(logger, method_name, event_dict) -> str:
    """Render log events as compact JSON"""
    return json.dumps(event_dict, ensure_ascii=False, separators=(",", ":"), default=str)

def _processors(final_renderer) -> list:
    return [
        filter_by_level,
        merge_contextvars,
        add_log_level,
        CallsiteParameterAdder(
            parameters=[
                CallsiteParameter.FILENAME,
                CallsiteParameter.FUNC_NAME,
                CallsiteParameter.LINENO,
            ]
        ),
        TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        final_renderer,
    ]

def _configure_structlog(final_renderer) -> None:
    structlog.configure(
        cache_logger_on_first_use=False,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        processors=_processors(final_renderer),
    )

# ---- setup ------------------------------------------------------------------

def setup_logging(
    *,
    level: str = "INFO",
    file_enabled: bool = False,
    console_enabled: bool = True,
    json_file: bool = True,
    log_path: Path = DEFAULT_LOG_PATH,
    rotate_max_bytes: int = 10 * 1024 * 1024,
    rotate_backups: int = 5,
    rich_tracebacks: bool = True,
    show_path: bool = False,
) -> Logger:
    """
    Configure structlog + stdlib logging with:
      - Rich console (human readable, on stderr so it never mixes with the
        line being redrawn on stdout)
      - Rotating JSON file (machine readable)
    Call this ONCE at program start (CLI entrypoint).

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        file_enabled: Enable file logging
        console_enabled: Enable console logging
        json_file: Use JSON format for file logs
        log_path: Path to log file
        rotate_max_bytes: Max bytes before rotation
        rotate_backups: Number of backup files to keep
        rich_tracebacks: Enable Rich traceback formatting
        show_path: Show file paths in Rich console output

    Returns:
        Configured stdlib logger for compatibility
    """
    handlers: list[logging.Handler] = []

    if console_enabled:
        from rich.console import Console

        handlers.append(
            RichHandler(
                console=Console(stderr=True),
                show_time=False,  # structlog handles timestamps
                rich_tracebacks=rich_tracebacks,
                show_path=show_path,
                markup=False,
            )
        )

    if file_enabled:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_path),
            maxBytes=rotate_max_bytes,
            backupCount=rotate_backups,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    root_level = getattr(logging, level.upper(), logging.INFO)

    # Clear any existing handlers to avoid duplicates
    logging.getLogger().handlers.clear()
    logging.basicConfig(handlers=handlers, level=root_level, format="%(message)s", force=True)

    if json_file and file_enabled:
        _configure_structlog(json_renderer)
    else:
        _configure_structlog(ConsoleRenderer(colors=False))

    return logging.getLogger("simpleprogress")

# ---- validation -------------------------------------------------------------

def validate_log_level(level: str) -> bool:
    """Validate that a log level string is valid."""
    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    return isinstance(level, str) and level.upper() in valid_levels


# Route through stdlib until setup_logging() runs; debug events are dropped
if not structlog.is_configured():
    _configure_structlog(ConsoleRenderer(colors=False))

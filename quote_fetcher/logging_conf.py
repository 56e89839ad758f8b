"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
import re
from pathlib import Path
from typing import Iterable

import structlog

from .config.loader import resolve_home

_LOGGING_INITIALISED = False


def _default_log_dir() -> Path:
    return resolve_home() / "logs"


def _slug(value: str) -> str:
    return re.sub(r"[^0-9A-Za-z_.-]+", "_", value.strip()) or "user"


def configure_logging(verbose: bool = False) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers and return application logger."""

    global _LOGGING_INITIALISED
    log_dir = _default_log_dir()
    error_log = log_dir / "error.log"
    fetcher_log = log_dir / "fetcher.log"
    (log_dir / "users").mkdir(parents=True, exist_ok=True)
    error_log.touch(exist_ok=True)
    fetcher_log.touch(exist_ok=True)

    if not _LOGGING_INITIALISED:
        level = "DEBUG" if verbose else "INFO"
        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "plain": {
                        "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                        "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                    }
                },
                "handlers": {
                    # Console stays quiet unless verbose; rich output owns the terminal
                    "console": {
                        "class": "logging.StreamHandler",
                        "level": "DEBUG" if verbose else "WARNING",
                        "formatter": "plain",
                    },
                    "fetcher_file": {
                        "class": "logging.FileHandler",
                        "level": "INFO",
                        "filename": str(fetcher_log),
                        "formatter": "plain",
                    },
                    "error_file": {
                        "class": "logging.FileHandler",
                        "level": "ERROR",
                        "filename": str(error_log),
                        "formatter": "plain",
                    },
                },
                "loggers": {
                    "quote_fetcher": {
                        "handlers": ["console", "fetcher_file", "error_file"],
                        "level": level,
                        "propagate": False,
                    },
                },
            }
        )

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger("quote_fetcher")


def user_logger(user_id: str, verbose: bool = False) -> structlog.BoundLogger:
    """Return a logger bound to one user and ensure its file handler exists."""

    logger = configure_logging(verbose)
    log_path = user_log_path(user_id)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger_name = f"quote_fetcher.user.{_slug(user_id)}"
    py_logger = logging.getLogger(logger_name)
    if not any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == str(log_path)
        for handler in py_logger.handlers
    ):
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        app_logger = logging.getLogger("quote_fetcher")
        if app_logger.handlers:
            file_handler.setFormatter(app_logger.handlers[0].formatter)
        file_handler.setLevel(logging.INFO)
        py_logger.addHandler(file_handler)

    return structlog.get_logger(logger_name).bind(user=user_id)


def user_log_path(user_id: str) -> Path:
    return _default_log_dir() / "users" / f"{_slug(user_id)}.log"


def global_log_path() -> Path:
    return _default_log_dir() / "fetcher.log"


def tail_log(path: Path, line_count: int = 100) -> list[str]:
    """Return the last N lines from a log file."""

    if not path.exists():
        return []
    with path.open("r", encoding="utf-8", errors="ignore") as stream:
        lines = stream.readlines()
    return lines[-line_count:]


def available_user_logs() -> Iterable[Path]:
    """Yield available per-user log file paths."""

    users_dir = _default_log_dir() / "users"
    if not users_dir.exists():
        return []
    return sorted(p for p in users_dir.glob("*.log"))


__all__ = [
    "available_user_logs",
    "configure_logging",
    "global_log_path",
    "tail_log",
    "user_log_path",
    "user_logger",
]

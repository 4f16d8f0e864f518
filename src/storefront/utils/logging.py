"""Logging configuration for the storefront domain.

Standard library handlers do the writing (console plus rotating files);
structlog sits on top and renders either coloured console output or JSON,
depending on the environment.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
_JSON_ENVS = ("production", "staging")
_QUIET_LOGGERS = ("protean", "urllib3", "asyncio", "httpx")
_MAX_BYTES = 10 * 1024 * 1024
_BACKUPS = 5

_configured = False


def current_env() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """Resolve the log level: LOG_LEVEL wins, otherwise derived from the environment."""
    return os.getenv("LOG_LEVEL", _LEVELS_BY_ENV.get(current_env(), "INFO")).upper()


def _rotating_file(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: str | None = None) -> None:
    level = get_log_level()
    directory = Path(log_dir or os.getenv("LOG_DIR", "logs"))
    directory.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [
        console,
        _rotating_file(directory / "storefront.log", level),
        _rotating_file(directory / "storefront_error.log", logging.ERROR),
    ]

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _renderer():
    if current_env() in _JSON_ENVS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=4),
    )


def setup_structlog() -> None:
    callsite = structlog.processors.CallsiteParameterAdder(
        parameters=[
            structlog.processors.CallsiteParameter.FILENAME,
            structlog.processors.CallsiteParameter.LINENO,
            structlog.processors.CallsiteParameter.FUNC_NAME,
        ]
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            callsite,
            _renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str | None = None) -> None:
    """Configure stdlib handlers and structlog once per process."""
    global _configured
    if _configured:
        return
    setup_stdlib_logging(log_dir)
    setup_structlog()
    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(**kwargs: Any) -> None:
    """Bind values (request id, principal) onto every log line of the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()

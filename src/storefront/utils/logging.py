"""Logging for the storefront.

Records flow through the stdlib root logger, which writes to stdout and,
unless disabled, to two size-rotated files under ``log_dir``: everything in
``storefront.log`` and errors only in ``storefront_error.log``.

structlog builds the records. Production and staging render one JSON object
per line; every other environment gets Rich-formatted console output.
Request-scoped values bound with :func:`add_context` are merged into every
event until :func:`clear_context` runs.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_JSON_ENVS = frozenset({"production", "staging"})
_DEFAULT_LEVELS = {"production": "INFO", "staging": "INFO", "development": "DEBUG", "test": "WARNING"}
_QUIET_LOGGERS = ("protean", "asyncio", "multipart", "httpx")

_MAX_BYTES = 10 * 1024 * 1024
_BACKUPS = 5


def current_env() -> str:
    env = os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV")
    return (env or "development").lower()


def get_log_level(env: str | None = None) -> str:
    """``LOG_LEVEL`` wins; otherwise the level follows the environment."""
    env = env or current_env()
    return os.getenv("LOG_LEVEL", _DEFAULT_LEVELS.get(env, "INFO")).upper()


def _rotating_handler(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8"
    )
    handler.setLevel(level)
    return handler


def _build_handlers(level: str, log_dir: str | None, prefix: str) -> list[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    handlers: list[logging.Handler] = [console]

    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers.append(_rotating_handler(path / f"{prefix}.log", level))
        handlers.append(_rotating_handler(path / f"{prefix}_error.log", logging.ERROR))
    return handlers


def _renderer(env: str):
    if env in _JSON_ENVS:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=3),
    )


def configure_logging(log_dir: str | None = None, prefix: str = "storefront") -> None:
    """Install handlers on the root logger and configure structlog.

    ``log_dir`` defaults to the ``STOREFRONT_LOG_DIR`` setting; an empty
    setting keeps output on the console only.
    """
    from storefront.config import get_settings

    env = current_env()
    level = get_log_level(env)
    target = log_dir if log_dir is not None else get_settings().log_dir

    root = logging.getLogger()
    root.handlers = _build_handlers(level, target, prefix)
    root.setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

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
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                ]
            ),
            _renderer(env),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**values: Any) -> None:
    """Bind values to every event logged from the current context."""
    structlog.contextvars.bind_contextvars(**values)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()

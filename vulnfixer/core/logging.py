"""Structured logging configuration: structlog rendered through stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os
import sys

import structlog

from vulnfixer.exceptions import ConfigError

LOG_FORMATS = ("console", "json")

# Third-party loggers held at WARNING
_QUIET_LOGGERS = ("httpx", "httpcore")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    # Colour only when stderr is a terminal
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def setup_logging(verbose: bool = False) -> None:
    """Configure structlog and stdlib logging, writing to stderr.

    stdout is left for the command's own summary line.

    Reads from environment variables:
        VULNFIXER_LOG_LEVEL  - level for ``vulnfixer.*`` loggers
                               (default: INFO, DEBUG when *verbose*)
        VULNFIXER_LOG_FORMAT - console | json (default: console)

    Raises :class:`ConfigError` for an unknown level or format.
    """
    default_level = "DEBUG" if verbose else "INFO"
    log_level = (os.environ.get("VULNFIXER_LOG_LEVEL") or "").strip().upper() or default_level
    log_format = (os.environ.get("VULNFIXER_LOG_FORMAT") or "").strip().lower() or "console"

    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"unknown VULNFIXER_LOG_LEVEL: {log_level!r}")
    if log_format not in LOG_FORMATS:
        expected = ", ".join(LOG_FORMATS)
        raise ConfigError(f"unknown VULNFIXER_LOG_FORMAT: {log_format!r} (expected {expected})")

    shared_processors = _shared_processors()
    structlog.configure(
        processors=shared_processors
        + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    loggers: dict[str, dict[str, str]] = {"vulnfixer": {"level": log_level}}
    loggers.update({name: {"level": "WARNING"} for name in _QUIET_LOGGERS})

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared_processors,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        _renderer(log_format),
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            "root": {
                "handlers": ["stderr"],
                "level": "WARNING",
            },
            "loggers": loggers,
        }
    )

"""
structlog setup for the Pokedex.

- Development (ENV=development / dev / local): console renderer
- Anything else: one JSON object per line

Logs are written to stderr so they never interleave with REPL output on stdout.
"""

import logging
import os
import sys
from typing import Any, Optional, TextIO

import structlog

_DEV_ENVS = ("development", "dev", "local")

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def parse_level(level: str) -> int:
    """Map a level name to its logging constant; unknown names mean INFO."""
    return _LEVELS.get(level.upper(), logging.INFO)


def _service_adder(service_name: str):
    def add_service(_logger: Any, _method: str, event_dict: dict) -> dict:
        event_dict.setdefault("service", service_name)
        return event_dict

    return add_service


def configure(
    service_name: str = "pokedex",
    level: str = "WARN",
    stream: Optional[TextIO] = None,
    json_output: Optional[bool] = None,
) -> None:
    """Configure structlog once at startup. Safe to call again (tests do)."""
    stream = stream if stream is not None else sys.stderr
    if json_output is None:
        json_output = os.getenv("ENV", "development") not in _DEV_ENVS

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_adder(service_name),
    ]
    if json_output:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=stream.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(parse_level(level)),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        # Module-level loggers must pick up a later configure() call
        cache_logger_on_first_use=False,
    )


def get_logger(name: Optional[str] = None):
    """
    Module logger tagged with the last component of its dotted name.

        logger = get_logger(__name__)
        logger.info("cache_swept", removed=3)
    """
    short_name = name.rsplit(".", 1)[-1] if name else "app"
    return structlog.get_logger(logger=short_name)

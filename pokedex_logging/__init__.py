"""
pokedex_logging — structlog configuration for the Pokedex.

Usage — entry point:
    from pokedex_logging import configure
    configure("pokedex", level=settings.log_level, stream=sys.stderr)

Usage — any module:
    from pokedex_logging import get_logger
    logger = get_logger(__name__)
    logger.info("event_name", key=value)
"""

from .logger import configure, get_logger, parse_level

__all__ = ["configure", "get_logger", "parse_level"]

"""Re-exports from the shared pokedex_logging package."""

from pokedex_logging import configure, get_logger

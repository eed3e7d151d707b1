"""Read-eval-print loop for the Pokedex."""

import random
from typing import Callable, List, Optional

from structlog.contextvars import bound_contextvars

from pokedex.core.cache import Cache
from pokedex.core.config import Settings, settings as default_settings
from pokedex.core.exceptions import ExitRequested, PokedexError
from pokedex.core.logging import get_logger
from pokedex.repl.commands import COMMANDS
from pokedex.repl.state import ReplState
from pokedex.services.pokeapi_client import PokeAPIClient

logger = get_logger(__name__)


def clean_input(text: str) -> List[str]:
    """Lower-case the line and split it on whitespace."""
    return text.lower().split()


def dispatch(state: ReplState, line: str) -> None:
    """Run one input line. Raises ExitRequested when the session should end."""
    words = clean_input(line)
    if not words:
        return

    command_name, args = words[0], words[1:]
    command = COMMANDS.get(command_name)
    if command is None:
        print(f"Unknown command: {command_name}")
        return

    with bound_contextvars(command=command_name):
        try:
            command.callback(state, args)
        except ExitRequested:
            raise
        except PokedexError as e:
            logger.info("command_failed", status=e.status_code, error=str(e))
            print(f"Error: {e}")
        except Exception as e:
            logger.exception("command_crashed")
            print(f"Error: unexpected failure ({type(e).__name__})")


def run_repl(state: ReplState, prompt: str, read_line: Callable[[str], str] = input) -> None:
    """Prompt, read and dispatch until exit, EOF or Ctrl-C."""
    while True:
        try:
            line = read_line(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            return

        try:
            dispatch(state, line)
        except ExitRequested:
            return


def start_repl(
    config: Optional[Settings] = None,
    read_line: Callable[[str], str] = input,
) -> None:
    """Build the cache, client and session state, then run the loop.

    The cache's reaper is stopped when the loop ends, however it ends.
    """
    config = config or default_settings

    with Cache(config.cache_interval_seconds, ttl=config.cache_ttl_seconds) as cache:
        client = PokeAPIClient(cache, base_url=config.pokeapi_base_url, timeout=config.http_timeout)
        state = ReplState(client=client, rng=random.Random(config.catch_seed))
        logger.info("repl_started", base_url=client.base_url, cache_interval=cache.interval)
        try:
            run_repl(state, config.prompt, read_line)
        finally:
            client.close()
            logger.info("repl_stopped", cached_entries=len(cache), caught=len(state.pokedex))

"""Exceptions raised by the Pokedex shell and handled by the REPL loop."""

from typing import Optional


class PokedexError(Exception):
    """Base exception for anything the REPL reports back to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CommandUsageError(PokedexError):
    """A command was called without the argument it needs."""
    pass


class PokeAPIError(PokedexError):
    """PokeAPI could not be reached, answered non-2xx, or sent an unreadable body."""
    pass


class ExitRequested(PokedexError):
    """Raised by the exit command to stop the REPL."""

    def __init__(self):
        super().__init__("exit requested")

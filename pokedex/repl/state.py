"""Per-session REPL state, passed explicitly to every command handler."""

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pokedex.core.models import CaughtPokemon
from pokedex.services.pokeapi_client import PokeAPIClient


class Pokedex:
    """Registry of caught Pokémon, keyed by lower-case name."""

    def __init__(self):
        self._caught: Dict[str, CaughtPokemon] = {}

    def add(self, pokemon: CaughtPokemon) -> None:
        self._caught[pokemon.name.lower()] = pokemon

    def get(self, name: str) -> Optional[CaughtPokemon]:
        return self._caught.get(name.lower())

    def names(self) -> List[str]:
        return list(self._caught)

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._caught

    def __len__(self) -> int:
        return len(self._caught)


@dataclass
class ReplState:
    client: PokeAPIClient
    pokedex: Pokedex = field(default_factory=Pokedex)
    rng: random.Random = field(default_factory=random.Random)

    # location-area pagination
    next_locations_url: Optional[str] = None
    previous_locations_url: Optional[str] = None
    locations_started: bool = False

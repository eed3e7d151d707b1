from __future__ import annotations

from pydantic import BaseModel, Field
from typing import List, Optional, Dict


class NamedResource(BaseModel):
    name: str
    url: Optional[str] = None


class LocationAreaPage(BaseModel):
    count: int = 0
    next: Optional[str] = None
    previous: Optional[str] = None
    results: List[NamedResource] = []


class PokemonEncounter(BaseModel):
    pokemon: NamedResource


class LocationArea(BaseModel):
    name: str = ""
    pokemon_encounters: List[PokemonEncounter] = []


class PokemonStat(BaseModel):
    base_stat: int
    stat: NamedResource


class PokemonType(BaseModel):
    slot: int = 0
    type: NamedResource


class Pokemon(BaseModel):
    name: str
    height: int = 0
    weight: int = 0
    base_experience: Optional[int] = None  # null for some forms
    stats: List[PokemonStat] = []
    types: List[PokemonType] = []


class CaughtPokemon(BaseModel):
    name: str
    height: int
    weight: int
    stats: Dict[str, int] = Field(default_factory=dict)
    types: List[str] = []

    @classmethod
    def from_pokemon(cls, pokemon: Pokemon) -> CaughtPokemon:
        return cls(
            name=pokemon.name,
            height=pokemon.height,
            weight=pokemon.weight,
            stats={s.stat.name: s.base_stat for s in pokemon.stats},
            types=[t.type.name for t in sorted(pokemon.types, key=lambda t: t.slot)],
        )

"""
REPL command registry and handlers.

Each handler takes the session state and the remaining words of the input
line. Handlers print their output and raise PokedexError subclasses for
anything the user should see as an error.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

from pokedex.core.exceptions import CommandUsageError, ExitRequested
from pokedex.core.logging import get_logger
from pokedex.core.models import CaughtPokemon, LocationAreaPage
from pokedex.repl.state import ReplState

logger = get_logger(__name__)

CommandCallback = Callable[[ReplState, List[str]], None]


@dataclass(frozen=True)
class CliCommand:
    name: str
    description: str
    callback: CommandCallback


def command_exit(state: ReplState, args: List[str]) -> None:
    print("Closing the Pokedex... Goodbye!")
    raise ExitRequested()


def command_help(state: ReplState, args: List[str]) -> None:
    print("Welcome to the Pokedex!")
    print("Usage:")
    print()
    for cmd in COMMANDS.values():
        print(f"{cmd.name}: {cmd.description}")


def _print_locations(state: ReplState, page: LocationAreaPage) -> None:
    state.next_locations_url = page.next
    state.previous_locations_url = page.previous
    state.locations_started = True
    for area in page.results:
        print(area.name)


def command_map(state: ReplState, args: List[str]) -> None:
    if state.locations_started and state.next_locations_url is None:
        print("you're on the last page")
        return
    page = state.client.location_areas(state.next_locations_url)
    _print_locations(state, page)


def command_mapb(state: ReplState, args: List[str]) -> None:
    if state.previous_locations_url is None:
        print("you're on the first page")
        return
    page = state.client.location_areas(state.previous_locations_url)
    _print_locations(state, page)


def command_explore(state: ReplState, args: List[str]) -> None:
    if not args:
        raise CommandUsageError("Please provide a location area to explore")

    area_name = args[0]
    area = state.client.location_area(area_name)

    print(f"Exploring {area_name}...")
    print("Found Pokemon:")
    for encounter in area.pokemon_encounters:
        print(f"- {encounter.pokemon.name}")


def command_catch(state: ReplState, args: List[str]) -> None:
    if not args:
        raise CommandUsageError("Please provide a Pokémon name to catch")

    name = args[0].lower()
    if name in state.pokedex:
        print(f"{name} is already caught!")
        return

    print(f"Throwing a Pokeball at {name}...")
    pokemon = state.client.pokemon(name)

    # Higher base experience means a harder catch; 100+ never succeeds
    base_experience = pokemon.base_experience or 0
    roll = state.rng.randrange(100)
    logger.debug("catch_roll", pokemon=name, roll=roll, base_experience=base_experience)

    if roll < 100 - base_experience:
        state.pokedex.add(CaughtPokemon.from_pokemon(pokemon).model_copy(update={"name": name}))
        print(f"{name} was caught!")
    else:
        print(f"{name} escaped!")


def command_inspect(state: ReplState, args: List[str]) -> None:
    if not args:
        raise CommandUsageError("Please provide a Pokémon name to inspect")

    info = state.pokedex.get(args[0])
    if info is None:
        print("you have not caught that pokemon")
        return

    print(f"Name: {info.name}")
    print(f"Height: {info.height}")
    print(f"Weight: {info.weight}")
    print("Stats:")
    for stat, value in info.stats.items():
        print(f"  - {stat}: {value}")
    print("Types:")
    for type_name in info.types:
        print(f"  - {type_name}")


def command_pokedex(state: ReplState, args: List[str]) -> None:
    if not len(state.pokedex):
        print("You have not caught any Pokémon yet.")
        return

    print("Your Pokedex:")
    for name in state.pokedex.names():
        print(f"- {name}")


COMMANDS: Dict[str, CliCommand] = {
    cmd.name: cmd
    for cmd in (
        CliCommand("help", "Displays a help message", command_help),
        CliCommand("exit", "Exit the Pokedex", command_exit),
        CliCommand("map", "Display the next 20 location areas", command_map),
        CliCommand("mapb", "Display the previous 20 location areas", command_mapb),
        CliCommand("explore", "Explore a specific location area", command_explore),
        CliCommand("catch", "Try to catch a Pokémon by name", command_catch),
        CliCommand("inspect", "Show details of a caught Pokémon", command_inspect),
        CliCommand("pokedex", "List all caught Pokémon", command_pokedex),
    )
}

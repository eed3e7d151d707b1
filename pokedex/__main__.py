"""Entry point: ``python -m pokedex`` or the ``pokedex`` console script."""

import sys

from pokedex.core.config import settings
from pokedex.core.logging import configure
from pokedex.repl.shell import start_repl


def main() -> None:
    configure("pokedex", level=settings.log_level, stream=sys.stderr)
    start_repl(settings)


if __name__ == "__main__":
    main()

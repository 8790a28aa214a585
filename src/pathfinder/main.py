"""Command line entry point for Pathfinder."""

import argparse
import sys
from collections.abc import Sequence

import structlog

from pathfinder.config import get_settings
from pathfinder.database import GameDatabase
from pathfinder.errors import PathfinderError
from pathfinder.game.editor import WorldEditor
from pathfinder.game.engine import GameEngine
from pathfinder.game.layout import auto_layout
from pathfinder.logging_config import configure_logging
from pathfinder.preferences import load_preferences, resolve_database

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for every subcommand."""
    parser = argparse.ArgumentParser(prog="pathfinder", description="Pathfinder adventure engine")
    subcommands = parser.add_subparsers(dest="command", required=True)

    new = subcommands.add_parser("new", help="Create a store holding the starter world")
    new.add_argument("path", help="Store file to create (replaced if it exists)")

    layout = subcommands.add_parser("layout", help="Recompute map coordinates")
    layout.add_argument("path", nargs="?", help="Store file (defaults to the remembered store)")
    layout.add_argument("--start", type=int, default=1, help="Room placed at the origin")

    commit = subcommands.add_parser("commit", help="Save current item placements as the start")
    commit.add_argument("path", nargs="?", help="Store file (defaults to the remembered store)")

    reset = subcommands.add_parser("reset", help="Reset the game to its starting state")
    reset.add_argument("path", nargs="?", help="Store file (defaults to the remembered store)")

    play = subcommands.add_parser("play", help="Play in the terminal")
    play.add_argument("path", nargs="?", help="Store file (defaults to the remembered store)")

    return parser


def _open(database: GameDatabase, path: str | None) -> str:
    if path:
        database.open(path)
        return database.path
    return resolve_database(database, load_preferences())


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run one CLI command.

    Args:
        argv: Arguments without the program name (defaults to sys.argv)

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    configure_logging(get_settings())

    try:
        if args.command == "play":
            engine = GameEngine()
            engine.start(args.path)
            engine.run()
            return 0

        with GameDatabase() as database:
            if args.command == "new":
                database.create_new(args.path)
                print(f"Created {database.path}")
            elif args.command == "layout":
                _open(database, args.path)
                placed = auto_layout(database, start_room_id=args.start)
                print(f"Placed {len(placed)} rooms")
            elif args.command == "commit":
                _open(database, args.path)
                WorldEditor(database).save_as_initial_state()
                print("Saved current placements as the starting state")
            elif args.command == "reset":
                _open(database, args.path)
                WorldEditor(database).clear_game_state()
                print("Game state reset")
    except PathfinderError as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("stopped_by_user")
        sys.exit(130)


if __name__ == "__main__":
    run()

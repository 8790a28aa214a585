"""Text player engine for Pathfinder."""

import sys
from collections.abc import Iterable
from pathlib import Path

import structlog

from pathfinder.database import GameDatabase
from pathfinder.errors import NotInitializedError, PathfinderError
from pathfinder.game.commands.base import CommandContext, CommandRegistry, find_item
from pathfinder.game.editor import WorldEditor
from pathfinder.game.mutations import WorldMutations
from pathfinder.game.queries import WorldQueries
from pathfinder.game.text import Console, colorize
from pathfinder.game.world import Item
from pathfinder.preferences import Preferences, load_preferences, resolve_database, save_preferences

logger = structlog.get_logger(__name__)


class GameEngine:
    """
    Owns the open adventure store and drives the text player.

    The query, mutation and editor services borrow the engine's database.
    """

    def __init__(self, database: GameDatabase | None = None, output: Console | None = None) -> None:
        """Initialize the engine and its services."""
        self.database = database or GameDatabase()
        self.queries = WorldQueries(self.database)
        self.mutations = WorldMutations(self.database, self.queries)
        self.editor = WorldEditor(self.database, self.mutations)
        self.output = output or Console()
        self.registry = CommandRegistry()
        self.preferences = Preferences()
        self._running = False

        self._register_commands()
        logger.debug("game_engine_initialized")

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self, path: str | Path | None = None, remember: bool = True) -> str:
        """
        Open the store to play.

        Args:
            path: Store to open; when None the remembered or default store is used
            remember: Write the chosen store back to the preferences file

        Returns:
            Path of the opened store
        """
        if path is not None:
            self.database.open(path)
            opened = self.database.path
            self.preferences.current_database = opened
        else:
            self.preferences = load_preferences()
            opened = resolve_database(self.database, self.preferences)

        if remember:
            save_preferences(self.preferences)

        self._running = True
        logger.info("game_engine_started", path=opened)
        return opened

    def stop(self) -> None:
        """Stop the command loop and close the store."""
        self._running = False
        self.database.close()
        logger.info("game_engine_stopped")

    def _register_commands(self) -> None:
        """Register all player commands."""
        from pathfinder.game.commands.info import (
            HelpCommand,
            QuitCommand,
            RestartCommand,
            ScoreCommand,
        )
        from pathfinder.game.commands.inventory import (
            CombineCommand,
            DropCommand,
            GetCommand,
            InventoryCommand,
            UseCommand,
        )
        from pathfinder.game.commands.movement import (
            EastCommand,
            LookCommand,
            NorthCommand,
            SouthCommand,
            WestCommand,
        )

        commands = [
            LookCommand(),
            NorthCommand(),
            SouthCommand(),
            EastCommand(),
            WestCommand(),
            GetCommand(),
            DropCommand(),
            UseCommand(),
            CombineCommand(),
            InventoryCommand(),
            ScoreCommand(),
            RestartCommand(),
            HelpCommand(),
            QuitCommand(),
        ]
        for command in commands:
            self.registry.register(command)

        logger.debug("commands_registered", total=len(commands))

    def describe_current_room(self) -> str:
        """Room description followed by the items the player can see there."""
        state = self.queries.get_game_state()
        room = self.queries.get_room(state.current_room_id)

        lines = [colorize(room.format_description(), "CYAN")]
        for item in self.queries.get_items_in_room(room.id):
            lines.append(item.describe_in_room())
        return "\n".join(lines)

    def find_visible_item(self, name: str) -> Item | None:
        """Find a carried item, or one in the current room, by name."""
        item = find_item(self.queries.get_inventory_items(), name)
        if item is not None:
            return item

        state = self.queries.get_game_state()
        return find_item(self.queries.get_items_in_room(state.current_room_id), name)

    def handle_command(self, raw_input: str) -> None:
        """
        Parse and execute one line of player input.

        Args:
            raw_input: Raw command string from the player
        """
        parts = raw_input.strip().split()
        if not parts:
            return

        command_name = parts[0].lower()
        args = parts[1:]

        command = self.registry.get(command_name)
        if not command:
            self.output.send_line(colorize(f"Unknown command: {command_name}", "RED"))
            self.output.send_line("Type " + colorize("help", "YELLOW") + " for a list of commands.")
            return

        is_valid, error_msg = command.validate_args(args)
        if not is_valid:
            self.output.send_line(colorize(error_msg or "Invalid arguments.", "YELLOW"))
            return

        ctx = CommandContext(engine=self, output=self.output, args=args, raw_input=raw_input)

        try:
            command.execute(ctx)
            logger.debug("command_executed", command=command.name)
        except PathfinderError as e:
            logger.error("command_execution_error", command=command.name, error=str(e))
            self.output.send_line(colorize(f"Something went wrong: {e}", "RED"))

    def run(self, lines: Iterable[str] | None = None) -> None:
        """
        Run the command loop until quit or end of input.

        Args:
            lines: Input lines to read (defaults to standard input)
        """
        if not self.database.is_open:
            raise NotInitializedError()
        self._running = True

        title = self.queries.get_metadata("title") or "Untitled Adventure"
        self.output.send_line(colorize(title, "BOLD"))
        self.output.send_line(self.describe_current_room())

        source = lines if lines is not None else _prompted_stdin(self.output)
        for line in source:
            self.handle_command(line)
            if not self._running:
                break
        else:
            self.stop()


def _prompted_stdin(output: Console) -> Iterable[str]:
    while True:
        output.stream.write("> ")
        output.stream.flush()
        line = sys.stdin.readline()
        if not line:
            return
        yield line

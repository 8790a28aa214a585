"""Base command classes and registry for the Pathfinder text player."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from pathfinder.game.world import Item

if TYPE_CHECKING:
    from pathfinder.game.engine import GameEngine
    from pathfinder.game.text import Console

logger = structlog.get_logger(__name__)


@dataclass
class CommandContext:
    """
    Context passed to command execution.

    Contains the engine, the output console and the parsed arguments.
    """

    engine: "GameEngine"
    output: "Console"
    args: list[str]
    raw_input: str


class Command(ABC):
    """
    Base class for all player commands.

    Each command defines its name, aliases, help text, and execution logic.
    """

    name: str = ""
    aliases: list[str] = []
    help_text: str = ""
    min_args: int = 0

    @abstractmethod
    def execute(self, ctx: CommandContext) -> None:
        """
        Execute the command with the given context.

        Args:
            ctx: Command context with engine, output and arguments
        """
        raise NotImplementedError

    def validate_args(self, args: list[str]) -> tuple[bool, str | None]:
        """
        Validate command arguments.

        Args:
            args: List of command arguments

        Returns:
            Tuple of (is_valid, error_message)
        """
        if len(args) < self.min_args:
            return False, f"Usage: {self.help_text}"
        return True, None


class CommandRegistry:
    """
    Registry for the commands one engine understands.

    Manages command registration, lookup, and retrieval by name or alias.
    """

    def __init__(self) -> None:
        """Initialize empty command registry."""
        self._commands: dict[str, Command] = {}
        self._aliases: dict[str, str] = {}  # alias -> command name

    def register(self, command: Command) -> None:
        """
        Register a command in the registry.

        Args:
            command: Command instance to register

        Raises:
            ValueError: If command name or alias already registered
        """
        if not command.name:
            raise ValueError("Command must have a name")

        if command.name in self._commands:
            raise ValueError(f"Command '{command.name}' already registered")

        self._commands[command.name] = command

        for alias in command.aliases:
            if alias in self._aliases:
                raise ValueError(
                    f"Alias '{alias}' already registered for command '{self._aliases[alias]}'"
                )
            self._aliases[alias] = command.name

        logger.debug("command_registered", name=command.name, aliases=command.aliases)

    def get(self, name: str) -> Command | None:
        """
        Get a command by name or alias.

        Args:
            name: Command name or alias

        Returns:
            Command instance if found, None otherwise
        """
        if name in self._commands:
            return self._commands[name]

        if name in self._aliases:
            return self._commands[self._aliases[name]]

        return None

    def get_all_commands(self) -> list[Command]:
        """Get all registered commands in registration order."""
        return list(self._commands.values())


def find_item(items: Iterable[Item], name: str) -> Item | None:
    """
    Find an item by name, case-insensitively.

    An exact name match wins over a prefix match.
    """
    wanted = name.strip().lower()
    if not wanted:
        return None

    candidates = list(items)
    for item in candidates:
        if item.name.lower() == wanted:
            return item
    for item in candidates:
        if item.name.lower().startswith(wanted):
            return item
    return None

"""Information and session commands for the Pathfinder text player."""

from datetime import UTC, datetime

import structlog

from pathfinder.game.text import colorize

from .base import Command, CommandContext

logger = structlog.get_logger(__name__)


class HelpCommand(Command):
    """Display help information for commands."""

    name = "help"
    aliases = ["?"]
    help_text = "help [command] - Show help for a command or list all commands"

    def execute(self, ctx: CommandContext) -> None:
        """Execute the help command."""
        registry = ctx.engine.registry

        if ctx.args:
            command_name = ctx.args[0].lower()
            command = registry.get(command_name)
            if not command:
                ctx.output.send_line(colorize(f"Unknown command: {command_name}", "RED"))
                return

            ctx.output.send_line(colorize(command.name.upper(), "CYAN"))
            ctx.output.send_line(f"  {command.help_text}")
            if command.aliases:
                ctx.output.send_line(f"  Aliases: {colorize(', '.join(command.aliases), 'YELLOW')}")
            return

        ctx.output.send_line(colorize("Available commands:", "CYAN"))
        for command in registry.get_all_commands():
            ctx.output.send_line(f"  {command.help_text}")


class ScoreCommand(Command):
    """Show score, health, moves and time played."""

    name = "score"
    aliases = ["stats"]
    help_text = "score - Show your progress"

    def execute(self, ctx: CommandContext) -> None:
        """Execute the score command."""
        state = ctx.engine.queries.get_game_state()
        title = ctx.engine.queries.get_metadata("title") or "Untitled Adventure"

        ctx.output.send_line(colorize(title, "CYAN"))
        ctx.output.send_line(f"  Score:  {state.score}")
        ctx.output.send_line(f"  Health: {state.health}")
        ctx.output.send_line(f"  Moves:  {state.moves_count}")

        if state.start_time:
            started = datetime.fromtimestamp(state.start_time, tz=UTC)
            minutes = int((datetime.now(UTC) - started).total_seconds() // 60)
            ctx.output.send_line(f"  Played: {minutes} min")


class RestartCommand(Command):
    """Restart the adventure from its saved starting state."""

    name = "restart"
    help_text = "restart - Start the adventure over"

    def execute(self, ctx: CommandContext) -> None:
        """Execute the restart command."""
        ctx.engine.mutations.clear_game_state()
        ctx.output.send_line(colorize("The world shimmers and resets.", "GREEN"))
        ctx.output.send_line(ctx.engine.describe_current_room())


class QuitCommand(Command):
    """Leave the game."""

    name = "quit"
    aliases = ["exit", "q"]
    help_text = "quit - Leave the game"

    def execute(self, ctx: CommandContext) -> None:
        """Execute the quit command."""
        ctx.output.send_line("Farewell, traveller.")
        ctx.engine.stop()

"""Movement and looking commands for the Pathfinder text player."""

import structlog

from pathfinder.database.models import Direction
from pathfinder.game.text import colorize

from .base import Command, CommandContext

logger = structlog.get_logger(__name__)


class MoveCommand(Command):
    """Base class for directional movement commands."""

    direction: Direction = Direction.NORTH

    def execute(self, ctx: CommandContext) -> None:
        """Execute the movement command."""
        result = ctx.engine.mutations.travel(self.direction)
        if not result.succeeded:
            ctx.output.send_line(colorize(result.message, "YELLOW"))
            return

        ctx.output.send_line(ctx.engine.describe_current_room())


class NorthCommand(MoveCommand):
    """Move north."""

    name = "north"
    aliases = ["n"]
    help_text = "north (n) - Move north"
    direction = Direction.NORTH


class SouthCommand(MoveCommand):
    """Move south."""

    name = "south"
    aliases = ["s"]
    help_text = "south (s) - Move south"
    direction = Direction.SOUTH


class EastCommand(MoveCommand):
    """Move east."""

    name = "east"
    aliases = ["e"]
    help_text = "east (e) - Move east"
    direction = Direction.EAST


class WestCommand(MoveCommand):
    """Move west."""

    name = "west"
    aliases = ["w"]
    help_text = "west (w) - Move west"
    direction = Direction.WEST


class LookCommand(Command):
    """Describe the current room, or an item in view."""

    name = "look"
    aliases = ["l"]
    help_text = "look [item] - Describe the room or an item"

    def execute(self, ctx: CommandContext) -> None:
        """Execute the look command."""
        if not ctx.args:
            ctx.output.send_line(ctx.engine.describe_current_room())
            return

        item = ctx.engine.find_visible_item(" ".join(ctx.args))
        if item is None:
            ctx.output.send_line(colorize("You don't see that here.", "YELLOW"))
            return

        ctx.output.send_line(item.description)

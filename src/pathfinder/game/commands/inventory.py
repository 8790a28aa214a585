"""Item handling commands for the Pathfinder text player."""

import structlog

from pathfinder.game.text import colorize
from pathfinder.game.world import ActionResult, UseOutcome

from .base import Command, CommandContext, find_item

logger = structlog.get_logger(__name__)


def _report(ctx: CommandContext, result: ActionResult) -> None:
    color = "GREEN" if result.succeeded else "YELLOW"
    ctx.output.send_line(colorize(result.message, color))


class GetCommand(Command):
    """Pick up an item from the current room."""

    name = "take"
    aliases = ["get"]
    help_text = "take <item> - Pick up an item"
    min_args = 1

    def execute(self, ctx: CommandContext) -> None:
        """Execute the take command."""
        engine = ctx.engine
        state = engine.queries.get_game_state()
        item = find_item(engine.queries.get_items_in_room(state.current_room_id), " ".join(ctx.args))
        if item is None:
            ctx.output.send_line(colorize("You don't see that here.", "YELLOW"))
            return

        _report(ctx, engine.mutations.take_item(item.id))


class DropCommand(Command):
    """Drop a carried item."""

    name = "drop"
    help_text = "drop <item> - Drop an item you carry"
    min_args = 1

    def execute(self, ctx: CommandContext) -> None:
        """Execute the drop command."""
        engine = ctx.engine
        item = find_item(engine.queries.get_inventory_items(), " ".join(ctx.args))
        if item is None:
            ctx.output.send_line(colorize("You aren't carrying that.", "YELLOW"))
            return

        _report(ctx, engine.mutations.drop_item(item.id))


class UseCommand(Command):
    """Use a carried item, or one lying in the room."""

    name = "use"
    help_text = "use <item> - Use an item"
    min_args = 1

    def execute(self, ctx: CommandContext) -> None:
        """Execute the use command."""
        engine = ctx.engine
        item = engine.find_visible_item(" ".join(ctx.args))
        if item is None:
            ctx.output.send_line(colorize("You don't have that.", "YELLOW"))
            return

        result = engine.mutations.use_item(item.id)
        _report(ctx, result)
        if result.outcome is UseOutcome.FIRED:
            logger.debug("item_used", item_id=item.id, action_id=result.action_id)


class CombineCommand(Command):
    """Combine two carried items."""

    name = "combine"
    help_text = "combine <item> <item> - Combine two items you carry"
    min_args = 2

    def execute(self, ctx: CommandContext) -> None:
        """Execute the combine command."""
        engine = ctx.engine
        carried = engine.queries.get_inventory_items()

        # Accept "combine a with b" as well as "combine a b"
        words = [word for word in ctx.args if word.lower() not in ("with", "and")]
        if len(words) < 2:
            ctx.output.send_line(colorize(f"Usage: {self.help_text}", "YELLOW"))
            return

        first = find_item(carried, words[0])
        second = find_item(carried, " ".join(words[1:]))
        if first is None or second is None:
            ctx.output.send_line(colorize("You need to be carrying both items.", "YELLOW"))
            return

        _report(ctx, engine.mutations.combine_items(first.id, second.id))


class InventoryCommand(Command):
    """List carried items."""

    name = "inventory"
    aliases = ["i", "inv"]
    help_text = "inventory (i) - List what you carry"

    def execute(self, ctx: CommandContext) -> None:
        """Execute the inventory command."""
        items = ctx.engine.queries.get_inventory_items()
        if not items:
            ctx.output.send_line("You are not carrying anything.")
            return

        ctx.output.send_line(colorize("You are carrying:", "CYAN"))
        for item in items:
            ctx.output.send_line(f"  {item.name}")

"""World snapshots - rooms, items, puzzles and game state as the services return them."""

from pathfinder.database.models import ActionType, Direction

from .item import ExitCondition, Item, ItemAction, ItemCombination
from .room import Room
from .state import ActionResult, GameState, UseOutcome

__all__ = [
    "Room",
    "Item",
    "ItemAction",
    "ItemCombination",
    "ExitCondition",
    "GameState",
    "ActionResult",
    "UseOutcome",
    "ActionType",
    "Direction",
]

"""SQLAlchemy models for Pathfinder."""

from pathfinder.database.models.base import Base
from pathfinder.database.models.enums import ActionType, Direction
from pathfinder.database.models.events import (
    EVENT_LOG_MODELS,
    CompletedAction,
    RemovedItem,
    RevealedItem,
    UnlockedExit,
)
from pathfinder.database.models.game_state import (
    DEFAULT_METADATA,
    GAME_STATE_ID,
    STARTING_ROOM_KEY,
    GameMetadata,
    GameState,
)
from pathfinder.database.models.item import InitialItemLocation, Item, ItemLocation
from pathfinder.database.models.puzzle import (
    DEFAULT_LOCKED_MESSAGE,
    ExitCondition,
    ItemAction,
    ItemCombination,
)
from pathfinder.database.models.room import NEIGHBOR_COLUMNS, Room

CORE_TABLES = ("rooms", "items", "game_state", "game_metadata")

__all__ = [
    "Base",
    "ActionType",
    "Direction",
    "Room",
    "NEIGHBOR_COLUMNS",
    "Item",
    "ItemLocation",
    "InitialItemLocation",
    "ItemCombination",
    "ItemAction",
    "ExitCondition",
    "DEFAULT_LOCKED_MESSAGE",
    "CompletedAction",
    "RemovedItem",
    "RevealedItem",
    "UnlockedExit",
    "EVENT_LOG_MODELS",
    "GameState",
    "GameMetadata",
    "GAME_STATE_ID",
    "STARTING_ROOM_KEY",
    "DEFAULT_METADATA",
    "CORE_TABLES",
]

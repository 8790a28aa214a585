"""Game state snapshot and action outcomes for Pathfinder."""

import enum

from pydantic import BaseModel, ConfigDict


class GameState(BaseModel):
    """The running game: where the player is and how they are doing."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    current_room_id: int
    score: int = 0
    health: int = 100
    moves_count: int = 0
    start_time: int | None = None


class UseOutcome(enum.Enum):
    """How a player intent was resolved."""

    FIRED = "fired"
    NOTHING_NEW = "nothing_new"
    NO_ACTION = "no_action"
    UNKNOWN_ACTION = "unknown_action"
    BLOCKED = "blocked"
    MOVED = "moved"


class ActionResult(BaseModel):
    """Result of a player intent, with the message to show."""

    model_config = ConfigDict(frozen=True)

    outcome: UseOutcome
    message: str
    action_id: int | None = None

    @property
    def succeeded(self) -> bool:
        """Whether the intent changed the world."""
        return self.outcome in (UseOutcome.FIRED, UseOutcome.MOVED)

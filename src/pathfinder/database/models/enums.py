"""Enumerations shared by the schema and the game services."""

import enum

from pathfinder.errors import BadValueError


class Direction(enum.Enum):
    """The four compass directions a room can connect through."""

    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @classmethod
    def parse(cls, token: "str | Direction") -> "Direction":
        """
        Parse a direction token such as 'north', 'N' or 'West'.

        Args:
            token: Direction name, single-letter shortcut, or a Direction

        Returns:
            The matching Direction

        Raises:
            BadValueError: If the token names no direction
        """
        if isinstance(token, cls):
            return token
        if not isinstance(token, str):
            raise BadValueError(f"Invalid direction: {token!r}")

        key = token.strip().lower()
        key = DIRECTION_SHORTCUTS.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise BadValueError(f"Invalid direction: {token!r}") from None

    @property
    def opposite(self) -> "Direction":
        """Get the direction pointing back the other way."""
        return _OPPOSITES[self]

    @property
    def offset(self) -> tuple[int, int]:
        """Grid offset (dx, dy) of a neighbor in this direction; north is y-1."""
        return _OFFSETS[self]


class ActionType(enum.Enum):
    """Effects an item action can trigger when the item is used."""

    REVEAL_ITEM = "reveal_item"
    REMOVE_ITEM = "remove_item"
    UNLOCK_EXIT = "unlock_exit"


DIRECTION_SHORTCUTS = {
    "n": "north",
    "s": "south",
    "e": "east",
    "w": "west",
}

_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_OFFSETS = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}

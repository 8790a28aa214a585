"""
Room snapshot for Pathfinder.

Defines the read-only Room view handed out by the query service.
"""

from pydantic import BaseModel, ConfigDict, Field

from pathfinder.database.models import NEIGHBOR_COLUMNS, Direction


class Room(BaseModel):
    """
    Represents a room (location) in the game world.

    Attributes:
        id: Unique identifier for the room
        name: Display name shown to players (e.g., "Dark Cave")
        description: Full text description shown when players look at the room
        image_path: Optional image reference
        north_room_id: Neighbor to the north, None when there is no exit
        south_room_id: Neighbor to the south, None when there is no exit
        east_room_id: Neighbor to the east, None when there is no exit
        west_room_id: Neighbor to the west, None when there is no exit
        graph_x: Map x coordinate
        graph_y: Map y coordinate
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int = Field(..., description="Unique room identifier")
    name: str = Field(..., description="Display name of the room")
    description: str = Field(..., description="Full room description")
    image_path: str | None = Field(default=None, description="Optional image reference")
    north_room_id: int | None = Field(default=None, description="Room to the north")
    south_room_id: int | None = Field(default=None, description="Room to the south")
    east_room_id: int | None = Field(default=None, description="Room to the east")
    west_room_id: int | None = Field(default=None, description="Room to the west")
    graph_x: int = Field(default=0, description="Map x coordinate")
    graph_y: int = Field(default=0, description="Map y coordinate")

    def get_exit(self, direction: Direction | str) -> int | None:
        """
        Get the room_id for a given direction.

        Args:
            direction: The direction to check (e.g., "north", Direction.SOUTH)

        Returns:
            The room_id if the exit exists, None otherwise
        """
        direction = Direction.parse(direction)
        return getattr(self, NEIGHBOR_COLUMNS[direction])

    @property
    def exits(self) -> dict[Direction, int]:
        """Map of every set direction to its neighbor room id."""
        exits: dict[Direction, int] = {}
        for direction in Direction:
            room_id = self.get_exit(direction)
            if room_id is not None:
                exits[direction] = room_id
        return exits

    def get_available_exits(self) -> list[str]:
        """
        Get the available exit directions in compass order.

        Returns:
            List of direction strings (e.g., ["north", "west"])
        """
        return [direction.value for direction in self.exits]

    def format_description(self) -> str:
        """
        Format the full room description for display to players.

        Returns:
            Formatted string with room name, description, and exits
        """
        lines = [
            f"\n{self.name}",
            "-" * len(self.name),
            self.description.strip(),
        ]

        if self.exits:
            exit_list = ", ".join(self.get_available_exits())
            lines.append(f"\n[Exits: {exit_list}]")
        else:
            lines.append("\n[Exits: none]")

        return "\n".join(lines)

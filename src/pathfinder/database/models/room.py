"""Room model for Pathfinder world locations."""

from typing import Any

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import InstrumentedAttribute, Mapped, mapped_column

from .base import Base
from .enums import Direction


class Room(Base):
    """World room with up to four directional neighbors and a map coordinate."""

    __tablename__ = "rooms"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Unique room identifier",
    )

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Display name of the room",
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Long description of the room",
    )

    image_path: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Optional reference to an image shown for the room",
    )

    north_room_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
        comment="Room reached by going north",
    )

    south_room_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
        comment="Room reached by going south",
    )

    east_room_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
        comment="Room reached by going east",
    )

    west_room_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="SET NULL"),
        nullable=True,
        comment="Room reached by going west",
    )

    graph_x: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="Map x coordinate (visualization only)",
    )

    graph_y: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="Map y coordinate (visualization only)",
    )

    @classmethod
    def neighbor_column(cls, direction: Direction) -> InstrumentedAttribute[Any]:
        """
        Get the mapped column holding the neighbor for a direction.

        Args:
            direction: Direction to look up

        Returns:
            The instrumented column attribute (e.g. Room.north_room_id)
        """
        return getattr(cls, NEIGHBOR_COLUMNS[direction])

    def get_neighbor(self, direction: Direction) -> int | None:
        """Get the neighbor room id in a direction, or None if unset."""
        return getattr(self, NEIGHBOR_COLUMNS[direction])

    def set_neighbor(self, direction: Direction, room_id: int | None) -> None:
        """Set or clear the neighbor room id in a direction."""
        setattr(self, NEIGHBOR_COLUMNS[direction], room_id)

    def __repr__(self) -> str:
        """String representation of Room."""
        return f"<Room(id={self.id}, name='{self.name}')>"


NEIGHBOR_COLUMNS = {
    Direction.NORTH: "north_room_id",
    Direction.SOUTH: "south_room_id",
    Direction.EAST: "east_room_id",
    Direction.WEST: "west_room_id",
}

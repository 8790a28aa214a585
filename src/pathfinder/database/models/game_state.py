"""Game state and metadata models for Pathfinder."""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base

GAME_STATE_ID = 1


class GameState(Base):
    """Singleton record of the running game (always id 1)."""

    __tablename__ = "game_state"
    __table_args__ = (CheckConstraint("id = 1", name="ck_game_state_singleton"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=GAME_STATE_ID)

    current_room_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rooms.id"),
        nullable=False,
        comment="Room the player is in",
    )

    score: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")

    health: Mapped[int] = mapped_column(
        Integer, nullable=False, default=100, server_default="100"
    )

    moves_count: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0"
    )

    start_time: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Session start as unix seconds",
    )

    def __repr__(self) -> str:
        """String representation of GameState."""
        return (
            f"<GameState(room={self.current_room_id}, score={self.score}, "
            f"health={self.health}, moves={self.moves_count})>"
        )


class GameMetadata(Base):
    """Free-form key/value facts about the adventure (title, author, starting room)."""

    __tablename__ = "game_metadata"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)

    value: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """String representation of GameMetadata."""
        return f"<GameMetadata(key='{self.key}', value='{self.value}')>"


STARTING_ROOM_KEY = "starting_room_id"

DEFAULT_METADATA = {
    "title": "Untitled Adventure",
    "author": "",
    "version": "1.0",
    STARTING_ROOM_KEY: "1",
}

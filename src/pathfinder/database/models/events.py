"""
Append-only event logs for one-time effects.

A row's presence is the only record that an effect already fired. Game
reset truncates all four tables.
"""

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, unix_now, value_enum
from .enums import Direction


class CompletedAction(Base):
    """An item action that has fired."""

    __tablename__ = "completed_actions"

    action_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("item_actions.id", ondelete="CASCADE"),
        primary_key=True,
    )

    completed_at: Mapped[int] = mapped_column(Integer, nullable=False, default=unix_now)


class RemovedItem(Base):
    """An item taken out of play; hidden from every room and inventory listing."""

    __tablename__ = "removed_items"

    item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        primary_key=True,
    )

    removed_at: Mapped[int] = mapped_column(Integer, nullable=False, default=unix_now)


class RevealedItem(Base):
    """A hidden item that has been made visible."""

    __tablename__ = "revealed_items"

    item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        primary_key=True,
    )

    revealed_at: Mapped[int] = mapped_column(Integer, nullable=False, default=unix_now)


class UnlockedExit(Base):
    """A locked exit that has been opened."""

    __tablename__ = "unlocked_exits"
    __table_args__ = (
        UniqueConstraint("room_id", "direction", name="uq_unlocked_exits_room_direction"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    room_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    direction: Mapped[Direction] = mapped_column(value_enum(Direction), nullable=False)

    unlocked_at: Mapped[int] = mapped_column(Integer, nullable=False, default=unix_now)


EVENT_LOG_MODELS = (CompletedAction, RemovedItem, RevealedItem, UnlockedExit)

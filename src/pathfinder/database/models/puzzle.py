"""Puzzle models for Pathfinder: combinations, item actions and exit conditions."""

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, value_enum
from .enums import Direction


class ItemCombination(Base):
    """
    Rule combining two items into a third.

    The pair is unordered; it is stored with the smaller item id in item1_id
    so the unique constraint covers both orderings.
    """

    __tablename__ = "item_combinations"
    __table_args__ = (
        UniqueConstraint("item1_id", "item2_id", name="uq_item_combinations_pair"),
        Index("idx_item_combinations_items", "item1_id", "item2_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    item1_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False,
        comment="Lower item id of the pair",
    )

    item2_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False,
        comment="Higher item id of the pair",
    )

    result_item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False,
        comment="Item produced by the combination",
    )

    success_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """String representation of ItemCombination."""
        return (
            f"<ItemCombination(id={self.id}, {self.item1_id}+{self.item2_id}"
            f"->{self.result_item_id})>"
        )


class ItemAction(Base):
    """Puzzle trigger fired by using an item, in one room or (room_id null) anywhere."""

    __tablename__ = "item_actions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Item whose use triggers the action",
    )

    room_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
        comment="Room the action works in (null for any room)",
    )

    action_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Effect kind (reveal_item, remove_item, unlock_exit)",
    )

    target_item_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        nullable=True,
        comment="Item affected by reveal/remove actions",
    )

    target_direction: Mapped[Direction | None] = mapped_column(
        value_enum(Direction),
        nullable=True,
        comment="Exit affected by unlock actions",
    )

    success_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    consumes_item: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="0",
        comment="Whether the used item is removed after the action fires",
    )

    def __repr__(self) -> str:
        """String representation of ItemAction."""
        return (
            f"<ItemAction(id={self.id}, item={self.item_id}, room={self.room_id}, "
            f"type='{self.action_type}')>"
        )


DEFAULT_LOCKED_MESSAGE = "The way is blocked."


class ExitCondition(Base):
    """Authored lock on one exit of a room."""

    __tablename__ = "exit_conditions"
    __table_args__ = (
        UniqueConstraint("room_id", "direction", name="uq_exit_conditions_room_direction"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    room_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    direction: Mapped[Direction] = mapped_column(value_enum(Direction), nullable=False)

    is_locked: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="1",
    )

    required_item_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("items.id", ondelete="SET NULL"),
        nullable=True,
        comment="Item that opens the exit when carried",
    )

    locked_message: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        default=DEFAULT_LOCKED_MESSAGE,
        server_default=DEFAULT_LOCKED_MESSAGE,
    )

    def __repr__(self) -> str:
        """String representation of ExitCondition."""
        return f"<ExitCondition(room={self.room_id}, direction={self.direction.value})>"

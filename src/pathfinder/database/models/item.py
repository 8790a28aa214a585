"""Item models for Pathfinder: item definitions and where each item lies."""

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Item(Base):
    """
    Authored item definition.

    Capability flags gate what the player may do with it; hidden items
    (is_visible false) exist but are not listed until revealed.
    """

    __tablename__ = "items"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Unique item identifier",
    )

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        comment="Display name of the item",
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Description shown when examining the item",
    )

    room_description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Alternate description shown while the item lies in a room",
    )

    image_path: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Optional reference to an image of the item",
    )

    can_take: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="1",
        comment="Whether the player can pick the item up",
    )

    can_use: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="0",
        comment="Whether the item can be used",
    )

    can_combine: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="0",
        comment="Whether the item can be combined with another",
    )

    use_message: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        comment="Default message when the item is used with no matching action",
    )

    is_visible: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="1",
        comment="Base visibility; hidden items appear only once revealed",
    )

    def __repr__(self) -> str:
        """String representation of Item."""
        return f"<Item(id={self.id}, name='{self.name}')>"


class ItemLocation(Base):
    """Live placement of an item: a room, or NULL for the player's inventory."""

    __tablename__ = "item_locations"

    item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        primary_key=True,
        comment="Placed item (one placement per item)",
    )

    room_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
        comment="Room holding the item (null if in inventory)",
    )

    def __repr__(self) -> str:
        """String representation of ItemLocation."""
        location = f"room={self.room_id}" if self.room_id is not None else "inventory"
        return f"<ItemLocation(item={self.item_id}, {location})>"


class InitialItemLocation(Base):
    """Authored starting placement of an item, restored on game reset."""

    __tablename__ = "item_locations_initial"

    item_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("items.id", ondelete="CASCADE"),
        primary_key=True,
        comment="Placed item",
    )

    room_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=True,
        comment="Starting room (null if the game starts with it in inventory)",
    )

    def __repr__(self) -> str:
        """String representation of InitialItemLocation."""
        return f"<InitialItemLocation(item={self.item_id}, room={self.room_id})>"

"""Item and puzzle snapshots for Pathfinder."""

from pydantic import BaseModel, ConfigDict, Field

from pathfinder.database.models import ActionType, Direction


class Item(BaseModel):
    """An item as shown to the player or the author."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    description: str
    room_description: str | None = None
    image_path: str | None = None
    can_take: bool = True
    can_use: bool = False
    can_combine: bool = False
    use_message: str | None = None
    is_visible: bool = True

    def describe_in_room(self) -> str:
        """Line used when listing the item in a room."""
        return self.room_description or f"There is a {self.name.lower()} here."


class ItemAction(BaseModel):
    """A puzzle trigger fired by using an item."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    item_id: int
    room_id: int | None = Field(default=None, description="None means any room")
    action_type: str
    target_item_id: int | None = None
    target_direction: Direction | None = None
    success_message: str | None = None
    consumes_item: bool = False

    @property
    def kind(self) -> ActionType | None:
        """The recognized action kind, or None for a type this engine does not know."""
        try:
            return ActionType(self.action_type)
        except ValueError:
            return None


class ItemCombination(BaseModel):
    """Rule turning an unordered pair of items into a third."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    item1_id: int
    item2_id: int
    result_item_id: int
    success_message: str | None = None


class ExitCondition(BaseModel):
    """Authored lock on one exit of a room."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    room_id: int
    direction: Direction
    is_locked: bool = True
    required_item_id: int | None = None
    locked_message: str | None = None

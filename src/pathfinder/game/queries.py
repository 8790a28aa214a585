"""Read-only projections of an adventure store."""

from sqlalchemy import and_, exists, or_, select
from sqlalchemy.orm import Session

from pathfinder.database import GameDatabase
from pathfinder.database import models
from pathfinder.database.models import Direction
from pathfinder.errors import NotFoundError
from pathfinder.game.world import (
    ExitCondition,
    GameState,
    Item,
    ItemAction,
    ItemCombination,
    Room,
)


def _not_removed():
    """Filter excluding items present in the removed-item log."""
    return ~exists().where(models.RemovedItem.item_id == models.Item.id)


def _visible_or_revealed():
    """Filter keeping items visible by default or present in the revealed-item log."""
    return or_(
        models.Item.is_visible.is_(True),
        exists().where(models.RevealedItem.item_id == models.Item.id),
    )


def exit_locked(session: Session, room_id: int, direction: Direction) -> bool:
    """
    Check whether an exit is locked inside an existing session.

    An exit is locked iff an exit condition exists for it and no unlocked-exit
    row matches. Without a condition it is never locked.
    """
    stmt = select(models.ExitCondition.id).where(
        models.ExitCondition.room_id == room_id,
        models.ExitCondition.direction == direction,
        ~exists().where(
            and_(
                models.UnlockedExit.room_id == models.ExitCondition.room_id,
                models.UnlockedExit.direction == models.ExitCondition.direction,
            )
        ),
    )
    return session.scalar(stmt) is not None


def action_completed(session: Session, action_id: int) -> bool:
    """Check the completed-action log inside an existing session."""
    return session.get(models.CompletedAction, action_id) is not None


def item_actions(session: Session, item_id: int, room_id: int) -> list[ItemAction]:
    """Actions for an item in a room or in any room, ordered by id."""
    stmt = (
        select(models.ItemAction)
        .where(
            models.ItemAction.item_id == item_id,
            or_(
                models.ItemAction.room_id == room_id,
                models.ItemAction.room_id.is_(None),
            ),
        )
        .order_by(models.ItemAction.id)
    )
    return [ItemAction.model_validate(action) for action in session.scalars(stmt)]


class WorldQueries:
    """
    Pure reads against a borrowed GameDatabase.

    Every method raises NotInitializedError when no store is open, and point
    lookups raise NotFoundError when the row is absent.
    """

    def __init__(self, database: GameDatabase) -> None:
        self._database = database

    def get_room(self, room_id: int) -> Room:
        """
        Fetch a single room.

        Args:
            room_id: Room to fetch

        Returns:
            Room snapshot; absent directions are None

        Raises:
            NotFoundError: If the room does not exist
        """
        with self._database.session() as session:
            room = session.get(models.Room, room_id)
            if room is None:
                raise NotFoundError(f"Room {room_id} not found")
            return Room.model_validate(room)

    def list_rooms(self) -> list[Room]:
        """Get every room ordered by id."""
        with self._database.session() as session:
            rooms = session.scalars(select(models.Room).order_by(models.Room.id))
            return [Room.model_validate(room) for room in rooms]

    def get_item(self, item_id: int) -> Item:
        """
        Fetch a single item definition.

        Raises:
            NotFoundError: If the item does not exist
        """
        with self._database.session() as session:
            item = session.get(models.Item, item_id)
            if item is None:
                raise NotFoundError(f"Item {item_id} not found")
            return Item.model_validate(item)

    def list_items(self) -> list[Item]:
        """Get every item definition ordered by id."""
        with self._database.session() as session:
            items = session.scalars(select(models.Item).order_by(models.Item.id))
            return [Item.model_validate(item) for item in items]

    def get_items_in_room(self, room_id: int) -> list[Item]:
        """
        Get the items lying in a room that the player can see.

        Removed items are excluded; hidden items are included only once revealed.

        Args:
            room_id: Room to list

        Returns:
            Items in placement insertion order
        """
        stmt = (
            select(models.Item)
            .join(models.ItemLocation, models.ItemLocation.item_id == models.Item.id)
            .where(
                models.ItemLocation.room_id == room_id,
                _not_removed(),
                _visible_or_revealed(),
            )
            .order_by(models.ItemLocation.item_id)
        )
        with self._database.session() as session:
            return [Item.model_validate(item) for item in session.scalars(stmt)]

    def get_inventory_items(self) -> list[Item]:
        """Get the items the player carries, excluding removed ones."""
        stmt = (
            select(models.Item)
            .join(models.ItemLocation, models.ItemLocation.item_id == models.Item.id)
            .where(models.ItemLocation.room_id.is_(None), _not_removed())
            .order_by(models.ItemLocation.item_id)
        )
        with self._database.session() as session:
            return [Item.model_validate(item) for item in session.scalars(stmt)]

    def get_item_location(self, item_id: int) -> int | None:
        """
        Get the room an item is placed in.

        Returns:
            Room id, or None when the item is in the inventory

        Raises:
            NotFoundError: If the item has no placement
        """
        with self._database.session() as session:
            location = session.get(models.ItemLocation, item_id)
            if location is None:
                raise NotFoundError(f"Item {item_id} has no placement")
            return location.room_id

    def get_game_state(self) -> GameState:
        """
        Fetch the running game state.

        Raises:
            NotFoundError: If the store holds no game state row
        """
        with self._database.session() as session:
            state = session.get(models.GameState, models.GAME_STATE_ID)
            if state is None:
                raise NotFoundError("Game state not found")
            return GameState.model_validate(state)

    def get_item_actions(self, item_id: int, room_id: int) -> list[ItemAction]:
        """
        Get every action for an item that applies in a room.

        Includes global actions (room_id null). Completion is not filtered.

        Args:
            item_id: Item being used
            room_id: Room the player is in

        Returns:
            Actions ordered by id
        """
        with self._database.session() as session:
            return item_actions(session, item_id, room_id)

    def get_exit_condition(self, room_id: int, direction: Direction | str) -> ExitCondition | None:
        """Get the authored lock on an exit, if any."""
        direction = Direction.parse(direction)
        stmt = select(models.ExitCondition).where(
            models.ExitCondition.room_id == room_id,
            models.ExitCondition.direction == direction,
        )
        with self._database.session() as session:
            condition = session.scalar(stmt)
            return ExitCondition.model_validate(condition) if condition else None

    def get_combination(self, item_a: int, item_b: int) -> ItemCombination | None:
        """Get the combination rule for an unordered pair of items, if any."""
        first, second = sorted((item_a, item_b))
        stmt = select(models.ItemCombination).where(
            models.ItemCombination.item1_id == first,
            models.ItemCombination.item2_id == second,
        )
        with self._database.session() as session:
            combination = session.scalar(stmt)
            return ItemCombination.model_validate(combination) if combination else None

    def is_action_completed(self, action_id: int) -> bool:
        """Check whether an action has already fired."""
        with self._database.session() as session:
            return action_completed(session, action_id)

    def is_exit_locked(self, room_id: int, direction: Direction | str) -> bool:
        """
        Check whether an exit is currently locked.

        Raises:
            BadValueError: If direction is not a valid direction
        """
        direction = Direction.parse(direction)
        with self._database.session() as session:
            return exit_locked(session, room_id, direction)

    def get_metadata(self, key: str) -> str | None:
        """Get one metadata value (title, author, version, starting_room_id)."""
        with self._database.session() as session:
            entry = session.get(models.GameMetadata, key)
            return entry.value if entry else None

    def get_all_metadata(self) -> dict[str, str | None]:
        """Get every metadata entry."""
        with self._database.session() as session:
            return {
                entry.key: entry.value
                for entry in session.scalars(select(models.GameMetadata))
            }

"""Authoring operations: structural edits to rooms, items and puzzles."""

import structlog
from sqlalchemy import delete, insert, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from pathfinder.database import GameDatabase
from pathfinder.database import models
from pathfinder.database.models import Direction
from pathfinder.errors import BadValueError, LastRoomError, NotFoundError
from pathfinder.game.mutations import WorldMutations

logger = structlog.get_logger(__name__)

_UNSET = object()


def _optional_text(value: str | None) -> str | None:
    """Store missing and empty strings as NULL."""
    return value if value else None


def _optional_id(value: int | None) -> int | None:
    """Store missing and non-positive ids as NULL."""
    return value if value is not None and value > 0 else None


class WorldEditor:
    """
    Content authoring against a borrowed GameDatabase.

    Deleting rooms and items relies on the store's foreign keys to cascade
    to placements, actions, combinations and exit conditions.
    """

    def __init__(self, database: GameDatabase, mutations: WorldMutations | None = None) -> None:
        self._database = database
        self.mutations = mutations or WorldMutations(database)

    @property
    def is_ready(self) -> bool:
        """Check if a store is open for editing."""
        return self._database.is_open

    # Rooms

    def create_room(
        self,
        name: str,
        description: str,
        graph_x: int = 0,
        graph_y: int = 0,
        image_path: str | None = None,
    ) -> int:
        """
        Create a room.

        Args:
            name: Display name
            description: Room description
            graph_x: Map x coordinate
            graph_y: Map y coordinate
            image_path: Optional image reference

        Returns:
            The new room id
        """
        with self._database.session() as session:
            room = models.Room(
                name=name,
                description=description,
                graph_x=graph_x,
                graph_y=graph_y,
                image_path=_optional_text(image_path),
            )
            session.add(room)
            session.flush()
            room_id = room.id

        logger.info("room_created", room_id=room_id, name=name)
        return room_id

    def update_room(
        self,
        room_id: int,
        name: str,
        description: str,
        image_path: str | None | object = _UNSET,
    ) -> None:
        """
        Rename and redescribe a room.

        Raises:
            NotFoundError: If the room does not exist
        """
        values: dict[str, object] = {"name": name, "description": description}
        if image_path is not _UNSET:
            values["image_path"] = _optional_text(image_path)  # type: ignore[arg-type]

        with self._database.session() as session:
            result = session.execute(
                update(models.Room).where(models.Room.id == room_id).values(**values)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Room {room_id} not found")

        logger.info("room_updated", room_id=room_id)

    def delete_room(self, room_id: int) -> None:
        """
        Delete a room.

        If the player stands in the room they are moved to another room
        first; the starting room is redirected the same way. Neighbor
        references to the room are cleared. Everything happens in one
        transaction.

        Raises:
            NotFoundError: If the room does not exist
            LastRoomError: If it is the only room
        """
        with self._database.session() as session:
            if session.get(models.Room, room_id) is None:
                raise NotFoundError(f"Room {room_id} not found")

            fallback_id = session.scalar(
                select(models.Room.id)
                .where(models.Room.id != room_id)
                .order_by(models.Room.id)
                .limit(1)
            )
            if fallback_id is None:
                raise LastRoomError(room_id)

            session.execute(
                update(models.GameState)
                .where(models.GameState.current_room_id == room_id)
                .values(current_room_id=fallback_id)
            )
            session.execute(
                update(models.GameMetadata)
                .where(
                    models.GameMetadata.key == models.STARTING_ROOM_KEY,
                    models.GameMetadata.value == str(room_id),
                )
                .values(value=str(fallback_id))
            )

            for direction in Direction:
                column = models.Room.neighbor_column(direction)
                session.execute(
                    update(models.Room).where(column == room_id).values({column: None})
                )

            session.execute(delete(models.Room).where(models.Room.id == room_id))

        logger.info("room_deleted", room_id=room_id, fallback_room_id=fallback_id)

    def connect_rooms(self, room_id: int, direction: Direction | str, target_room_id: int) -> None:
        """
        Point one exit of a room at another room.

        Only this direction of this room changes; the reverse link is separate.

        Raises:
            BadValueError: If direction is not a valid direction
            NotFoundError: If the room does not exist
        """
        direction = Direction.parse(direction)
        self._set_neighbor(room_id, direction, target_room_id)
        logger.info(
            "rooms_connected",
            room_id=room_id,
            direction=direction.value,
            target_room_id=target_room_id,
        )

    def disconnect_room(self, room_id: int, direction: Direction | str) -> None:
        """
        Clear one exit of a room.

        Raises:
            BadValueError: If direction is not a valid direction
            NotFoundError: If the room does not exist
        """
        direction = Direction.parse(direction)
        self._set_neighbor(room_id, direction, None)
        logger.info("room_disconnected", room_id=room_id, direction=direction.value)

    def _set_neighbor(self, room_id: int, direction: Direction, target_room_id: int | None) -> None:
        column = models.Room.neighbor_column(direction)
        with self._database.session() as session:
            result = session.execute(
                update(models.Room)
                .where(models.Room.id == room_id)
                .values({column: target_room_id})
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Room {room_id} not found")

    # Items

    def create_item(
        self,
        name: str,
        description: str,
        room_description: str | None = None,
        can_take: bool = True,
        can_use: bool = False,
        can_combine: bool = False,
        use_message: str | None = None,
        is_visible: bool = True,
        image_path: str | None = None,
        room_id: int | None = None,
    ) -> int:
        """
        Create an item and its placement.

        Every item always has exactly one placement, so the new item is
        placed in room_id, or in the inventory when room_id is None.

        Returns:
            The new item id
        """
        with self._database.session() as session:
            item = models.Item(
                name=name,
                description=description,
                room_description=_optional_text(room_description),
                image_path=_optional_text(image_path),
                can_take=can_take,
                can_use=can_use,
                can_combine=can_combine,
                use_message=_optional_text(use_message),
                is_visible=is_visible,
            )
            session.add(item)
            session.flush()
            session.add(models.ItemLocation(item_id=item.id, room_id=room_id))
            item_id = item.id

        logger.info("item_created", item_id=item_id, name=name, room_id=room_id)
        return item_id

    def update_item(
        self,
        item_id: int,
        name: str,
        description: str,
        room_description: str | None = None,
    ) -> None:
        """
        Rename and redescribe an item.

        Raises:
            NotFoundError: If the item does not exist
        """
        with self._database.session() as session:
            result = session.execute(
                update(models.Item)
                .where(models.Item.id == item_id)
                .values(
                    name=name,
                    description=description,
                    room_description=_optional_text(room_description),
                )
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Item {item_id} not found")

        logger.info("item_updated", item_id=item_id)

    def delete_item(self, item_id: int) -> None:
        """Delete an item with its placements, actions and combinations."""
        with self._database.session() as session:
            session.execute(delete(models.Item).where(models.Item.id == item_id))
        logger.info("item_deleted", item_id=item_id)

    def place_item(self, item_id: int, room_id: int | None) -> None:
        """
        Place an item in a room (None for the inventory), replacing its placement.

        Args:
            item_id: Item to place
            room_id: Target room, or None for the inventory
        """
        with self._database.session() as session:
            session.execute(
                sqlite_insert(models.ItemLocation)
                .values(item_id=item_id, room_id=room_id)
                .on_conflict_do_update(
                    index_elements=[models.ItemLocation.item_id],
                    set_={"room_id": room_id},
                )
            )
        logger.info("item_placed", item_id=item_id, room_id=room_id)

    # Puzzles

    def create_item_action(
        self,
        item_id: int,
        action_type: str,
        room_id: int | None = None,
        target_item_id: int | None = None,
        target_direction: Direction | str | None = None,
        success_message: str | None = None,
        consumes_item: bool = False,
    ) -> int:
        """
        Create a puzzle trigger for an item.

        Args:
            item_id: Item whose use fires the action
            action_type: Effect kind, e.g. 'reveal_item', 'remove_item', 'unlock_exit'
            room_id: Room the action works in; None or non-positive for any room
            target_item_id: Item revealed or removed
            target_direction: Exit unlocked
            success_message: Message shown when the action fires
            consumes_item: Remove the used item after firing

        Returns:
            The new action id

        Raises:
            BadValueError: If action_type is empty or target_direction is invalid
        """
        action_type = (action_type or "").strip().lower()
        if not action_type:
            raise BadValueError("Action type must not be empty")

        direction = Direction.parse(target_direction) if target_direction else None

        with self._database.session() as session:
            action = models.ItemAction(
                item_id=item_id,
                room_id=_optional_id(room_id),
                action_type=action_type,
                target_item_id=_optional_id(target_item_id),
                target_direction=direction,
                success_message=_optional_text(success_message),
                consumes_item=consumes_item,
            )
            session.add(action)
            session.flush()
            action_id = action.id

        logger.info(
            "item_action_created",
            action_id=action_id,
            item_id=item_id,
            action_type=action_type,
        )
        return action_id

    def delete_item_action(self, action_id: int) -> None:
        """Delete a puzzle trigger."""
        with self._database.session() as session:
            session.execute(delete(models.ItemAction).where(models.ItemAction.id == action_id))
        logger.info("item_action_deleted", action_id=action_id)

    def create_exit_condition(
        self,
        room_id: int,
        direction: Direction | str,
        locked_message: str | None = None,
        required_item_id: int | None = None,
    ) -> int:
        """
        Lock an exit of a room.

        Returns:
            The new condition id

        Raises:
            BadValueError: If direction is not a valid direction
            StorageFaultError: If the exit already has a condition
        """
        direction = Direction.parse(direction)
        with self._database.session() as session:
            condition = models.ExitCondition(
                room_id=room_id,
                direction=direction,
                is_locked=True,
                locked_message=_optional_text(locked_message) or models.DEFAULT_LOCKED_MESSAGE,
                required_item_id=_optional_id(required_item_id),
            )
            session.add(condition)
            session.flush()
            condition_id = condition.id

        logger.info("exit_condition_created", room_id=room_id, direction=direction.value)
        return condition_id

    def delete_exit_condition(self, room_id: int, direction: Direction | str) -> None:
        """Remove the lock on an exit."""
        direction = Direction.parse(direction)
        with self._database.session() as session:
            session.execute(
                delete(models.ExitCondition).where(
                    models.ExitCondition.room_id == room_id,
                    models.ExitCondition.direction == direction,
                )
            )
        logger.info("exit_condition_deleted", room_id=room_id, direction=direction.value)

    def create_combination(
        self,
        item_a: int,
        item_b: int,
        result_item_id: int,
        success_message: str | None = None,
    ) -> int:
        """
        Define what two items make when combined.

        Returns:
            The new combination id

        Raises:
            BadValueError: If both ids are the same item, or the result is one of them
            StorageFaultError: If the pair already has a rule
        """
        if item_a == item_b:
            raise BadValueError("An item cannot be combined with itself")
        if result_item_id in (item_a, item_b):
            raise BadValueError("A combination cannot produce one of its own inputs")

        first, second = sorted((item_a, item_b))
        with self._database.session() as session:
            combination = models.ItemCombination(
                item1_id=first,
                item2_id=second,
                result_item_id=result_item_id,
                success_message=_optional_text(success_message),
            )
            session.add(combination)
            session.flush()
            combination_id = combination.id

        logger.info(
            "combination_created",
            combination_id=combination_id,
            item1_id=first,
            item2_id=second,
            result_item_id=result_item_id,
        )
        return combination_id

    def delete_combination(self, item_a: int, item_b: int) -> None:
        """Remove the rule for an unordered pair of items."""
        first, second = sorted((item_a, item_b))
        with self._database.session() as session:
            session.execute(
                delete(models.ItemCombination).where(
                    models.ItemCombination.item1_id == first,
                    models.ItemCombination.item2_id == second,
                )
            )
        logger.info("combination_deleted", item1_id=first, item2_id=second)

    # Metadata and state

    def set_metadata(self, key: str, value: str | None) -> None:
        """
        Set a metadata entry such as title, author or starting_room_id.

        Raises:
            BadValueError: If key is empty, or starting_room_id is not a room
        """
        if not key:
            raise BadValueError("Metadata key must not be empty")

        with self._database.session() as session:
            if key == models.STARTING_ROOM_KEY:
                try:
                    room_id = int(value or "")
                except ValueError:
                    raise BadValueError(f"Starting room must be a room id, got {value!r}") from None
                if session.get(models.Room, room_id) is None:
                    raise BadValueError(f"Starting room {room_id} does not exist")

            session.execute(
                sqlite_insert(models.GameMetadata)
                .values(key=key, value=value)
                .on_conflict_do_update(
                    index_elements=[models.GameMetadata.key],
                    set_={"value": value},
                )
            )
        logger.info("metadata_set", key=key)

    def save_as_initial_state(self) -> None:
        """Make the current item placements the ones a game reset restores."""
        with self._database.session() as session:
            session.execute(delete(models.InitialItemLocation))
            session.execute(
                insert(models.InitialItemLocation).from_select(
                    ["item_id", "room_id"],
                    select(models.ItemLocation.item_id, models.ItemLocation.room_id),
                )
            )
        logger.info("initial_state_saved")

    def clear_game_state(self) -> None:
        """Reset play state so editing starts from a clean baseline."""
        self.mutations.clear_game_state()

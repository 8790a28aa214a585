"""State-changing operations performed while playing."""

from collections.abc import Callable

import structlog
from sqlalchemy import delete, insert, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from pathfinder.config import get_settings
from pathfinder.database import GameDatabase
from pathfinder.database import models
from pathfinder.database.models import ActionType, Direction
from pathfinder.database.models.base import unix_now
from pathfinder.errors import BadValueError, NotFoundError, StorageFaultError
from pathfinder.game.queries import WorldQueries, action_completed, item_actions
from pathfinder.game.world import ActionResult, GameState, ItemAction, UseOutcome

logger = structlog.get_logger(__name__)

NOTHING_NEW_MESSAGE = "Nothing new happens."
CANT_USE_MESSAGE = "You can't use that here."
UNKNOWN_ACTION_MESSAGE = "Nothing happens."
ACTION_DONE_MESSAGE = "Done."


def _insert_if_absent(session: Session, model: type[models.Base], **values: object) -> None:
    """Append to an event log, ignoring a row that is already there."""
    session.execute(sqlite_insert(model).values(**values).on_conflict_do_nothing())


def _current_room_id(session: Session) -> int:
    state = session.get(models.GameState, models.GAME_STATE_ID)
    if state is None:
        raise NotFoundError("Game state not found")
    return state.current_room_id


class WorldMutations:
    """
    Play-time mutations against a borrowed GameDatabase.

    Event-log writes are insert-if-absent, so repeating any of them has no
    further effect.
    """

    def __init__(self, database: GameDatabase, queries: WorldQueries | None = None) -> None:
        self._database = database
        self.queries = queries or WorldQueries(database)
        self._effects: dict[ActionType, Callable[[Session, ItemAction, int], None]] = {
            ActionType.REVEAL_ITEM: self._reveal_target,
            ActionType.REMOVE_ITEM: self._remove_target,
            ActionType.UNLOCK_EXIT: self._unlock_target,
        }

    # Movement

    def move_to_room(self, room_id: int) -> None:
        """
        Put the player in a room and count the move.

        Reachability is not checked; callers only offer existing exits.
        """
        with self._database.session() as session:
            session.execute(
                update(models.GameState)
                .where(models.GameState.id == models.GAME_STATE_ID)
                .values(
                    current_room_id=room_id,
                    moves_count=models.GameState.moves_count + 1,
                )
            )
        logger.debug("player_moved", room_id=room_id)

    def travel(self, direction: Direction | str) -> ActionResult:
        """
        Move the player through an exit of the current room.

        A locked exit opens when its condition names an item the player
        carries; otherwise the locked message is returned.

        Args:
            direction: Direction to go

        Returns:
            MOVED on success, BLOCKED when there is no exit or it is locked
        """
        direction = Direction.parse(direction)
        state = self.queries.get_game_state()
        room = self.queries.get_room(state.current_room_id)

        destination = room.get_exit(direction)
        if destination is None:
            return ActionResult(
                outcome=UseOutcome.BLOCKED,
                message=f"You can't go {direction.value} from here.",
            )

        if self.queries.is_exit_locked(room.id, direction):
            condition = self.queries.get_exit_condition(room.id, direction)
            carried = {item.id for item in self.queries.get_inventory_items()}
            if condition and condition.required_item_id in carried:
                self.unlock_exit(room.id, direction)
                logger.info(
                    "exit_opened_with_item",
                    room_id=room.id,
                    direction=direction.value,
                    item_id=condition.required_item_id,
                )
            else:
                message = (condition.locked_message if condition else None) or (
                    models.DEFAULT_LOCKED_MESSAGE
                )
                return ActionResult(outcome=UseOutcome.BLOCKED, message=message)

        self.move_to_room(destination)
        return ActionResult(outcome=UseOutcome.MOVED, message=f"You go {direction.value}.")

    def update_game_state(self, state: GameState) -> None:
        """Write current room, score, health and move count."""
        with self._database.session() as session:
            session.execute(
                update(models.GameState)
                .where(models.GameState.id == models.GAME_STATE_ID)
                .values(
                    current_room_id=state.current_room_id,
                    score=state.score,
                    health=state.health,
                    moves_count=state.moves_count,
                )
            )

    # Item placement

    def move_item_to_inventory(self, item_id: int) -> None:
        """Put an item in the player's inventory. The can-take flag is not checked."""
        with self._database.session() as session:
            result = session.execute(
                update(models.ItemLocation)
                .where(models.ItemLocation.item_id == item_id)
                .values(room_id=None)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Item {item_id} has no placement")

    def move_item_to_room(self, item_id: int, room_id: int) -> None:
        """Put an item in a room."""
        with self._database.session() as session:
            result = session.execute(
                update(models.ItemLocation)
                .where(models.ItemLocation.item_id == item_id)
                .values(room_id=room_id)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Item {item_id} has no placement")

    def take_item(self, item_id: int) -> ActionResult:
        """Pick up a visible, takable item from the current room."""
        item = self.queries.get_item(item_id)
        state = self.queries.get_game_state()
        in_room = {i.id for i in self.queries.get_items_in_room(state.current_room_id)}

        if item_id not in in_room:
            return ActionResult(outcome=UseOutcome.BLOCKED, message="You don't see that here.")
        if not item.can_take:
            return ActionResult(outcome=UseOutcome.BLOCKED, message="You can't take that.")

        self.move_item_to_inventory(item_id)
        logger.info("item_taken", item_id=item_id, room_id=state.current_room_id)
        return ActionResult(outcome=UseOutcome.MOVED, message=f"You take the {item.name}.")

    def drop_item(self, item_id: int) -> ActionResult:
        """Drop a carried item into the current room."""
        item = self.queries.get_item(item_id)
        carried = {i.id for i in self.queries.get_inventory_items()}
        if item_id not in carried:
            return ActionResult(outcome=UseOutcome.BLOCKED, message="You aren't carrying that.")

        state = self.queries.get_game_state()
        self.move_item_to_room(item_id, state.current_room_id)
        logger.info("item_dropped", item_id=item_id, room_id=state.current_room_id)
        return ActionResult(outcome=UseOutcome.MOVED, message=f"You drop the {item.name}.")

    # Event logs

    def mark_action_completed(self, action_id: int) -> None:
        """Record that an action fired."""
        with self._database.session() as session:
            _insert_if_absent(session, models.CompletedAction, action_id=action_id)

    def is_action_completed(self, action_id: int) -> bool:
        """Check whether an action already fired."""
        return self.queries.is_action_completed(action_id)

    def set_item_visibility(self, item_id: int, visible: bool) -> None:
        """
        Reveal or re-hide an item.

        Only the revealed-item log changes; the item's base visibility flag
        is left alone.
        """
        with self._database.session() as session:
            if visible:
                _insert_if_absent(session, models.RevealedItem, item_id=item_id)
            else:
                session.execute(
                    delete(models.RevealedItem).where(models.RevealedItem.item_id == item_id)
                )

    def remove_item_from_room(self, item_id: int) -> None:
        """
        Take an item out of play.

        The placement row is kept; the item is filtered out of every listing.
        """
        with self._database.session() as session:
            _insert_if_absent(session, models.RemovedItem, item_id=item_id)

    def unlock_exit(self, room_id: int, direction: Direction | str) -> None:
        """Open an exit of a room."""
        direction = Direction.parse(direction)
        with self._database.session() as session:
            _insert_if_absent(
                session, models.UnlockedExit, room_id=room_id, direction=direction
            )

    def is_exit_locked(self, room_id: int, direction: Direction | str) -> bool:
        """Check whether an exit is locked."""
        return self.queries.is_exit_locked(room_id, direction)

    # Puzzles

    def use_item(self, item_id: int) -> ActionResult:
        """
        Use an item in the current room.

        The first action (by id) for the item in this room or any room that
        has not fired yet is executed. Its effect, completion and the optional
        consumption of the used item are committed together.

        Args:
            item_id: Item being used

        Returns:
            FIRED with the action's message, NOTHING_NEW if every action
            already fired, NO_ACTION with the item's use message when it has
            no action here, UNKNOWN_ACTION for an action type this engine
            cannot execute
        """
        item = self.queries.get_item(item_id)

        with self._database.session() as session:
            room_id = _current_room_id(session)
            actions = item_actions(session, item_id, room_id)

            if not actions:
                return ActionResult(
                    outcome=UseOutcome.NO_ACTION,
                    message=item.use_message or CANT_USE_MESSAGE,
                )

            action = next((a for a in actions if not action_completed(session, a.id)), None)
            if action is None:
                return ActionResult(outcome=UseOutcome.NOTHING_NEW, message=NOTHING_NEW_MESSAGE)

            effect = self._effects.get(action.kind) if action.kind else None
            if effect is None:
                logger.warning(
                    "unknown_action_type",
                    action_id=action.id,
                    action_type=action.action_type,
                )
                return ActionResult(
                    outcome=UseOutcome.UNKNOWN_ACTION,
                    message=UNKNOWN_ACTION_MESSAGE,
                    action_id=action.id,
                )

            effect(session, action, room_id)
            _insert_if_absent(session, models.CompletedAction, action_id=action.id)
            if action.consumes_item:
                _insert_if_absent(session, models.RemovedItem, item_id=item_id)

        logger.info(
            "item_action_fired",
            action_id=action.id,
            item_id=item_id,
            room_id=room_id,
            action_type=action.action_type,
            consumed=action.consumes_item,
        )
        return ActionResult(
            outcome=UseOutcome.FIRED,
            message=action.success_message or ACTION_DONE_MESSAGE,
            action_id=action.id,
        )

    def _reveal_target(self, session: Session, action: ItemAction, room_id: int) -> None:
        if action.target_item_id is None:
            raise BadValueError(f"Action {action.id} has no target item to reveal")
        _insert_if_absent(session, models.RevealedItem, item_id=action.target_item_id)

    def _remove_target(self, session: Session, action: ItemAction, room_id: int) -> None:
        if action.target_item_id is None:
            raise BadValueError(f"Action {action.id} has no target item to remove")
        _insert_if_absent(session, models.RemovedItem, item_id=action.target_item_id)

    def _unlock_target(self, session: Session, action: ItemAction, room_id: int) -> None:
        if action.target_direction is None:
            raise BadValueError(f"Action {action.id} has no target direction to unlock")
        _insert_if_absent(
            session, models.UnlockedExit, room_id=room_id, direction=action.target_direction
        )

    def combine_items(self, item_a: int, item_b: int) -> ActionResult:
        """
        Combine two carried items.

        On a matching rule both inputs leave play and the result item goes to
        the inventory, in one transaction.
        """
        if item_a == item_b:
            return ActionResult(
                outcome=UseOutcome.NO_ACTION, message="You can't combine something with itself."
            )

        carried = {item.id for item in self.queries.get_inventory_items()}
        if item_a not in carried or item_b not in carried:
            return ActionResult(
                outcome=UseOutcome.BLOCKED, message="You need to be carrying both items."
            )

        combination = self.queries.get_combination(item_a, item_b)
        if combination is None:
            return ActionResult(
                outcome=UseOutcome.NO_ACTION, message="Those don't go together."
            )

        with self._database.session() as session:
            for consumed in (item_a, item_b):
                if consumed == combination.result_item_id:
                    continue
                _insert_if_absent(session, models.RemovedItem, item_id=consumed)
            session.execute(
                sqlite_insert(models.ItemLocation)
                .values(item_id=combination.result_item_id, room_id=None)
                .on_conflict_do_update(
                    index_elements=[models.ItemLocation.item_id],
                    set_={"room_id": None},
                )
            )

        logger.info(
            "items_combined",
            item_a=item_a,
            item_b=item_b,
            result_item_id=combination.result_item_id,
        )
        return ActionResult(
            outcome=UseOutcome.FIRED,
            message=combination.success_message or ACTION_DONE_MESSAGE,
        )

    # Reset

    def clear_game_state(self) -> None:
        """
        Restore the authored starting configuration.

        Clears the four event logs and live placements, copies placements
        from the initial snapshot, and resets the game state to the starting
        room. All of it commits as one transaction or not at all.
        """
        settings = get_settings()

        with self._database.session() as session:
            for log_model in models.EVENT_LOG_MODELS:
                session.execute(delete(log_model))
            session.execute(delete(models.ItemLocation))
            session.execute(
                insert(models.ItemLocation).from_select(
                    ["item_id", "room_id"],
                    select(
                        models.InitialItemLocation.item_id,
                        models.InitialItemLocation.room_id,
                    ),
                )
            )

            starting_room = session.get(models.GameMetadata, models.STARTING_ROOM_KEY)
            if starting_room is None or starting_room.value is None:
                raise NotFoundError("Starting room is not set in game metadata")
            try:
                starting_room_id = int(starting_room.value)
            except ValueError as e:
                raise StorageFaultError(
                    f"Starting room metadata is not a room id: {starting_room.value!r}"
                ) from e

            session.execute(
                update(models.GameState)
                .where(models.GameState.id == models.GAME_STATE_ID)
                .values(
                    current_room_id=starting_room_id,
                    score=0,
                    health=settings.starting_health,
                    moves_count=0,
                    start_time=unix_now(),
                )
            )

        logger.info("game_state_cleared")

"""Tests for content authoring operations."""

import pytest
from sqlalchemy import func, select, text

from pathfinder.database.models import (
    ExitCondition,
    ItemAction,
    ItemCombination,
    ItemLocation,
    Room,
)
from pathfinder.errors import BadValueError, LastRoomError, NotFoundError, StorageFaultError
from pathfinder.game.world import Direction

# Starter world ids
CAVE_ID = 1
PATH_ID = 2
STONE_ID = 1
STICK_ID = 2


def count(database, model) -> int:
    with database.session() as session:
        return session.scalar(select(func.count()).select_from(model))


class TestRooms:
    """Tests for room authoring."""

    def test_create_room(self, editor, queries):
        """Test a created room is readable with its coordinates."""
        room_id = editor.create_room("Hall", "A grand hall.", graph_x=200, graph_y=-100)
        room = queries.get_room(room_id)
        assert room.name == "Hall"
        assert (room.graph_x, room.graph_y) == (200, -100)
        assert room.exits == {}

    def test_text_is_bound_not_interpolated(self, editor, queries):
        """Test names with quotes and SQL survive unchanged."""
        name = "O'Brien's \"Bar\"; DROP TABLE rooms; --"
        room_id = editor.create_room(name, "It's dusty.")
        assert queries.get_room(room_id).name == name
        assert len(queries.list_rooms()) == 3

    def test_update_room(self, editor, queries):
        editor.update_room(CAVE_ID, "Bright Cave", "Sunlight pours in.")
        cave = queries.get_room(CAVE_ID)
        assert cave.name == "Bright Cave"
        assert cave.description == "Sunlight pours in."

    def test_update_missing_room(self, editor):
        with pytest.raises(NotFoundError):
            editor.update_room(999, "Nowhere", "Nothing.")

    def test_connect_is_one_way(self, editor, queries):
        """Test connecting only sets the given direction of the given room."""
        hall = editor.create_room("Hall", "A hall.")
        editor.connect_rooms(CAVE_ID, "east", hall)

        assert queries.get_room(CAVE_ID).get_exit(Direction.EAST) == hall
        assert queries.get_room(hall).exits == {}

    def test_disconnect(self, editor, queries):
        editor.disconnect_room(CAVE_ID, Direction.SOUTH)
        assert queries.get_room(CAVE_ID).get_exit("south") is None
        assert queries.get_room(PATH_ID).get_exit("north") == CAVE_ID

    @pytest.mark.parametrize("direction", ["up", "", "northeast", "n0rth"])
    def test_bad_direction(self, editor, direction):
        """Test invalid direction tokens are rejected before touching the store."""
        with pytest.raises(BadValueError):
            editor.connect_rooms(CAVE_ID, direction, PATH_ID)


class TestDeleteRoom:
    """Tests for deleting rooms."""

    def test_delete_clears_references(self, editor, queries):
        """Test neighbors pointing at a deleted room are cleared."""
        hall = editor.create_room("Hall", "A hall.")
        editor.connect_rooms(CAVE_ID, "west", hall)
        editor.connect_rooms(PATH_ID, "east", hall)

        editor.delete_room(hall)

        assert queries.get_room(CAVE_ID).get_exit("west") is None
        assert queries.get_room(PATH_ID).get_exit("east") is None
        with pytest.raises(NotFoundError):
            queries.get_room(hall)

    def test_delete_cascades_to_room_content(self, database, editor):
        """Test exit conditions, actions and placements in the room go with it."""
        editor.create_exit_condition(PATH_ID, "north")
        editor.create_item_action(STONE_ID, "remove_item", room_id=PATH_ID, target_item_id=STICK_ID)

        editor.delete_room(PATH_ID)

        assert count(database, ExitCondition) == 0
        assert count(database, ItemAction) == 0
        with database.session() as session:
            assert session.scalars(select(ItemLocation).where(ItemLocation.room_id == PATH_ID)).all() == []

    def test_delete_current_room_moves_player(self, editor, mutations, queries):
        """Test the player is moved out of a room being deleted."""
        mutations.move_to_room(PATH_ID)
        editor.delete_room(PATH_ID)
        assert queries.get_game_state().current_room_id == CAVE_ID

    def test_delete_starting_room_redirects_metadata(self, editor, queries):
        """Test the starting room moves to a remaining room."""
        editor.delete_room(CAVE_ID)
        assert queries.get_metadata("starting_room_id") == str(PATH_ID)
        assert queries.get_game_state().current_room_id == PATH_ID

    def test_last_room_guard(self, database, editor, queries):
        """Test the only remaining room cannot be deleted."""
        editor.delete_room(PATH_ID)

        with pytest.raises(LastRoomError) as exc_info:
            editor.delete_room(CAVE_ID)

        assert isinstance(exc_info.value, StorageFaultError)
        assert [room.id for room in queries.list_rooms()] == [CAVE_ID]
        assert queries.get_game_state().current_room_id == CAVE_ID
        assert count(database, Room) == 1

    def test_delete_missing_room(self, editor):
        with pytest.raises(NotFoundError):
            editor.delete_room(999)

    def test_failed_delete_rolls_back(self, database, editor, queries):
        """Test a delete failing on its final write undoes the earlier redirects."""
        with database.session() as session:
            session.execute(
                text(
                    "CREATE TRIGGER keep_rooms BEFORE DELETE ON rooms "
                    "BEGIN SELECT RAISE(ABORT, 'rooms are locked'); END"
                )
            )

        with pytest.raises(StorageFaultError):
            editor.delete_room(CAVE_ID)

        assert queries.get_game_state().current_room_id == CAVE_ID
        assert queries.get_metadata("starting_room_id") == str(CAVE_ID)
        assert queries.get_room(PATH_ID).get_exit("north") == CAVE_ID
        assert count(database, Room) == 2


class TestItems:
    """Tests for item authoring."""

    def test_create_item_defaults(self, editor, queries):
        """Test a new item gets default flags and an inventory placement."""
        item_id = editor.create_item("Coin", "A gold coin.")
        item = queries.get_item(item_id)
        assert item.can_take is True
        assert item.can_use is False
        assert item.is_visible is True
        assert queries.get_item_location(item_id) is None

    def test_empty_strings_stored_as_null(self, editor, queries):
        item_id = editor.create_item("Coin", "A gold coin.", room_description="", use_message="")
        item = queries.get_item(item_id)
        assert item.room_description is None
        assert item.use_message is None

    def test_update_item(self, editor, queries):
        editor.update_item(STONE_ID, "Pebble", "A tiny pebble.", "A pebble lies here.")
        item = queries.get_item(STONE_ID)
        assert (item.name, item.room_description) == ("Pebble", "A pebble lies here.")

    def test_place_item_upserts(self, database, editor, queries):
        """Test placing replaces the single placement row."""
        editor.place_item(STONE_ID, CAVE_ID)
        editor.place_item(STONE_ID, None)
        assert queries.get_item_location(STONE_ID) is None
        assert count(database, ItemLocation) == 2

    def test_delete_item_cascades(self, database, editor):
        """Test deleting an item removes its placement, actions and combinations."""
        rope = editor.create_item("Rope", "A rope.", room_id=CAVE_ID)
        editor.create_item_action(rope, "unlock_exit", target_direction="north")
        editor.create_combination(STONE_ID, rope, STICK_ID)

        editor.delete_item(rope)

        assert count(database, ItemLocation) == 2
        assert count(database, ItemAction) == 0
        assert count(database, ItemCombination) == 0


class TestPuzzles:
    """Tests for actions, exit conditions and combinations."""

    def test_create_item_action_normalizes_optional_fields(self, editor, queries):
        """Test zero ids and empty messages are stored as absent."""
        action_id = editor.create_item_action(
            STONE_ID, "Reveal_Item", room_id=0, target_item_id=STICK_ID, success_message=""
        )
        action = queries.get_item_actions(STONE_ID, PATH_ID)[0]
        assert action.id == action_id
        assert action.room_id is None
        assert action.action_type == "reveal_item"
        assert action.success_message is None

    def test_empty_action_type_rejected(self, editor):
        with pytest.raises(BadValueError):
            editor.create_item_action(STONE_ID, "  ")

    def test_bad_target_direction_rejected(self, editor):
        with pytest.raises(BadValueError):
            editor.create_item_action(STONE_ID, "unlock_exit", target_direction="down")

    def test_delete_item_action(self, database, editor):
        action_id = editor.create_item_action(STONE_ID, "remove_item", target_item_id=STICK_ID)
        editor.delete_item_action(action_id)
        assert count(database, ItemAction) == 0

    def test_exit_condition_lifecycle(self, editor, queries):
        """Test an exit condition locks, carries its message, and can be removed."""
        editor.create_exit_condition(CAVE_ID, "S", "Too dark to go on.", STICK_ID)
        condition = queries.get_exit_condition(CAVE_ID, Direction.SOUTH)
        assert condition.locked_message == "Too dark to go on."
        assert condition.required_item_id == STICK_ID
        assert queries.is_exit_locked(CAVE_ID, "south")

        editor.delete_exit_condition(CAVE_ID, "south")
        assert queries.get_exit_condition(CAVE_ID, "south") is None
        assert not queries.is_exit_locked(CAVE_ID, "south")

    def test_default_locked_message(self, editor, queries):
        editor.create_exit_condition(CAVE_ID, "north")
        assert queries.get_exit_condition(CAVE_ID, "north").locked_message == "The way is blocked."

    def test_duplicate_exit_condition(self, editor):
        editor.create_exit_condition(CAVE_ID, "north")
        with pytest.raises(StorageFaultError):
            editor.create_exit_condition(CAVE_ID, "north")

    def test_one_combination_per_pair(self, editor):
        """Test a second rule for the same unordered pair is rejected."""
        spear = editor.create_item("Spear", "A crude spear.")
        club = editor.create_item("Club", "A heavy club.")
        editor.create_combination(STONE_ID, STICK_ID, spear)
        with pytest.raises(StorageFaultError):
            editor.create_combination(STICK_ID, STONE_ID, club)

    def test_combination_with_itself(self, editor):
        with pytest.raises(BadValueError):
            editor.create_combination(STONE_ID, STONE_ID, STICK_ID)

    def test_combination_producing_an_input(self, editor, queries):
        """Test a rule whose result is one of its own inputs is rejected."""
        with pytest.raises(BadValueError):
            editor.create_combination(STONE_ID, STICK_ID, STONE_ID)
        with pytest.raises(BadValueError):
            editor.create_combination(STONE_ID, STICK_ID, STICK_ID)
        assert queries.get_combination(STONE_ID, STICK_ID) is None

    def test_delete_combination(self, editor, queries):
        spear = editor.create_item("Spear", "A crude spear.")
        editor.create_combination(STONE_ID, STICK_ID, spear)
        editor.delete_combination(STICK_ID, STONE_ID)
        assert queries.get_combination(STONE_ID, STICK_ID) is None


class TestStateOperations:
    """Tests for metadata, the initial snapshot and reset."""

    def test_set_metadata(self, editor, queries):
        editor.set_metadata("title", "The Long Dark")
        editor.set_metadata("author", "A. Writer")
        assert queries.get_metadata("title") == "The Long Dark"
        assert queries.get_metadata("author") == "A. Writer"

    def test_starting_room_must_exist(self, editor):
        with pytest.raises(BadValueError):
            editor.set_metadata("starting_room_id", "42")
        with pytest.raises(BadValueError):
            editor.set_metadata("starting_room_id", "cave")

    def test_save_as_initial_state(self, editor, mutations, queries):
        """Test committing makes current placements what reset restores."""
        mutations.move_item_to_room(STONE_ID, CAVE_ID)
        editor.save_as_initial_state()

        mutations.move_item_to_inventory(STONE_ID)
        editor.clear_game_state()

        assert queries.get_item_location(STONE_ID) == CAVE_ID

    def test_uncommitted_item_dropped_by_reset(self, editor, queries):
        """Test reset restores the snapshot exactly, without uncommitted items."""
        coin = editor.create_item("Coin", "A coin.", room_id=CAVE_ID)
        editor.clear_game_state()
        with pytest.raises(NotFoundError):
            queries.get_item_location(coin)

"""Tests for read-only world queries."""

import pytest
from sqlalchemy import text

from pathfinder.database import GameDatabase
from pathfinder.errors import BadValueError, NotFoundError, NotInitializedError, StorageFaultError
from pathfinder.game.queries import WorldQueries
from pathfinder.game.world import Direction

# Starter world ids
CAVE_ID = 1
PATH_ID = 2
STONE_ID = 1
STICK_ID = 2


class TestRooms:
    """Tests for room lookups."""

    def test_get_room(self, queries):
        """Test a room snapshot carries its exits."""
        cave = queries.get_room(CAVE_ID)
        assert cave.name == "Dark Cave"
        assert cave.get_exit(Direction.SOUTH) == PATH_ID
        assert cave.get_exit("north") is None
        assert cave.get_available_exits() == ["south"]

    def test_missing_room(self, queries):
        """Test a missing room is NotFound, distinct from not initialized."""
        with pytest.raises(NotFoundError):
            queries.get_room(999)

    def test_closed_store(self):
        """Test queries against a closed store raise NotInitializedError."""
        with pytest.raises(NotInitializedError):
            WorldQueries(GameDatabase()).get_room(1)

    def test_list_rooms(self, queries):
        """Test rooms come back in id order."""
        assert [room.id for room in queries.list_rooms()] == [CAVE_ID, PATH_ID]


class TestItems:
    """Tests for item listings."""

    def test_items_in_room(self, queries):
        """Test the starter items lie on the mountain path."""
        items = queries.get_items_in_room(PATH_ID)
        assert [item.id for item in items] == [STONE_ID, STICK_ID]
        assert queries.get_items_in_room(CAVE_ID) == []

    def test_hidden_item_not_listed(self, queries, editor):
        """Test hidden items stay out of room listings."""
        editor.create_item("Key", "A brass key.", is_visible=False, room_id=CAVE_ID)
        assert queries.get_items_in_room(CAVE_ID) == []

    def test_revealed_item_listed(self, queries, editor, mutations):
        """Test revealing a hidden item makes it listable."""
        key_id = editor.create_item("Key", "A brass key.", is_visible=False, room_id=CAVE_ID)
        mutations.set_item_visibility(key_id, True)
        assert [item.id for item in queries.get_items_in_room(CAVE_ID)] == [key_id]

    def test_removed_item_not_listed(self, queries, mutations):
        """Test removed items vanish from rooms and the inventory."""
        mutations.move_item_to_inventory(STONE_ID)
        mutations.remove_item_from_room(STONE_ID)
        mutations.remove_item_from_room(STICK_ID)
        assert queries.get_inventory_items() == []
        assert queries.get_items_in_room(PATH_ID) == []

    def test_inventory_starts_empty(self, queries):
        assert queries.get_inventory_items() == []

    def test_get_item_and_location(self, queries):
        """Test item lookups and placement lookups."""
        stone = queries.get_item(STONE_ID)
        assert stone.name == "Stone"
        assert stone.can_take is True
        assert queries.get_item_location(STONE_ID) == PATH_ID
        with pytest.raises(NotFoundError):
            queries.get_item(999)


class TestStateAndMetadata:
    """Tests for game state and metadata reads."""

    def test_game_state(self, queries):
        """Test a new game starts in the cave."""
        state = queries.get_game_state()
        assert state.current_room_id == CAVE_ID
        assert state.score == 0
        assert state.health == 100
        assert state.moves_count == 0

    def test_metadata(self, queries):
        """Test starter metadata values."""
        assert queries.get_metadata("title") == "Cave Adventure"
        assert queries.get_metadata("starting_room_id") == "1"
        assert queries.get_metadata("missing") is None
        assert set(queries.get_all_metadata()) == {"title", "author", "version", "starting_room_id"}


class TestPuzzleQueries:
    """Tests for action, exit and combination lookups."""

    def test_item_actions_include_global(self, queries, editor):
        """Test actions for the current room and for any room are both returned."""
        local = editor.create_item_action(STONE_ID, "reveal_item", room_id=CAVE_ID, target_item_id=STICK_ID)
        anywhere = editor.create_item_action(STONE_ID, "remove_item", target_item_id=STICK_ID)
        editor.create_item_action(STONE_ID, "remove_item", room_id=PATH_ID, target_item_id=STICK_ID)

        actions = queries.get_item_actions(STONE_ID, CAVE_ID)
        assert [action.id for action in actions] == [local, anywhere]
        assert actions[1].room_id is None

    def test_malformed_stored_direction(self, database, queries, editor):
        """Test a direction stored outside the canonical names reads as a storage fault."""
        editor.create_item_action(STONE_ID, "unlock_exit", target_direction="north")
        with database.session() as session:
            session.execute(text("UPDATE item_actions SET target_direction = 'North'"))

        with pytest.raises(StorageFaultError):
            queries.get_item_actions(STONE_ID, CAVE_ID)

    def test_exit_unlocked_without_condition(self, queries):
        """Test an exit with no condition is never locked."""
        assert queries.is_exit_locked(CAVE_ID, "south") is False

    def test_invalid_direction(self, queries):
        """Test direction tokens are validated."""
        with pytest.raises(BadValueError):
            queries.is_exit_locked(CAVE_ID, "up")

    def test_combination_is_unordered(self, queries, editor):
        """Test the combination rule is found from either order."""
        rope = editor.create_item("Rope", "A rope.", room_id=None)
        editor.create_combination(STICK_ID, STONE_ID, rope, "You make a rope.")
        assert queries.get_combination(STONE_ID, STICK_ID).result_item_id == rope
        assert queries.get_combination(STICK_ID, STONE_ID).result_item_id == rope
        assert queries.get_combination(STONE_ID, rope) is None

"""Tests for breadth-first room placement."""

from pathfinder.database import GameDatabase
from pathfinder.database.models import Room
from pathfinder.game.editor import WorldEditor
from pathfinder.game.layout import auto_layout, compute_layout, load_adjacency
from pathfinder.game.world import Direction

N, S, E, W = Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST


def graph(**links: dict[Direction, int]) -> dict[int, dict[Direction, int | None]]:
    """Build an adjacency map from keyword room ids like r1={S: 2}."""
    return {int(name[1:]): dict(neighbors) for name, neighbors in links.items()}


class TestComputeLayout:
    """Tests for the pure placement algorithm."""

    def test_single_room(self):
        assert compute_layout(graph(r1={}), 1) == {1: (0, 0)}

    def test_direction_offsets(self):
        """Test north is up (y - 1) and east is right (x + 1)."""
        positions = compute_layout(graph(r1={N: 2, S: 3, E: 4, W: 5}, r2={}, r3={}, r4={}, r5={}), 1)
        assert positions == {1: (0, 0), 2: (0, -1), 3: (0, 1), 4: (1, 0), 5: (-1, 0)}

    def test_cycle_terminates(self):
        """Test a square of rooms linked both ways is placed once each."""
        square = graph(
            r1={E: 2, S: 3},
            r2={W: 1, S: 4},
            r3={N: 1, E: 4},
            r4={N: 2, W: 3},
        )
        assert compute_layout(square, 1) == {1: (0, 0), 2: (1, 0), 3: (0, 1), 4: (1, 1)}

    def test_north_collision_probes_along_x(self):
        """Test a clash on a north placement moves the room sideways, not further north."""
        rooms = graph(
            r1={N: 3, E: 2},
            r2={N: 5},
            r3={E: 4},
            r4={},
            r5={},
        )
        positions = compute_layout(rooms, 1)
        # 4 takes (1, -1) before 5 asks for it
        assert positions[4] == (1, -1)
        assert positions[5] == (2, -1)

    def test_south_collision_probes_along_x(self):
        rooms = graph(
            r1={S: 2, E: 3},
            r2={E: 4},
            r3={S: 5},
            r4={},
            r5={},
        )
        positions = compute_layout(rooms, 1)
        assert positions[4] == (1, 1)
        assert positions[5] == (2, 1)

    def test_no_two_rooms_share_a_cell(self):
        """Test every placed room gets its own cell in a crowded graph."""
        rooms = graph(
            r1={N: 2, S: 3, E: 4, W: 5},
            r2={E: 6, W: 7},
            r3={E: 8, W: 9},
            r4={N: 10, S: 11},
            r5={N: 12, S: 13},
            r6={}, r7={}, r8={}, r9={}, r10={}, r11={}, r12={}, r13={},
        )
        positions = compute_layout(rooms, 1)
        assert len(positions) == 13
        assert len(set(positions.values())) == 13

    def test_deterministic(self):
        rooms = graph(r1={E: 2, S: 3}, r2={S: 3}, r3={N: 1, W: 4}, r4={})
        assert compute_layout(rooms, 1) == compute_layout(rooms, 1)

    def test_unreachable_rooms_left_out(self):
        """Test rooms only reachable against link direction are not placed."""
        rooms = graph(r1={E: 2}, r2={}, r3={W: 1})
        assert set(compute_layout(rooms, 1)) == {1, 2}

    def test_missing_start_room(self):
        assert compute_layout(graph(r1={}), 7) == {}
        assert compute_layout({}, 1) == {}

    def test_dangling_neighbor_ignored(self):
        assert compute_layout(graph(r1={E: 99}), 1) == {1: (0, 0)}


class TestAutoLayout:
    """Tests for laying out a stored world."""

    def test_scenario_two_rooms(self, tmp_path):
        """Test A south of B lands at (0, 0) and (0, 100)."""
        db = GameDatabase()
        db.create_new(tmp_path / "layout.db")
        editor = WorldEditor(db)

        a = editor.create_room("A", "Room A.")
        b = editor.create_room("B", "Room B.")
        editor.connect_rooms(a, "south", b)
        editor.connect_rooms(b, "north", a)

        placed = auto_layout(db, start_room_id=a)

        assert placed == {a: (0, 0), b: (0, 100)}
        assert load_adjacency(db)[a][Direction.SOUTH] == b
        db.close()

    def test_writes_scaled_coordinates(self, database, editor, queries):
        """Test coordinates are stored scaled and unreachable rooms keep theirs."""
        island = editor.create_room("Island", "Cut off.", graph_x=555, graph_y=-7)
        with database.session() as session:
            session.get(Room, 2).graph_y = 9999

        auto_layout(database)

        assert (queries.get_room(1).graph_x, queries.get_room(1).graph_y) == (0, 0)
        assert (queries.get_room(2).graph_x, queries.get_room(2).graph_y) == (0, 100)
        assert (queries.get_room(island).graph_x, queries.get_room(island).graph_y) == (555, -7)

    def test_custom_scale(self, database, queries):
        auto_layout(database, scale=40)
        assert queries.get_room(2).graph_y == 40

    def test_repeated_runs_match(self, database):
        assert auto_layout(database) == auto_layout(database)

    def test_missing_start_room_is_noop(self, database, queries):
        """Test a store without the start room is left alone."""
        assert auto_layout(database, start_room_id=42) == {}
        assert queries.get_room(2).graph_y == 100

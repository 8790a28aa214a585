"""Tests for the command line entry point."""

import pytest

from pathfinder.database import GameDatabase
from pathfinder.game.editor import WorldEditor
from pathfinder.game.queries import WorldQueries
from pathfinder.main import build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_layout_defaults(self):
        args = build_parser().parse_args(["layout", "world.db"])
        assert args.path == "world.db"
        assert args.start == 1


class TestCommands:
    """Tests for running CLI commands against a store."""

    def test_new(self, tmp_path, capsys):
        path = tmp_path / "cli.db"
        assert main(["new", str(path)]) == 0
        assert path.exists()
        assert "Created" in capsys.readouterr().out

    def test_layout(self, tmp_path):
        """Test layout rewrites coordinates of the starter rooms."""
        path = tmp_path / "cli.db"
        main(["new", str(path)])
        with GameDatabase() as db:
            db.open(path)
            WorldEditor(db).create_room("Loft", "A loft.", graph_x=3, graph_y=3)
            WorldEditor(db).connect_rooms(1, "east", 3)

        assert main(["layout", str(path)]) == 0

        with GameDatabase() as db:
            db.open(path)
            assert WorldQueries(db).get_room(3).graph_x == 100

    def test_commit_and_reset(self, tmp_path):
        """Test commit then reset restores the committed placements."""
        path = tmp_path / "cli.db"
        main(["new", str(path)])
        with GameDatabase() as db:
            db.open(path)
            WorldEditor(db).place_item(1, 1)

        assert main(["commit", str(path)]) == 0

        with GameDatabase() as db:
            db.open(path)
            WorldEditor(db).place_item(1, None)

        assert main(["reset", str(path)]) == 0

        with GameDatabase() as db:
            db.open(path)
            assert WorldQueries(db).get_item_location(1) == 1

    def test_missing_store_fails(self, tmp_path, capsys):
        assert main(["reset", str(tmp_path / "missing.db")]) == 1
        assert "Error" in capsys.readouterr().err

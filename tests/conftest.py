"""Shared fixtures for all tests."""

import io

import pytest

from pathfinder.config import get_settings
from pathfinder.database import GameDatabase
from pathfinder.game.editor import WorldEditor
from pathfinder.game.mutations import WorldMutations
from pathfinder.game.queries import WorldQueries
from pathfinder.game.text import Console


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the data directory at a temp dir so no test touches ./data.

    The settings cache is cleared before and after each test so environment
    changes take effect.
    """
    monkeypatch.setenv("PATHFINDER_DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def db_path(tmp_path):
    """Path for a fresh store file."""
    return tmp_path / "adventure.db"


@pytest.fixture
def database(db_path):
    """A new store holding the two-room starter world."""
    db = GameDatabase()
    db.create_new(db_path)
    yield db
    db.close()


@pytest.fixture
def queries(database):
    return WorldQueries(database)


@pytest.fixture
def mutations(database, queries):
    return WorldMutations(database, queries)


@pytest.fixture
def editor(database, mutations):
    return WorldEditor(database, mutations)


@pytest.fixture
def console():
    """Console writing uncolored text to a buffer."""
    return Console(stream=io.StringIO(), color=False)

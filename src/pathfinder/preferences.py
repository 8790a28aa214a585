"""
Remembered user preferences for Pathfinder.

Preferences live in a small YAML document next to the default store and
record which adventure store to reopen on the next start.
"""

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError

from pathfinder.config import Settings, get_settings
from pathfinder.database import GameDatabase
from pathfinder.errors import BadValueError, NotFoundError, StorageFaultError

logger = structlog.get_logger(__name__)


class WindowRect(BaseModel):
    """Last window frame, kept for front ends that have one."""

    left: int = 0
    top: int = 0
    right: int = 800
    bottom: int = 600


class Preferences(BaseModel):
    """Contents of the preferences file."""

    current_database: str | None = Field(default=None, description="Store to reopen")
    window_rect: WindowRect | None = None


def load_preferences(path: Path | None = None) -> Preferences:
    """
    Load preferences from a YAML file.

    A missing, empty or unreadable file yields default preferences; the
    problem is logged and otherwise ignored.

    Args:
        path: Preferences file (defaults to the configured location)

    Returns:
        Loaded preferences
    """
    path = path or get_settings().preferences_path
    if not path.exists():
        return Preferences()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("preferences_load_failed", path=str(path), error=str(e))
        return Preferences()

    if not isinstance(data, dict):
        return Preferences()

    try:
        return Preferences.model_validate(data)
    except ValidationError as e:
        logger.warning("preferences_invalid", path=str(path), error=str(e))
        return Preferences()


def save_preferences(preferences: Preferences, path: Path | None = None) -> None:
    """
    Write preferences to a YAML file, creating its directory if needed.

    Raises:
        StorageFaultError: If the file cannot be written
    """
    path = path or get_settings().preferences_path
    data: dict[str, Any] = preferences.model_dump(exclude_none=True)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)
    except OSError as e:
        raise StorageFaultError(f"Cannot write preferences {path}: {e}") from e

    logger.debug("preferences_saved", path=str(path))


def resolve_database(
    database: GameDatabase,
    preferences: Preferences,
    settings: Settings | None = None,
) -> str:
    """
    Open the store a new session should start with.

    Tries the remembered store first, then the default store, and creates
    the default store with the starter world when it is missing or cannot
    be opened. The chosen path is written back into preferences.

    Args:
        database: Closed or open database to open the store in
        preferences: Loaded preferences, updated in place
        settings: Settings naming the default store

    Returns:
        Path of the store that was opened

    Raises:
        StorageFaultError: If even the default store cannot be created
    """
    settings = settings or get_settings()

    remembered = preferences.current_database
    if remembered and Path(remembered).exists():
        try:
            database.open(remembered)
            logger.info("database_loaded_from_preferences", path=remembered)
            return remembered
        except (BadValueError, NotFoundError, StorageFaultError) as e:
            logger.warning("remembered_database_failed", path=remembered, error=str(e))

    default_path = settings.default_database_path
    if default_path.exists():
        try:
            database.open(default_path)
            preferences.current_database = str(default_path)
            logger.info("default_database_loaded", path=str(default_path))
            return str(default_path)
        except StorageFaultError as e:
            logger.warning("default_database_failed", path=str(default_path), error=str(e))

    database.create_new(default_path)
    preferences.current_database = str(default_path)
    logger.info("default_database_created", path=str(default_path))
    return str(default_path)

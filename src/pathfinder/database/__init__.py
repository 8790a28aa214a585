"""Schema and storage for Pathfinder adventure stores."""

from pathfinder.database.engine import GameDatabase

__all__ = ["GameDatabase"]

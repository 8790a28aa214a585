"""Pathfinder: world-state engine for room-and-item adventure games."""

__version__ = "0.1.0"

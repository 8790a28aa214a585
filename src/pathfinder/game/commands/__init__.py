"""Command system for the Pathfinder text player."""

from .base import Command, CommandContext, CommandRegistry, find_item

__all__ = ["Command", "CommandContext", "CommandRegistry", "find_item"]

"""Base SQLAlchemy models and helpers for Pathfinder."""

import time

from sqlalchemy import Enum
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def unix_now() -> int:
    """Current time as integer unix seconds, the resolution every timestamp column uses."""
    return int(time.time())


def value_enum(enum_cls: type) -> Enum:
    """
    Column type storing an enum by its lowercase value (e.g. 'north').

    Args:
        enum_cls: The enum class to store

    Returns:
        SQLAlchemy Enum type persisting member values instead of member names
    """
    return Enum(
        enum_cls,
        values_callable=lambda obj: [e.value for e in obj],
        native_enum=False,
        create_constraint=False,
        length=20,
    )

"""Error taxonomy for the Pathfinder world-state engine."""


class PathfinderError(Exception):
    """Base class for every error raised by the engine."""

    pass


class NotInitializedError(PathfinderError):
    """Raised when an operation needs an open store and none is open."""

    def __init__(self, message: str = "No adventure database is open") -> None:
        super().__init__(message)


class BadValueError(PathfinderError, ValueError):
    """Raised for empty paths, unknown direction tokens and other malformed input."""

    pass


class NotFoundError(PathfinderError, LookupError):
    """Raised when a store file or a requested row does not exist."""

    pass


class StorageFaultError(PathfinderError):
    """Raised for any failure of the underlying store (I/O, constraint, statement)."""

    pass


class LastRoomError(StorageFaultError):
    """Raised when deleting the only remaining room."""

    def __init__(self, room_id: int) -> None:
        super().__init__(f"Cannot delete room {room_id}: it is the last room")
        self.room_id = room_id

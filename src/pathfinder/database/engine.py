"""SQLAlchemy engine and session management for Pathfinder adventure stores."""

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import structlog
from sqlalchemy import Engine, create_engine, event, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from pathfinder.config import get_settings
from pathfinder.errors import (
    BadValueError,
    NotFoundError,
    NotInitializedError,
    PathfinderError,
    StorageFaultError,
)

from .models import CORE_TABLES, Base
from .starter import create_starter_content

logger = structlog.get_logger(__name__)


def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """Turn on SQLite foreign key enforcement for every new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _require_path(path: str | Path | None) -> Path:
    """Reject empty store paths before touching the filesystem."""
    if path is None or str(path).strip() in ("", "."):
        raise BadValueError("Database path must not be empty")
    return Path(path)


class GameDatabase:
    """
    Exclusive owner of one adventure store.

    The query, mutation, editor and layout services borrow this object; they
    never open or close the store themselves.
    """

    def __init__(self) -> None:
        """Initialize with no store open."""
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None
        self._path: str = ""

    @property
    def is_open(self) -> bool:
        """Check if a store is currently open."""
        return self._engine is not None

    @property
    def path(self) -> str:
        """Get the path of the open store (empty when closed)."""
        return self._path

    def create_new(self, path: str | Path) -> None:
        """
        Create a new store with the full schema and the starter world.

        Any existing file at path is replaced. If schema or starter content
        creation fails the store is closed again.

        Args:
            path: File path for the new store

        Raises:
            BadValueError: If path is empty
            StorageFaultError: If the store cannot be created
        """
        db_path = _require_path(path)
        self.close()

        try:
            if db_path.exists():
                logger.info("removing_existing_database", path=str(db_path))
                db_path.unlink()
            db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageFaultError(f"Cannot write database at {db_path}: {e}") from e

        engine = self._connect(db_path)

        try:
            Base.metadata.create_all(engine)
            with self.session() as session:
                create_starter_content(session)
        except (SQLAlchemyError, PathfinderError) as e:
            logger.error("database_create_failed", path=str(db_path), error=str(e))
            self.close()
            if isinstance(e, StorageFaultError):
                raise
            raise StorageFaultError(f"Failed to create database at {db_path}: {e}") from e

        logger.info("database_created", path=str(db_path))

    def open(self, path: str | Path) -> None:
        """
        Open an existing store and check it has the core tables.

        Args:
            path: File path of the store

        Raises:
            BadValueError: If path is empty
            NotFoundError: If no file exists at path
            StorageFaultError: If the file cannot be opened or lacks the schema
        """
        db_path = _require_path(path)
        if not db_path.exists():
            raise NotFoundError(f"Database not found: {db_path}")

        self.close()
        self._connect(db_path)

        if not self.verify_schema():
            logger.error("database_schema_verification_failed", path=str(db_path))
            self.close()
            raise StorageFaultError(f"Not an adventure database: {db_path}")

        logger.info("database_opened", path=str(db_path))

    def verify_schema(self) -> bool:
        """
        Check that the four core tables exist.

        This is an existence check only, not a structural validation.

        Returns:
            True if rooms, items, game_state and game_metadata are all present
        """
        if self._engine is None:
            return False

        try:
            table_names = set(inspect(self._engine).get_table_names())
        except SQLAlchemyError as e:
            logger.warning("schema_inspection_failed", error=str(e))
            return False

        return all(name in table_names for name in CORE_TABLES)

    def close(self) -> None:
        """
        Close the store if one is open.

        Safe to call repeatedly. Never raises: a failed dispose is retried
        as a forced close, and a second failure is only logged.
        """
        if self._engine is not None:
            engine = self._engine
            try:
                engine.dispose()
            except Exception as e:
                logger.warning("database_close_failed", path=self._path, error=str(e))
                try:
                    engine.dispose(close=False)
                except Exception as forced_error:
                    logger.error(
                        "database_forced_close_failed",
                        path=self._path,
                        error=str(forced_error),
                    )
            logger.debug("database_closed", path=self._path)

        self._engine = None
        self._session_factory = None
        self._path = ""

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Context manager for one transaction against the open store.

        Commits when the block finishes, rolls back on any error. SQLAlchemy
        errors and stored values outside an enum column's members surface as
        StorageFaultError.

        Yields:
            A database session

        Raises:
            NotInitializedError: If no store is open
            StorageFaultError: If the store reports a failure

        Example:
            with database.session() as session:
                room = session.get(Room, room_id)
        """
        if self._session_factory is None:
            raise NotInitializedError()

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("database_transaction_failed", error=str(e))
            raise StorageFaultError(str(e)) from e
        except PathfinderError:
            session.rollback()
            raise
        except LookupError as e:
            # Raised by enum columns reading a value that is not a member
            session.rollback()
            logger.error("database_bad_stored_value", error=str(e))
            raise StorageFaultError(f"Malformed stored value: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _connect(self, db_path: Path) -> Engine:
        """Create the engine and session factory for a store file."""
        settings = get_settings()
        try:
            engine = create_engine(f"sqlite:///{db_path}", echo=settings.debug)
            event.listen(engine, "connect", _enable_foreign_keys)
            # Surface unreadable files here rather than on first query
            with engine.connect():
                pass
        except SQLAlchemyError as e:
            logger.error("database_connect_failed", path=str(db_path), error=str(e))
            raise StorageFaultError(f"Cannot open database {db_path}: {e}") from e

        self._engine = engine
        self._session_factory = sessionmaker(engine, expire_on_commit=False)
        self._path = str(db_path)
        return engine

    def __enter__(self) -> "GameDatabase":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __del__(self) -> None:
        if getattr(self, "_engine", None) is not None:
            self.close()

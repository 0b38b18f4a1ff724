"""Key-value backends holding the persisted waitlist slots.

A backend is a tiny string-to-string map, the local-storage analogue the
waitlist store writes through. Three implementations are provided:

- ``InMemoryBackend`` for tests and throwaway sessions
- ``JsonFileBackend`` keeping every slot in one JSON document on disk
- ``SqlBackend`` keeping slots in a SQLAlchemy table (SQLite by default)
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator

from sqlalchemy import DateTime, String, Text, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker

from waitlyst.errors import StorageError
from waitlyst.logging_config import get_logger
from waitlyst.settings import Settings, settings

logger = get_logger(__name__)


class KeyValueBackend(ABC):
    """Abstract string slot storage."""

    name: str = "base"

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the slot value, or None when the slot is empty."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Write a slot, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a slot. Removing an empty slot is a no-op."""
        pass


class InMemoryBackend(KeyValueBackend):
    """Dictionary-backed slots, lost when the process exits."""

    name = "memory"

    def __init__(self, initial: dict[str, str] | None = None):
        self._slots: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value

    def delete(self, key: str) -> None:
        self._slots.pop(key, None)


class JsonFileBackend(KeyValueBackend):
    """All slots stored as one JSON object in a file.

    Writes go to a temporary file in the same directory which then replaces
    the original, so a crash never leaves a half-written document behind.
    """

    name = "file"

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError:
            logger.warning("storage_file_unreadable", path=str(self.path))
            return {}
        except OSError as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            logger.warning("storage_file_unexpected_shape", path=str(self.path))
            return {}

        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, slots: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(slots, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e
        finally:
            # Gone after a successful replace
            Path(tmp_name).unlink(missing_ok=True)

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        slots = self._read_all()
        slots[key] = value
        self._write_all(slots)

    def delete(self, key: str) -> None:
        slots = self._read_all()
        if slots.pop(key, None) is not None:
            self._write_all(slots)


class Base(DeclarativeBase):
    """Base class for SQL storage models."""

    pass


class StorageSlot(Base):
    """One persisted slot."""

    __tablename__ = "storage_slots"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<StorageSlot(key='{self.key}')>"


class SqlBackend(KeyValueBackend):
    """Slots stored in a database table through SQLAlchemy."""

    name = "sql"

    def __init__(self, database_url: str | None = None):
        """Initialize database connection and create the slot table.

        Args:
            database_url: Database URL (defaults to settings)
        """
        self.database_url = database_url or settings.database_url
        self.engine = create_engine(self.database_url, pool_pre_ping=True)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )
        Base.metadata.create_all(bind=self.engine)
        logger.info("sql_backend_initialized", url=self.database_url)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Provide a transactional scope for slot operations.

        Yields:
            Database session
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Database error: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get(self, key: str) -> str | None:
        with self.session() as session:
            slot = session.get(StorageSlot, key)
            return slot.value if slot else None

    def set(self, key: str, value: str) -> None:
        with self.session() as session:
            slot = session.get(StorageSlot, key)
            if slot:
                slot.value = value
            else:
                session.add(StorageSlot(key=key, value=value))

    def delete(self, key: str) -> None:
        with self.session() as session:
            slot = session.get(StorageSlot, key)
            if slot:
                session.delete(slot)

    def dispose(self) -> None:
        """Release pooled connections."""
        self.engine.dispose()


def create_backend(config: Settings | None = None) -> KeyValueBackend:
    """Build the backend selected by ``storage_backend``.

    Args:
        config: Settings to use (defaults to the global settings)

    Returns:
        Configured backend
    """
    config = config or settings

    if config.storage_backend == "memory":
        return InMemoryBackend()
    if config.storage_backend == "file":
        return JsonFileBackend(config.data_dir / config.storage_file)
    if config.storage_backend == "sql":
        return SqlBackend(config.database_url)

    raise ValueError(f"Unsupported storage backend: {config.storage_backend}")

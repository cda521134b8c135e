"""Thin SQLAlchemy adapter wrapping photo table operations."""

from functools import lru_cache
from typing import Protocol

from sqlalchemy import Engine, create_engine, delete, select
from sqlalchemy.orm import sessionmaker

from core.config import PhotoAlbumSettings, get_settings
from core.infrastructure.sql.photo_table import Base, PhotoRow


class SqlAdapterProtocol(Protocol):
    """Minimal SQL adapter protocol (repository-facing)."""

    def insert_row(self, *, row: PhotoRow) -> int: ...
    def get_row(self, *, photo_id: int) -> PhotoRow | None: ...
    def delete_row(self, *, photo_id: int) -> int: ...
    def select_rows(self) -> list[PhotoRow]: ...


@lru_cache(maxsize=8)
def get_engine(database_url: str) -> Engine:
    """Return one engine per database URL, creating the schema on first use."""
    engine = create_engine(database_url, pool_pre_ping=True)
    Base.metadata.create_all(engine)
    return engine


class SqlAdapter:
    """Low-level SQL operations (mechanical, no error handling).

    This adapter:
    - Wraps a SQLAlchemy engine and session factory
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, settings: PhotoAlbumSettings | None = None) -> None:
        """Bind a session factory to the configured database."""
        settings = settings or get_settings()

        self._sessions = sessionmaker(
            bind=get_engine(settings.database_url),
            expire_on_commit=False,
        )

    def insert_row(self, *, row: PhotoRow) -> int:
        """Insert a row and return its generated id.

        Raises SQLAlchemy exceptions - caught by domain implementation.
        """
        with self._sessions.begin() as session:
            session.add(row)
            session.flush()
            return row.id

    def get_row(self, *, photo_id: int) -> PhotoRow | None:
        """Retrieve a row by primary key.

        Raises SQLAlchemy exceptions - caught by domain implementation.
        """
        with self._sessions() as session:
            return session.get(PhotoRow, photo_id)

    def delete_row(self, *, photo_id: int) -> int:
        """Delete a row by primary key and return the affected row count.

        Raises SQLAlchemy exceptions - caught by domain implementation.
        """
        with self._sessions.begin() as session:
            result = session.execute(delete(PhotoRow).where(PhotoRow.id == photo_id))
            return result.rowcount

    def select_rows(self) -> list[PhotoRow]:
        """Select all rows, newest upload first.

        Raises SQLAlchemy exceptions - caught by domain implementation.
        """
        statement = select(PhotoRow).order_by(
            PhotoRow.uploaded_at.desc(),
            PhotoRow.id.desc(),
        )
        with self._sessions() as session:
            return list(session.scalars(statement))

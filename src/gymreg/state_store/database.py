"""Database connection manager for State Store."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from gymreg.state_store.models import Base

if TYPE_CHECKING:
    from sqlalchemy import Engine

MEMORY = ":memory:"


class Database:
    """Database connection manager.

    Accepts either a SQLite file path, ":memory:", or a full SQLAlchemy URL.
    SQLite connections get foreign key enforcement turned on.
    """

    def __init__(self, db_path: str = "gymreg.db") -> None:
        """Initialize database connection.

        Args:
            db_path: SQLite file path, ":memory:", or an SQLAlchemy URL
                     such as "postgresql+psycopg://...".
        """
        self.db_path = db_path
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def url(self) -> str:
        """SQLAlchemy URL for the configured database."""
        if "://" in self.db_path:
            return self.db_path
        return f"sqlite:///{self.db_path}"

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def engine(self) -> Engine:
        """Get or create the database engine."""
        if self._engine is not None:
            return self._engine

        if self.db_path == MEMORY:
            # One shared connection so every session sees the same in-memory
            # database, also from TestClient's worker thread
            self._engine = create_engine(
                "sqlite:///:memory:",
                echo=False,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            if self.is_sqlite and "://" not in self.db_path:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self._engine = create_engine(self.url, echo=False)

        if self.is_sqlite:

            @event.listens_for(self._engine, "connect")
            def set_sqlite_pragma(dbapi_connection: object, _connection_record: object) -> None:
                cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                expire_on_commit=False,
            )
        return self._session_factory

    def create_tables(self) -> None:
        """Create all tables if they don't exist."""
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        """Get a new database session."""
        return self.session_factory()

    def close(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

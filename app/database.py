"""Database engine and session management."""

from collections.abc import Generator

import sqlite_vec
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from app.config import settings

# Create engine with SQLite
connect_args = {"check_same_thread": False}
engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    connect_args=connect_args,
)


def _load_sqlite_vec(dbapi_conn, _connection_record):
    """Load sqlite-vec extension when connection is created."""
    dbapi_conn.enable_load_extension(True)
    sqlite_vec.load(dbapi_conn)
    dbapi_conn.enable_load_extension(False)


def _enable_foreign_keys(dbapi_conn, _connection_record):
    """SQLite leaves foreign key enforcement off unless asked per connection."""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def register_sqlite_listeners(target: Engine) -> None:
    """Attach the per-connection SQLite setup to an engine."""
    event.listen(target, "connect", _load_sqlite_vec)
    event.listen(target, "connect", _enable_foreign_keys)


register_sqlite_listeners(engine)


def create_db_and_tables():
    """Create all database tables."""
    SQLModel.metadata.create_all(engine)


def get_session() -> Generator[Session, None, None]:
    """Get a database session."""
    with Session(engine) as session:
        yield session

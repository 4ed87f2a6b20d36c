"""
Database configuration for HTTP Workbench.

Uses SQLite as the history storage backend with SQLAlchemy ORM.
"""

from pathlib import Path

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given database URL.

    For file-based SQLite URLs the parent directory of the database file
    is created if it does not exist yet.

    Args:
        database_url: SQLAlchemy database URL
        echo: Set to True for SQL query logging

    Returns:
        A configured SQLAlchemy engine
    """
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        # Engine is shared between the event loop and the worker threads
        connect_args["check_same_thread"] = False
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(database_url, connect_args=connect_args, echo=echo)

    if url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", set_sqlite_pragma)

    return engine


def set_sqlite_pragma(dbapi_connection, connection_record):
    """Use write-ahead logging so readers are not blocked by the writer."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def init_db(engine: Engine) -> None:
    """
    Initialize the database by creating all tables.

    Safe to call repeatedly; existing tables are left untouched.
    """
    Base.metadata.create_all(bind=engine)

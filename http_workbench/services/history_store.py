"""
History store for saving and listing completed requests.

The store owns a single engine for its SQLite file. Writes go through one
lock so that concurrent saves are applied one after another; reads run
without it.
"""

import json
import threading
from datetime import datetime, timezone

from loguru import logger
from pydantic import ValidationError
from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .. import config
from ..database import create_db_engine, init_db
from ..exceptions import SerializationError, StoreError
from ..models.history import History
from ..schemas.history import HistoryEntry
from ..schemas.request import HttpMethod, KeyValue, RequestSpec
from ..schemas.response import ResponseRecord


def encode_pairs(pairs: list[KeyValue]) -> str:
    """Encode headers or query params as a JSON array of {"key", "value"} objects."""
    return json.dumps([pair.model_dump() for pair in pairs])


def decode_pairs(raw: str | None) -> list[KeyValue]:
    """
    Decode a column written by encode_pairs.

    Anything that is not a well-formed array of key/value objects decodes
    to an empty list, so rows written in an older format stay readable.
    """
    if not raw:
        return []
    try:
        data = json.loads(raw)
        if not isinstance(data, list):
            return []
        return [KeyValue.model_validate(item) for item in data]
    except (ValueError, ValidationError):
        return []


def row_to_entry(row: History) -> HistoryEntry:
    """
    Convert a stored row back into a HistoryEntry.

    Raises:
        SerializationError: If the stored method is not a known HTTP method,
            or another column holds a value that cannot be decoded
    """
    try:
        return HistoryEntry(
            id=row.id,
            created_at=datetime.fromisoformat(row.created_at),
            request=RequestSpec(
                method=HttpMethod(row.method),
                url=row.url,
                query_params=decode_pairs(row.query_params),
                headers=decode_pairs(row.headers),
                body=row.body or ""
            ),
            response=ResponseRecord(
                status=row.status,
                body=row.response_body or "",
                response_time_ms=row.response_time_ms
            )
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"History entry {row.id} could not be decoded: {e}") from e


class HistoryStore:
    """
    Append-only store of completed request/response pairs.

    The backing file and its schema are created on first use.

    Args:
        database_url: SQLAlchemy URL of the backing database
    """

    def __init__(self, database_url: str = config.DATABASE_URL):
        self.database_url = database_url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None
        self._write_lock = threading.Lock()
        self._init_lock = threading.Lock()

    def _sessions(self) -> sessionmaker[Session]:
        """Open the backing store and create its schema if needed."""
        if self._session_factory is not None:
            return self._session_factory

        with self._init_lock:
            if self._session_factory is None:
                try:
                    engine = create_db_engine(self.database_url)
                    init_db(engine)
                except (OSError, SQLAlchemyError) as e:
                    raise StoreError(f"Failed to open history store: {e}") from e
                logger.debug("Opened history store at {}", self.database_url)
                self._engine = engine
                self._session_factory = sessionmaker(
                    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
                )
        return self._session_factory

    def append(self, entry: HistoryEntry) -> HistoryEntry:
        """
        Save a completed request to history.

        ``created_at`` is set to the current time; duplicates are kept.

        Args:
            entry: The request that was sent and the response received

        Returns:
            The stored entry with its id and creation time

        Raises:
            StoreError: If the store cannot be opened or written
        """
        session_factory = self._sessions()
        request, response = entry.request, entry.response

        with self._write_lock:
            history = History(
                method=request.method.value,
                url=request.url,
                query_params=encode_pairs(request.query_params),
                headers=encode_pairs(request.headers),
                body=request.body,
                status=response.status,
                response_body=response.body,
                response_time_ms=response.response_time_ms,
                created_at=datetime.now(timezone.utc).isoformat()
            )
            try:
                with session_factory() as db:
                    db.add(history)
                    db.commit()
                    db.refresh(history)
            except SQLAlchemyError as e:
                raise StoreError(f"Failed to save history entry: {e}") from e

        logger.debug("Saved history entry {} ({} {})", history.id, history.method, history.url)
        return row_to_entry(history)

    def list_all(self) -> list[HistoryEntry]:
        """
        Get every history entry, oldest first.

        Raises:
            StoreError: If the store cannot be opened or read
            SerializationError: If a stored row cannot be decoded
        """
        session_factory = self._sessions()
        try:
            with session_factory() as db:
                rows = db.scalars(select(History).order_by(History.id)).all()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to read history: {e}") from e

        return [row_to_entry(row) for row in rows]

    def close(self) -> None:
        """Release the engine's connections."""
        if self._engine is not None:
            self._engine.dispose()

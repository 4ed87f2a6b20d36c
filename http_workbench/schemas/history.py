"""
Pydantic schemas for request history.

A history entry pairs the request that was sent with the response
that came back.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .request import RequestSpec
from .response import ResponseRecord


class HistoryEntry(BaseModel):
    """
    Schema for a completed request/response pair.

    ``id`` and ``created_at`` are assigned by the history store; any values
    supplied by the caller on save are ignored.
    """
    request: RequestSpec
    response: ResponseRecord
    id: int | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(frozen=True)

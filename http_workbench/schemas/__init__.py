"""
Pydantic schemas package.

Exports all schemas for API request/response validation.
"""

from .request import (
    HttpMethod,
    METHOD_SENDS_BODY,
    KeyValue,
    RequestSpec,
)

from .response import ResponseRecord

from .history import HistoryEntry

from .highlight import (
    HighlightRequest,
    HighlightResponse,
)

from .command import (
    SendRequestArgs,
    SaveRequestArgs,
    HighlightCodeArgs,
    CommandResult,
)

__all__ = [
    # Request schemas
    "HttpMethod",
    "METHOD_SENDS_BODY",
    "KeyValue",
    "RequestSpec",
    # Response schemas
    "ResponseRecord",
    # History schemas
    "HistoryEntry",
    # Highlight schemas
    "HighlightRequest",
    "HighlightResponse",
    # Command schemas
    "SendRequestArgs",
    "SaveRequestArgs",
    "HighlightCodeArgs",
    "CommandResult",
]

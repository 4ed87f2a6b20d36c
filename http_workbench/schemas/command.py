"""
Pydantic schemas for the command endpoint.

Each command takes a JSON argument bundle and answers with
``{"result": ...}``.
"""

from typing import Any

from pydantic import BaseModel

from .history import HistoryEntry
from .request import RequestSpec


class SendRequestArgs(BaseModel):
    """Arguments of the ``send_request`` command."""
    args: RequestSpec


class SaveRequestArgs(BaseModel):
    """Arguments of the ``save_request`` command."""
    args: HistoryEntry


class HighlightCodeArgs(BaseModel):
    """Arguments of the ``highlight_code`` command."""
    code: str
    lang: str


class CommandResult(BaseModel):
    """Result envelope of a command. ``result`` is null for commands with no return value."""
    result: Any = None

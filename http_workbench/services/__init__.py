# Services package

from .dispatcher import RequestDispatcher, build_headers, build_url
from .history_store import HistoryStore
from .highlighter import SyntaxHighlighter

__all__ = [
    "RequestDispatcher",
    "build_headers",
    "build_url",
    "HistoryStore",
    "SyntaxHighlighter",
]

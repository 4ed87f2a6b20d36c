"""
Dependency functions for FastAPI routes.

The services are built once in the application lifespan and stored on
``app.state``. Tests replace them through ``app.dependency_overrides``.

Usage:
    @router.get("/items")
    def get_items(store: HistoryStore = Depends(get_history_store)):
        ...
"""

from fastapi import Request

from .services.dispatcher import RequestDispatcher
from .services.highlighter import SyntaxHighlighter
from .services.history_store import HistoryStore


def get_dispatcher(request: Request) -> RequestDispatcher:
    return request.app.state.dispatcher


def get_history_store(request: Request) -> HistoryStore:
    return request.app.state.history_store


def get_highlighter(request: Request) -> SyntaxHighlighter:
    return request.app.state.highlighter

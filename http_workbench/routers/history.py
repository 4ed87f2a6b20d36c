"""
History API routes.

Saves completed request/response pairs and lists them back.
History is append-only; there are no update or delete routes.
"""

from fastapi import APIRouter, Depends, status

from ..dependencies import get_history_store
from ..schemas.history import HistoryEntry
from ..services.history_store import HistoryStore


router = APIRouter(prefix="/api/history", tags=["history"])


@router.post("", status_code=status.HTTP_204_NO_CONTENT)
def save_request(
    entry: HistoryEntry,
    store: HistoryStore = Depends(get_history_store)
):
    """
    Save a completed request to history.

    Args:
        entry: The request sent and the response received
        store: History store
    """
    store.append(entry)
    return None


@router.get("", response_model=list[HistoryEntry])
def get_requests(store: HistoryStore = Depends(get_history_store)):
    """
    Get all history entries in storage order (oldest first).

    Args:
        store: History store

    Returns:
        List of HistoryEntry
    """
    return store.list_all()

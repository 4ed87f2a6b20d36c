"""
Syntax highlighting API routes.
"""

from fastapi import APIRouter, Depends

from ..dependencies import get_highlighter
from ..exceptions import ErrorResponse
from ..schemas.highlight import HighlightRequest, HighlightResponse
from ..services.highlighter import SyntaxHighlighter


router = APIRouter(prefix="/api/highlight", tags=["highlight"])


@router.post(
    "",
    response_model=HighlightResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown language"}}
)
def highlight_code(
    request: HighlightRequest,
    highlighter: SyntaxHighlighter = Depends(get_highlighter)
):
    """Render code as HTML with coloured spans."""
    return HighlightResponse(html=highlighter.render(request.code, request.language))

"""
Request dispatch API routes.

Sends an ad-hoc HTTP request and returns its status, body and timing.
The exchange is not saved; the caller decides whether to keep it.
"""

from fastapi import APIRouter, Depends

from ..dependencies import get_dispatcher
from ..exceptions import ErrorResponse
from ..schemas.request import RequestSpec
from ..schemas.response import ResponseRecord
from ..services.dispatcher import RequestDispatcher


router = APIRouter(prefix="/api/send", tags=["dispatch"])


@router.post(
    "",
    response_model=ResponseRecord,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid header"},
        502: {"model": ErrorResponse, "description": "Network error"},
    }
)
async def send_request(
    spec: RequestSpec,
    dispatcher: RequestDispatcher = Depends(get_dispatcher)
):
    """
    Dispatch an HTTP request.

    Args:
        spec: Method, URL, query params, headers and body to send
        dispatcher: Request dispatcher

    Returns:
        ResponseRecord with status, body and response time. 4xx and 5xx
        statuses are returned here, not as errors.
    """
    return await dispatcher.dispatch(spec)

"""
Command API route.

A single endpoint that takes a command name and a JSON argument bundle,
for front ends that talk to the core through named commands:

    send_request    {"args": RequestSpec}       -> ResponseRecord
    save_request    {"args": HistoryEntry}      -> null
    get_requests    (no arguments)              -> list of HistoryEntry
    highlight_code  {"code": ..., "lang": ...}  -> markup string

Errors are reported the same way as on the resource routes.
"""

from typing import Any, Awaitable, Callable, TypeVar

from fastapi import APIRouter, Body, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel, ValidationError

from ..dependencies import get_dispatcher, get_highlighter, get_history_store
from ..exceptions import BadRequestError, SerializationError
from ..schemas.command import (
    CommandResult,
    HighlightCodeArgs,
    SaveRequestArgs,
    SendRequestArgs,
)
from ..services.dispatcher import RequestDispatcher
from ..services.highlighter import SyntaxHighlighter
from ..services.history_store import HistoryStore


router = APIRouter(prefix="/api/invoke", tags=["commands"])

ArgsT = TypeVar("ArgsT", bound=BaseModel)


class Services:
    """The services a command may use."""

    def __init__(
        self,
        dispatcher: RequestDispatcher = Depends(get_dispatcher),
        store: HistoryStore = Depends(get_history_store),
        highlighter: SyntaxHighlighter = Depends(get_highlighter)
    ):
        self.dispatcher = dispatcher
        self.store = store
        self.highlighter = highlighter


def parse_args(model: type[ArgsT], payload: dict[str, Any] | None) -> ArgsT:
    """
    Validate an argument bundle.

    Raises:
        SerializationError: If the bundle does not match the command's arguments
    """
    try:
        return model.model_validate(payload or {})
    except ValidationError as e:
        raise SerializationError(f"Invalid arguments: {e}") from e


async def send_request(services: Services, payload: dict[str, Any] | None) -> Any:
    args = parse_args(SendRequestArgs, payload)
    response = await services.dispatcher.dispatch(args.args)
    return response.model_dump()


async def save_request(services: Services, payload: dict[str, Any] | None) -> Any:
    args = parse_args(SaveRequestArgs, payload)
    await run_in_threadpool(services.store.append, args.args)
    return None


async def get_requests(services: Services, payload: dict[str, Any] | None) -> Any:
    entries = await run_in_threadpool(services.store.list_all)
    return [entry.model_dump(mode="json") for entry in entries]


async def highlight_code(services: Services, payload: dict[str, Any] | None) -> Any:
    args = parse_args(HighlightCodeArgs, payload)
    return await run_in_threadpool(services.highlighter.render, args.code, args.lang)


COMMANDS: dict[str, Callable[[Services, dict[str, Any] | None], Awaitable[Any]]] = {
    "send_request": send_request,
    "save_request": save_request,
    "get_requests": get_requests,
    "highlight_code": highlight_code,
}


@router.post("/{command}", response_model=CommandResult)
async def invoke(
    command: str,
    payload: dict[str, Any] | None = Body(default=None),
    services: Services = Depends()
):
    """
    Run a named command.

    Args:
        command: One of send_request, save_request, get_requests, highlight_code
        payload: The command's argument bundle

    Raises:
        BadRequestError: If the command name is unknown
    """
    handler = COMMANDS.get(command)
    if handler is None:
        raise BadRequestError(f"Unknown command: {command}")
    return CommandResult(result=await handler(services, payload))

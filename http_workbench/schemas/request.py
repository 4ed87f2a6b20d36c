"""
Pydantic schemas for HTTP request descriptions.

Defines the closed set of HTTP methods and the request spec sent
to the dispatcher.
"""

from enum import Enum

from pydantic import BaseModel


class HttpMethod(str, Enum):
    """HTTP methods supported by the dispatcher."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"

    @property
    def sends_body(self) -> bool:
        """Whether the request body is transmitted for this method."""
        return METHOD_SENDS_BODY[self]


METHOD_SENDS_BODY: dict[HttpMethod, bool] = {
    HttpMethod.GET: False,
    HttpMethod.POST: True,
    HttpMethod.PUT: True,
    HttpMethod.DELETE: False,
    HttpMethod.PATCH: True,
    HttpMethod.HEAD: False,
    HttpMethod.OPTIONS: False,
    HttpMethod.TRACE: False,
    HttpMethod.CONNECT: False,
}


class KeyValue(BaseModel):
    """A single header or query parameter entry."""
    key: str
    value: str


class RequestSpec(BaseModel):
    """
    Schema for a request to dispatch.

    Headers and query params are ordered lists so that the order the user
    entered them in is kept. Entries with an empty key are skipped when the
    request is sent.
    """
    method: HttpMethod
    url: str
    query_params: list[KeyValue] = []
    headers: list[KeyValue] = []
    body: str = ""

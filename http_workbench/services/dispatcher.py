"""
Request dispatch service for sending HTTP requests.

This service turns a RequestSpec into a live HTTP exchange using httpx,
measures how long it took, and returns the status and body. Only
transport-level failures are errors; every HTTP status is a result.
"""

import re
import time
from urllib.parse import quote

import httpx
from loguru import logger

from .. import config
from ..exceptions import InvalidHeaderError, NetworkError
from ..schemas.request import KeyValue, RequestSpec
from ..schemas.response import ResponseRecord


# RFC 7230 token: the allowed characters of a header field name
HEADER_NAME_PATTERN = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")

# Tab, space and visible ASCII
HEADER_VALUE_PATTERN = re.compile(r"^[\t\x20-\x7e]*$")

# Redirect hops followed before the dispatch fails with NetworkError
MAX_REDIRECTS = 10


def build_url(url: str, query_params: list[KeyValue]) -> str:
    """
    Append query parameters to a URL.

    Keys and values are percent-encoded. Parameters go after ``?``, or after
    ``&`` when the URL already carries a query string. A fragment is kept at
    the end of the URL.

    Example:
        >>> build_url("http://x/a?b=1", [KeyValue(key="c d", value="é")])
        'http://x/a?b=1&c%20d=%C3%A9'
    """
    pairs = [
        f"{quote(param.key, safe='')}={quote(param.value, safe='')}"
        for param in query_params
        if param.key
    ]
    if not pairs:
        return url

    base, hash_mark, fragment = url.partition("#")
    if "?" in base:
        separator = "" if base.endswith(("?", "&")) else "&"
    else:
        separator = "?"
    return base + separator + "&".join(pairs) + hash_mark + fragment


def build_headers(headers: list[KeyValue]) -> list[tuple[str, str]]:
    """
    Validate headers and convert them to (name, value) pairs.

    Entries with an empty key are skipped. When a name repeats (ignoring
    case) only its last value is sent, in the position of its first occurrence.

    Raises:
        InvalidHeaderError: If any name or value is malformed
    """
    result: dict[str, tuple[str, str]] = {}
    for header in headers:
        if not header.key:
            continue
        if not HEADER_NAME_PATTERN.match(header.key):
            raise InvalidHeaderError(f"Invalid header name: {header.key!r}")
        if not HEADER_VALUE_PATTERN.match(header.value):
            raise InvalidHeaderError(
                f"Invalid value for header {header.key!r}: {header.value!r}"
            )
        result[header.key.lower()] = (header.key, header.value)
    return list(result.values())


def describe_error(message: str, exc: Exception) -> str:
    """Format a transport error, falling back to the exception type when it has no text."""
    cause = str(exc) or type(exc).__name__
    return f"{message}: {cause}"


class RequestDispatcher:
    """
    Sends requests described by RequestSpec and times them.

    The dispatcher holds no mutable state; every call opens its own client,
    so calls may run concurrently.

    Args:
        timeout: Transport timeout in seconds
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests
    """

    def __init__(
        self,
        timeout: float = config.DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None
    ):
        self.timeout = timeout
        self.transport = transport

    async def dispatch(self, spec: RequestSpec) -> ResponseRecord:
        """
        Execute an HTTP request and return the response.

        Args:
            spec: The request to send

        Returns:
            ResponseRecord with status, body and elapsed milliseconds

        Raises:
            InvalidHeaderError: A header is malformed; nothing was sent
            NetworkError: The exchange failed at the transport level
        """
        url = build_url(spec.url, spec.query_params)
        headers = build_headers(spec.headers)
        content = spec.body if spec.method.sends_body else None

        logger.debug("Dispatching {} {}", spec.method.value, url)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
                max_redirects=MAX_REDIRECTS
            ) as client:
                start_time = time.perf_counter()
                response = await client.request(
                    method=spec.method.value,
                    url=url,
                    headers=headers,
                    content=content
                )
                body = response.text
                end_time = time.perf_counter()
        except httpx.TimeoutException as e:
            raise NetworkError(describe_error("Request timed out", e)) from e
        except httpx.ConnectError as e:
            raise NetworkError(describe_error("Failed to connect to server", e)) from e
        except httpx.InvalidURL as e:
            raise NetworkError(describe_error("Invalid URL", e)) from e
        except httpx.HTTPError as e:
            raise NetworkError(describe_error("HTTP error occurred", e)) from e

        response_time_ms = max((end_time - start_time) * 1000.0, 0.0)
        logger.info(
            "{} {} -> {} in {:.1f} ms",
            spec.method.value, url, response.status_code, response_time_ms
        )

        return ResponseRecord(
            status=response.status_code,
            body=body,
            response_time_ms=response_time_ms
        )

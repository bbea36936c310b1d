"""Validator response classification.

Maps an :class:`httpx.Response` (or a failed exchange) to either the decoded
JSON result or a :class:`~specval.exceptions.ValidationError` subclass:

* status < 300 with a JSON body -- the decoded JSON is returned.
* status < 300 with anything else -- :class:`ResponseParseError`.
* status >= 300 -- :class:`HTTPStatusError`, message
  ``HTTP <status>[: <reason>][: <Location>]``.
* network or body-stream failure -- :class:`TransportError`.

Every error carries the status, reason, headers and body that were received,
if any. Bodies are decoded from JSON when possible and kept as raw bytes
otherwise.
"""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from specval.client.body import GuardedBody
from specval.exceptions import (
    HTTPStatusError,
    ResponseParseError,
    TransportError,
    UnsupportedProtocolError,
)

SUPPORTED_SCHEMES = ("http", "https")

_UNPARSED = object()


def check_protocol(url: httpx.URL) -> None:
    """Raise :class:`UnsupportedProtocolError` unless *url* is http(s)."""
    if url.scheme not in SUPPORTED_SCHEMES:
        raise UnsupportedProtocolError(
            f'Unsupported protocol "{url.scheme}:" for validator URL'
        )


def parse_validation_response(response: httpx.Response) -> Any:
    """Decode a validator response or raise the matching error.

    Args:
        response: A fully read response.

    Returns:
        The decoded JSON body.

    Raises:
        HTTPStatusError: On status 300 or above.
        ResponseParseError: When a successful response is not JSON.
    """
    content = response.content
    data: Any = _UNPARSED
    parse_error: Optional[ValueError] = None
    try:
        data = json.loads(content)
    except ValueError as exc:
        parse_error = exc

    status = response.status_code
    reason = response.reason_phrase
    context = {
        "status_code": status,
        "status_message": reason,
        "headers": dict(response.headers),
        "trailers": {},
    }

    if status >= 300:
        message = f"HTTP {status}"
        if reason:
            message += f": {reason}"
        location = response.headers.get("location")
        if location:
            message += f": {location}"
        body = content if data is _UNPARSED else data
        raise HTTPStatusError(message, body=body, **context)

    if parse_error is not None:
        raise ResponseParseError(
            f"Error parsing server response as JSON: {parse_error}",
            body=content,
            **context,
        ) from parse_error

    return data


def transport_failure(
    exc: Exception,
    guard: Optional[GuardedBody],
) -> Optional[TransportError]:
    """Translate an exception raised while sending into a :class:`TransportError`.

    A read failure latched by *guard* takes precedence over whatever the
    transport raised afterwards. Returns ``None`` for exceptions that are not
    transport failures, which the caller should re-raise unchanged.
    """
    if guard is not None and guard.error is not None:
        cause: BaseException = guard.error
        message = f"Error reading spec: {cause}"
    elif isinstance(exc, (httpx.HTTPError, OSError)):
        cause = exc
        message = f"Error sending spec to validator: {str(exc) or type(exc).__name__}"
    else:
        return None
    error = TransportError(message)
    error.__cause__ = cause
    return error

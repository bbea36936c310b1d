"""Outbound request construction for the validator service.

:func:`build_request` turns a document body plus
:class:`~specval.models.ValidationOptions` into a :class:`ValidationRequest`
describing a single POST. No network I/O happens here.

Headers are merged from three layers, least to most specific:

1. :data:`DEFAULT_HEADERS`
2. ``options.headers`` supplied by the caller
3. the ``Content-Type`` decided for this particular document

Header names compare case-insensitively; the most specific layer that names a
header decides both its value and the capitalization that is sent.
"""

from __future__ import annotations

import platform
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional, Union

import httpx

from specval import __version__
from specval.exceptions import InvalidHeaderError
from specval.models import ValidationOptions

DEFAULT_URL = "https://validator.swagger.io/validator/debug"
"""Validator endpoint used when no URL is configured."""

DEFAULT_HEADERS: Mapping[str, str] = MappingProxyType(
    {
        "Accept": "application/json",
        "User-Agent": (
            f"specval/{__version__} "
            f"{platform.python_implementation()}/{platform.python_version()}"
        ),
    }
)
"""Headers sent with every request unless overridden. Read-only."""


@dataclass(frozen=True)
class ValidationRequest:
    """A fully specified validation request.

    Attributes:
        url: Validator URL.
        headers: Merged request headers.
        body: ``str``/bytes content, or a readable stream to pipe.
        method: Always ``POST``.
    """

    url: httpx.URL
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = b""
    method: str = "POST"


def combine_headers(*layers: Optional[Mapping[str, str]]) -> dict[str, str]:
    """Merge header mappings case-insensitively.

    Later layers override earlier ones. The winning entry keeps its own
    capitalization. ``None`` layers are skipped.

    Example::

        >>> combine_headers({"Accept": "a"}, {"accept": "b"})
        {'accept': 'b'}
    """
    combined: dict[str, tuple[str, str]] = {}
    for headers in layers:
        if not headers:
            continue
        for name, value in headers.items():
            lower = name.lower()
            # re-insert so the winning capitalization is the one kept
            combined.pop(lower, None)
            combined[lower] = (name, value)
    return dict(combined.values())


def check_headers(headers: Mapping[str, str]) -> None:
    """Raise :class:`InvalidHeaderError` for names or values that are not ASCII.

    httpx encodes headers as ASCII and would otherwise fail while sending.
    """
    for name, value in headers.items():
        try:
            name.encode("ascii")
            value.encode("ascii")
        except UnicodeEncodeError as exc:
            raise InvalidHeaderError(
                f'Invalid character in header "{name}": {exc.object[exc.start:exc.end]!r}'
            ) from exc


def resolve_url(url: Optional[Union[str, httpx.URL]]) -> httpx.URL:
    """Return the validator URL to use.

    ``None`` (or an empty string) selects :data:`DEFAULT_URL`. The scheme is
    not checked here; unsupported schemes are reported when sending.
    """
    if not url:
        return httpx.URL(DEFAULT_URL)
    if isinstance(url, httpx.URL):
        return url
    return httpx.URL(url)


def build_request(
    body: Any,
    options: ValidationOptions,
    content_type: Optional[str] = None,
) -> ValidationRequest:
    """Build the request that validates *body*.

    Args:
        body: Document content (``str``/bytes) or a readable stream.
        options: Run options providing URL and extra headers.
        content_type: Content type decided for this document, if any.

    Returns:
        The :class:`ValidationRequest` to send.

    Raises:
        InvalidHeaderError: If a header cannot be encoded.
    """
    doc_headers = {"Content-Type": content_type} if content_type else None
    headers = combine_headers(DEFAULT_HEADERS, options.headers, doc_headers)
    check_headers(headers)
    return ValidationRequest(url=resolve_url(options.url), headers=headers, body=body)

"""Synchronous validator client.

This module provides :class:`ValidationClient`, the blocking client behind
:func:`specval.validate` and :func:`specval.validate_file`. It wraps
:class:`httpx.Client` and sends exactly one POST per document:

- **Content-Type** -- decided per document by
  :func:`~specval.content_type.resolve_content_type` unless the caller set one.
- **Streaming** -- stream bodies are piped in chunks, never read up front
  (unless sniffing requires it).
- **No retries** -- every failure surfaces as a
  :class:`~specval.exceptions.ValidationError` on the first attempt.

See Also:
    :class:`~specval.client.async_client.AsyncValidationClient` for the
    equivalent non-blocking implementation.
"""

from __future__ import annotations

import os
from typing import Any, Optional

import httpx

from specval.client.body import check_spec, open_spec_file, prepare_content
from specval.client.response import (
    check_protocol,
    parse_validation_response,
    transport_failure,
)
from specval.content_type import content_type_for_path, has_content_type, resolve_content_type
from specval.exceptions import TransportError, ValidationError
from specval.models import ValidationOptions
from specval.output import OutputManager
from specval.request import ValidationRequest, build_request


class ValidationClient:
    """Synchronous client for the validator service.

    Must be used as a context manager so that the underlying transport is
    opened and closed.

    Args:
        options: Run options (URL, headers, verbosity, streams, transport).
        output: Output manager for diagnostics. Built from *options* when
            omitted.

    Example::

        with ValidationClient(ValidationOptions(verbosity=1)) as client:
            result = client.validate(b'{"openapi": "3.0.3"}')
    """

    def __init__(
        self,
        options: Optional[ValidationOptions] = None,
        output: Optional[OutputManager] = None,
    ) -> None:
        self._options = options or ValidationOptions()
        self._output = output or OutputManager.from_options(self._options)
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> ValidationClient:
        self._client = httpx.Client(
            timeout=self._options.timeout,
            verify=self._options.verify,
            transport=self._options.transport,
            follow_redirects=False,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public methods
    # ------------------------------------------------------------------ #

    def validate(self, spec: Any) -> Any:
        """Validate a spec document.

        Args:
            spec: Document content (``str`` or bytes-like) or a readable
                stream.

        Returns:
            The decoded JSON response of the validator.

        Raises:
            TypeError: If *spec* is not a document.
            ValidationError: If the document could not be validated.
        """
        check_spec(spec)
        return self._validate(spec)

    def validate_file(self, path: str | os.PathLike[str]) -> Any:
        """Validate a spec file.

        ``Content-Type`` is set from the ``.json``/``.yaml``/``.yml``
        extension unless the caller's headers already carry one.

        Raises:
            SpecFileNotFoundError: If *path* does not exist.
            ValidationError: If the document could not be validated.
        """
        stream = open_spec_file(path)
        content_type = None
        if not has_content_type(self._options.headers):
            content_type = content_type_for_path(os.fspath(path))
        with stream:
            return self._validate(stream, content_type)

    def send(self, request: ValidationRequest) -> Any:
        """Send a prepared request and classify the response.

        Raises:
            UnsupportedProtocolError: For URL schemes other than http(s),
                before any network activity.
            TransportError: On network or body-stream failures.
            HTTPStatusError: On status 300 or above.
            ResponseParseError: When a successful response is not JSON.
        """
        assert self._client is not None, "Client not initialised -- use as context manager"

        check_protocol(request.url)
        content, guard = prepare_content(request.body)
        if guard is not None:
            content = guard.iter_chunks()

        try:
            response = self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=content,
            )
        except Exception as exc:
            failure = transport_failure(exc, guard)
            if failure is None:
                raise
            raise failure from failure.__cause__

        self._output.debug(
            f"HTTP {response.status_code} {response.reason_phrase} from {request.url}",
            level=2,
        )
        return parse_validation_response(response)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _validate(self, spec: Any, content_type: Optional[str] = None) -> Any:
        body = spec
        if content_type is None:
            try:
                content_type, body = resolve_content_type(
                    spec, self._options.headers, self._output
                )
            except (OSError, ValueError) as exc:
                raise TransportError(f"Error reading spec: {exc}") from exc

        try:
            request = build_request(body, self._options, content_type)
        except httpx.InvalidURL as exc:
            raise ValidationError(f"Invalid validator URL: {exc}") from exc

        self._output.debug(f"POST {request.url}", level=2)
        return self.send(request)

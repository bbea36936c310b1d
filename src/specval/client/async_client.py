"""Asynchronous validator client -- mirrors :class:`~specval.client.sync_client.ValidationClient`.

This module provides :class:`AsyncValidationClient`, the non-blocking
counterpart used by :mod:`specval.batch` to validate many documents
concurrently over one :class:`httpx.AsyncClient`. Blocking work (reading and
sniffing streams) runs in worker threads via :func:`asyncio.to_thread` so one
slow input never stalls the others.

See Also:
    :class:`~specval.client.sync_client.ValidationClient` for the blocking
    equivalent.
"""

from __future__ import annotations

import asyncio
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


class AsyncValidationClient:
    """Asynchronous client for the validator service.

    Provides the same behaviour as
    :class:`~specval.client.sync_client.ValidationClient` but uses
    :class:`httpx.AsyncClient`. Must be used as an async context manager.

    Args:
        options: Run options (URL, headers, verbosity, streams, transport).
        output: Output manager for diagnostics. Built from *options* when
            omitted.

    Example::

        async with AsyncValidationClient(options) as client:
            result = await client.validate_file("petstore.yaml")
    """

    def __init__(
        self,
        options: Optional[ValidationOptions] = None,
        output: Optional[OutputManager] = None,
    ) -> None:
        self._options = options or ValidationOptions()
        self._output = output or OutputManager.from_options(self._options)
        self._client: Optional[httpx.AsyncClient] = None

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncValidationClient:
        self._client = httpx.AsyncClient(
            timeout=self._options.timeout,
            verify=self._options.verify,
            transport=self._options.transport,
            follow_redirects=False,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public methods
    # ------------------------------------------------------------------ #

    async def validate(self, spec: Any) -> Any:
        """Validate a spec document.

        Behaves identically to
        :meth:`~specval.client.sync_client.ValidationClient.validate` but is
        non-blocking.
        """
        check_spec(spec)
        return await self._validate(spec)

    async def validate_file(self, path: str | os.PathLike[str]) -> Any:
        """Validate a spec file, setting ``Content-Type`` from its extension."""
        stream = open_spec_file(path)
        content_type = None
        if not has_content_type(self._options.headers):
            content_type = content_type_for_path(os.fspath(path))
        with stream:
            return await self._validate(stream, content_type)

    async def send(self, request: ValidationRequest) -> Any:
        """Send a prepared request and classify the response.

        Raises the same errors as
        :meth:`~specval.client.sync_client.ValidationClient.send`.
        """
        assert self._client is not None, "Client not initialised -- use as async context manager"

        check_protocol(request.url)
        content, guard = prepare_content(request.body)
        if guard is not None:
            content = guard.aiter_chunks()

        try:
            response = await self._client.request(
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

    async def _validate(self, spec: Any, content_type: Optional[str] = None) -> Any:
        body = spec
        if content_type is None:
            try:
                content_type, body = await asyncio.to_thread(
                    resolve_content_type, spec, self._options.headers, self._output
                )
            except (OSError, ValueError) as exc:
                raise TransportError(f"Error reading spec: {exc}") from exc

        try:
            request = build_request(body, self._options, content_type)
        except httpx.InvalidURL as exc:
            raise ValidationError(f"Invalid validator URL: {exc}") from exc

        self._output.debug(f"POST {request.url}", level=2)
        return await self.send(request)

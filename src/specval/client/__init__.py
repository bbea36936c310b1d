"""HTTP clients for the validator service.

Provides synchronous and asynchronous clients that wrap :mod:`httpx`, send
one POST per document, and classify the response into a parsed result or a
:class:`~specval.exceptions.ValidationError`.

Classes:
    :class:`ValidationClient` -- blocking client backed by :class:`httpx.Client`.
    :class:`AsyncValidationClient` -- non-blocking client backed by
    :class:`httpx.AsyncClient`, used for concurrent batch runs.

Both are context managers and take a
:class:`~specval.models.ValidationOptions`.

Example::

    from specval.client import ValidationClient

    with ValidationClient(options) as client:
        result = client.validate_file("petstore.yaml")
"""

from specval.client.async_client import AsyncValidationClient
from specval.client.sync_client import ValidationClient

__all__ = ["ValidationClient", "AsyncValidationClient"]

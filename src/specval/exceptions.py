"""Exception hierarchy for specval.

All exceptions inherit from :class:`SpecvalError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specval.exit_codes`.
The CLI entry point :func:`specval.app.main` catches ``SpecvalError`` and
exits with the appropriate code.

Subclass hierarchy::

    SpecvalError (exit 2)
    +-- ConfigError              (exit 3)
    +-- ValidationError          (exit 2)
        +-- UnsupportedProtocolError
        +-- InvalidHeaderError
        +-- ResponseParseError
        +-- HTTPStatusError
        +-- TransportError
        +-- SpecFileNotFoundError

:class:`ValidationError` is raised for a single document when the exchange
with the validator fails. Problems the validator *reports* about a document
are not exceptions; they arrive in a successful
:class:`~specval.models.ValidationResult`.
"""

from __future__ import annotations

from typing import Any, Optional

from specval.exit_codes import EXIT_ERROR, EXIT_INVALID_USAGE


class SpecvalError(Exception):
    """Base exception for all specval errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_ERROR

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(SpecvalError):
    """Raised when the user configuration file cannot be read or is invalid."""

    exit_code = EXIT_INVALID_USAGE


class ValidationError(SpecvalError):
    """Raised when a document could not be validated.

    Carries whatever is known about the HTTP exchange. Attributes are
    ``None`` when the failure happened before a response was received.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code of the validator response.
        status_message: HTTP reason phrase of the validator response.
        headers: Response headers.
        body: Response body, decoded from JSON when possible, otherwise the
            raw bytes.
        trailers: Response trailers. Always empty, httpx does not expose them.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        status_message: Optional[str] = None,
        headers: Optional[dict[str, str]] = None,
        body: Any = None,
        trailers: Optional[dict[str, str]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.status_message = status_message
        self.headers = headers
        self.body = body
        self.trailers = trailers


class UnsupportedProtocolError(ValidationError):
    """Raised when the validator URL uses a scheme other than http or https."""


class InvalidHeaderError(ValidationError):
    """Raised when a request header cannot be sent as HTTP/1.1 ASCII text."""


class ResponseParseError(ValidationError):
    """Raised when a successful validator response is not valid JSON."""


class HTTPStatusError(ValidationError):
    """Raised when the validator responds with a status of 300 or above."""


class TransportError(ValidationError):
    """Raised on network failures or errors reading the request body."""


class SpecFileNotFoundError(ValidationError):
    """Raised when a spec file passed for validation does not exist."""

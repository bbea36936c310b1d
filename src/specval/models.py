"""Canonical Pydantic models shared across specval modules.

**Run options** -- :class:`ValidationOptions` carries everything a validation
needs besides the document itself: validator URL, extra headers, verbosity,
the three I/O streams, and transport settings.

**Validator output** -- :class:`ValidationResult` and
:class:`SchemaValidationMessage` model the JSON object returned by the
validator service. Unknown fields are preserved in ``model_extra``.

**User configuration** -- :class:`UserConfig` is the schema of the optional
CLI configuration file (see :mod:`specval.config`).
"""

from __future__ import annotations

from typing import Any, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator


STDIN_TARGET = "-"
"""Target string that means "read the spec from standard input"."""


# --- Run options ---


class ValidationOptions(BaseModel):
    """Options for validating one or more spec documents.

    Instances are immutable. Use ``model_copy(update=...)`` to derive a
    modified copy.

    Example::

        ValidationOptions(
            url="http://localhost:8080/validator/debug",
            headers={"Authorization": "Bearer abc"},
            verbosity=1,
        )
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    url: Optional[Union[str, httpx.URL]] = Field(
        default=None, description="Validator URL. None uses DEFAULT_URL."
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Extra request headers. Names are case-insensitive.",
    )
    verbosity: int = Field(
        default=0, description="Amount of output. Larger produces more."
    )
    stdin: Any = Field(default=None, description="Readable stream for '-'.")
    stdout: Any = Field(default=None, description="Stream for validation messages.")
    stderr: Any = Field(default=None, description="Stream for errors and status.")
    timeout: Optional[float] = Field(
        default=None, description="Transport timeout in seconds. None waits forever."
    )
    verify: bool = Field(default=True, description="Verify TLS certificates.")
    transport: Optional[Any] = Field(
        default=None, description="httpx transport override (mainly for tests)."
    )

    @field_validator("stdin")
    @classmethod
    def _check_readable(cls, value: Any) -> Any:
        if value is not None and not callable(getattr(value, "read", None)):
            raise TypeError("stdin must be a readable stream")
        return value

    @field_validator("stdout", "stderr")
    @classmethod
    def _check_writable(cls, value: Any) -> Any:
        if value is not None and not callable(getattr(value, "write", None)):
            raise TypeError("stdout and stderr must be writable streams")
        return value


# --- Validator output ---


class SchemaValidationMessage(BaseModel):
    """One entry of ``schemaValidationMessages`` in a validator response."""

    model_config = ConfigDict(extra="allow")

    level: str = ""
    message: str = ""

    @field_validator("level", "message", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        return "" if value is None else str(value)


class ValidationResult(BaseModel):
    """Parsed validator response.

    The validator reports problems in two lists: free-form ``messages`` and
    structured ``schemaValidationMessages``. A response with neither (or with
    both empty) means the document conforms.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    messages: list[str] = Field(default_factory=list)
    schema_validation_messages: list[SchemaValidationMessage] = Field(
        default_factory=list, alias="schemaValidationMessages"
    )

    @field_validator("messages", mode="before")
    @classmethod
    def _coerce_messages(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [str(m) for m in value]
        return [str(value)]

    @field_validator("schema_validation_messages", mode="before")
    @classmethod
    def _coerce_schema_messages(cls, value: Any) -> Any:
        if value is None:
            return []
        if not isinstance(value, list):
            value = [value]
        return [m if isinstance(m, dict) else {"message": m} for m in value]

    @classmethod
    def from_response(cls, data: Any) -> ValidationResult:
        """Build a result from decoded JSON.

        Responses that are not JSON objects carry no recognised fields and
        produce an empty result.
        """
        if not isinstance(data, dict):
            return cls()
        return cls.model_validate(data)

    def diagnostics(self) -> list[str]:
        """Return all messages, schema messages rendered as ``level: message``."""
        return [
            *self.messages,
            *(f"{m.level}: {m.message}" for m in self.schema_validation_messages),
        ]

    @property
    def is_valid(self) -> bool:
        """Whether the validator reported no problems."""
        return not self.messages and not self.schema_validation_messages


# --- User configuration ---


class UserConfig(BaseModel):
    """Schema of the optional ``config.json`` read by the CLI.

    Example::

        {
          "url": "http://localhost:8080/validator/debug",
          "headers": {"Authorization": "Bearer abc"},
          "timeout": 30
        }
    """

    model_config = ConfigDict(extra="forbid")

    url: Optional[str] = None
    headers: dict[str, str] = Field(default_factory=dict)
    timeout: Optional[float] = None

"""Library entry points.

Four functions, in blocking and ``async`` flavours:

* :func:`validate` / :func:`avalidate` -- validate a document given as
  ``str``, bytes, or a readable stream.
* :func:`validate_file` / :func:`avalidate_file` -- validate a file, setting
  ``Content-Type`` from its extension.

Each returns the decoded JSON response of the validator or raises
:class:`~specval.exceptions.ValidationError`. Use
:meth:`ValidationResult.from_response <specval.models.ValidationResult.from_response>`
to inspect the reported problems.

Example::

    import specval

    result = specval.validate_file("petstore.yaml", {"verbosity": 1})
    problems = specval.ValidationResult.from_response(result).diagnostics()
"""

from __future__ import annotations

import os
from typing import Any, Optional, Union

from specval.client import AsyncValidationClient, ValidationClient
from specval.models import ValidationOptions

OptionsLike = Union[ValidationOptions, dict[str, Any], None]


def coerce_options(options: OptionsLike) -> ValidationOptions:
    """Return *options* as a :class:`ValidationOptions`.

    Raises:
        TypeError: If *options* is neither ``None``, a dict, nor
            ``ValidationOptions``.
    """
    if options is None:
        return ValidationOptions()
    if isinstance(options, ValidationOptions):
        return options
    if isinstance(options, dict):
        return ValidationOptions(**options)
    raise TypeError("options must be a ValidationOptions, a dict, or None")


def validate(spec: Any, options: OptionsLike = None) -> Any:
    """Validate an OpenAPI/Swagger document.

    Args:
        spec: Document content (``str`` or bytes-like) or a readable stream.
        options: Validation options.

    Returns:
        The decoded JSON response of the validator.

    Raises:
        TypeError: If *spec* or *options* has an unsupported type.
        ValidationError: If the document could not be validated.
    """
    opts = coerce_options(options)
    with ValidationClient(opts) as client:
        return client.validate(spec)


def validate_file(path: str | os.PathLike[str], options: OptionsLike = None) -> Any:
    """Validate an OpenAPI/Swagger file.

    Unless *options* already declares one, ``Content-Type`` is set for
    ``.json`` and ``.yaml``/``.yml`` files. Other files are sniffed.

    Raises:
        SpecFileNotFoundError: If *path* does not exist.
        ValidationError: If the document could not be validated.
    """
    opts = coerce_options(options)
    with ValidationClient(opts) as client:
        return client.validate_file(path)


async def avalidate(spec: Any, options: OptionsLike = None) -> Any:
    """Async variant of :func:`validate`."""
    opts = coerce_options(options)
    async with AsyncValidationClient(opts) as client:
        return await client.validate(spec)


async def avalidate_file(
    path: str | os.PathLike[str],
    options: Optional[OptionsLike] = None,
) -> Any:
    """Async variant of :func:`validate_file`."""
    opts = coerce_options(options)
    async with AsyncValidationClient(opts) as client:
        return await client.validate_file(path)

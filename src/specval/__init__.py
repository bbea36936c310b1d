"""specval -- Validate OpenAPI/Swagger specs with a remote validator service.

This package submits OpenAPI/Swagger documents to an online validator (by
default the public swagger.io validator) and reports the results, either as a
library or through the ``specval`` command.

Typical use::

    $ specval petstore.yaml other.json
    $ cat api.json | specval -

    >>> import specval
    >>> specval.validate_file("petstore.yaml")
    {}

Modules:
    app: Typer CLI entry point.
    api: ``validate`` / ``validate_file`` library functions.
    batch: Concurrent validation of many specs and exit-code resolution.
    client: Sync and async HTTP clients for the validator service.
    content_type: Content-Type detection for spec documents.
    request: Outbound request construction and header merging.
    models: Pydantic models shared across the package.
    config: User configuration file for the CLI.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric process exit codes.
    output: stdout/stderr output manager.
"""

__version__ = "0.3.0"

from specval.api import avalidate, avalidate_file, validate, validate_file  # noqa: E402
from specval.exceptions import ValidationError  # noqa: E402
from specval.models import ValidationOptions, ValidationResult  # noqa: E402

__all__ = [
    "__version__",
    "ValidationError",
    "ValidationOptions",
    "ValidationResult",
    "avalidate",
    "avalidate_file",
    "validate",
    "validate_file",
]

"""Numeric process exit codes for the ``specval`` command.

Each constant maps to an outcome class of a validation run and is referenced
by the corresponding :class:`~specval.exceptions.SpecvalError` subclass.
CI scripts can inspect the exit code to tell an invalid spec apart from a
validator that could not be reached, without parsing stderr.

Example::

    $ specval broken.yaml
    $ echo $?
    1   # EXIT_INVALID -- the validator reported problems
"""

EXIT_SUCCESS = 0
"""Every spec was accepted by the validator."""

EXIT_INVALID = 1
"""At least one spec was rejected by the validator, and no errors occurred."""

EXIT_ERROR = 2
"""At least one spec could not be validated (I/O, network, or HTTP error)."""

EXIT_INVALID_USAGE = 3
"""The command was invoked with invalid arguments or configuration."""

EXIT_CANCELLED = 130
"""The run was interrupted with Ctrl-C."""

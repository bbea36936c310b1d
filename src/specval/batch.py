"""Concurrent validation of many specs and exit-code resolution.

:func:`validate_all` is what the ``specval`` command runs:

1. Targets are deduplicated by exact string equality, so ``a.yaml`` and
   ``./a.yaml`` are two targets but ``- -`` reads standard input once.
2. Every target is dispatched at once as an :mod:`asyncio` task sharing one
   :class:`~specval.client.AsyncValidationClient`.
3. Results are handled in completion order. Errors go to stderr, reported
   problems go to stdout, each prefixed with the target.
4. Once the last target completes, a confirmation line is written if
   everything was valid, and the exit code is resolved: any error gives 2,
   otherwise any invalid spec gives 1, otherwise 0.

Aggregation only ever runs on the event loop thread, between awaits, so the
counters in :class:`BatchOutcome` need no locking.
"""

from __future__ import annotations

import asyncio
import enum
import sys
import traceback
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Optional

from specval.client import AsyncValidationClient
from specval.exceptions import ValidationError
from specval.exit_codes import EXIT_ERROR, EXIT_INVALID, EXIT_SUCCESS
from specval.models import STDIN_TARGET, ValidationOptions, ValidationResult
from specval.output import OutputManager

ALL_VALID_MESSAGE = "All OpenAPI/Swagger specs are valid.\n"


class Outcome(str, enum.Enum):
    """Overall result class of a batch."""

    SUCCESS = "success"
    INVALID = "invalid"
    ERRORED = "errored"


_EXIT_CODES = {
    Outcome.SUCCESS: EXIT_SUCCESS,
    Outcome.INVALID: EXIT_INVALID,
    Outcome.ERRORED: EXIT_ERROR,
}


@dataclass
class BatchOutcome:
    """Running aggregate over the targets of one batch."""

    total: int
    processed: int = 0
    had_error: bool = False
    had_invalid: bool = False

    @property
    def complete(self) -> bool:
        return self.processed >= self.total

    @property
    def outcome(self) -> Outcome:
        if self.had_error:
            return Outcome.ERRORED
        if self.had_invalid:
            return Outcome.INVALID
        return Outcome.SUCCESS

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self.outcome]


def dedupe_targets(targets: Iterable[str]) -> list[str]:
    """Drop repeated targets, keeping first occurrences in order.

    Comparison is by exact string; paths are not normalized.
    """
    return list(dict.fromkeys(targets))


def get_messages(result: Any) -> list[str]:
    """Return the problems reported in a decoded validator response."""
    return ValidationResult.from_response(result).diagnostics()


def format_error(target: str, error: BaseException, verbosity: int) -> str:
    """Render the stderr text for a failed target."""
    text = f"{target}: {error}\n"
    if verbosity >= 1:
        text += "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return text


def report(
    target: str,
    error: Optional[ValidationError],
    result: Any,
    outcome: BatchOutcome,
    output: OutputManager,
) -> None:
    """Record one completed target in *outcome* and write its output."""
    verbosity = output.verbosity
    if error is not None:
        outcome.had_error = True
        if verbosity >= -1:
            output.error_line(format_error(target, error, verbosity))
    else:
        messages = get_messages(result)
        if messages:
            outcome.had_invalid = True
            if verbosity >= 0:
                output.data("\n".join(f"{target}: {m}" for m in messages) + "\n")

    outcome.processed += 1
    if outcome.complete and outcome.outcome is Outcome.SUCCESS and verbosity >= 0:
        output.success(ALL_VALID_MESSAGE)


async def _validate_target(
    client: AsyncValidationClient,
    target: str,
    stdin: Any,
) -> tuple[str, Optional[ValidationError], Any]:
    try:
        if target == STDIN_TARGET:
            result = await client.validate(stdin)
        else:
            result = await client.validate_file(target)
    except ValidationError as exc:
        return target, exc, None
    return target, None, result


async def validate_all(
    targets: Iterable[str],
    options: Optional[ValidationOptions] = None,
    output: Optional[OutputManager] = None,
) -> int:
    """Validate every target concurrently and return the exit code.

    Args:
        targets: File paths, or ``"-"`` for ``options.stdin``.
        options: Run options shared by all targets.
        output: Output manager. Built from *options* when omitted.

    Returns:
        ``0`` if all targets are valid, ``1`` if any is invalid and none
        failed, ``2`` if any failed.
    """
    options = options or ValidationOptions()
    output = output or OutputManager.from_options(options)
    unique = dedupe_targets(targets)
    outcome = BatchOutcome(total=len(unique))
    if not unique:
        return outcome.exit_code

    stdin = options.stdin
    if stdin is None and STDIN_TARGET in unique:
        stdin = getattr(sys.stdin, "buffer", sys.stdin)

    async with AsyncValidationClient(options, output) as client:
        tasks = [
            asyncio.ensure_future(_validate_target(client, target, stdin))
            for target in unique
        ]
        for next_done in asyncio.as_completed(tasks):
            target, error, result = await next_done
            report(target, error, result, outcome, output)

    return outcome.exit_code


def run_batch(
    targets: Iterable[str],
    options: Optional[ValidationOptions] = None,
    output: Optional[OutputManager] = None,
) -> int:
    """Blocking wrapper around :func:`validate_all`."""
    return asyncio.run(validate_all(targets, options, output))

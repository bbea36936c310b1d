"""Typer CLI entry point for specval.

``specval [OPTIONS] [SPEC]...`` validates each SPEC file (``-`` for standard
input, the default when no SPEC is given) and exits with:

* ``0`` -- every spec is valid
* ``1`` -- at least one spec is invalid
* ``2`` -- at least one spec could not be validated
* ``3`` -- invalid arguments or configuration

:func:`main` is the testable entry point: it takes the argument list and the
three streams and returns the exit code. :func:`run` is the console script
declared in ``pyproject.toml``.
"""

from __future__ import annotations

import contextlib
import re
import sys
from pathlib import Path
from typing import IO, Any, Optional, Sequence

import typer

from specval import __version__
from specval.batch import run_batch
from specval.config import load_user_config
from specval.exceptions import SpecvalError
from specval.exit_codes import EXIT_CANCELLED, EXIT_INVALID_USAGE, EXIT_SUCCESS
from specval.models import STDIN_TARGET, ValidationOptions
from specval.output import OutputManager
from specval.request import DEFAULT_URL, combine_headers


app = typer.Typer(
    name="specval",
    help="Validate OpenAPI/Swagger files.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

# Header names are tokens, so whitespace around them is dropped. The value is
# kept as given, minus one optional space after the colon.
_HEADER_RE = re.compile(r"\s*([^\s:]+)\s*: ?(.*)", re.DOTALL)


def parse_header(line: str) -> tuple[str, str]:
    """Split a ``Name: value`` header line.

    Raises:
        typer.BadParameter: If *line* does not start with a name and a colon.
    """
    match = _HEADER_RE.fullmatch(line)
    if match is None:
        raise typer.BadParameter(
            f'Header must start with token, then colon.  Got "{line}"'
        )
    return match.group(1), match.group(2)


def parse_headers(lines: Optional[Sequence[str]]) -> dict[str, str]:
    """Parse repeated ``-H`` arguments. Later lines override earlier ones."""
    return combine_headers(*({name: value} for name, value in map(parse_header, lines or ())))


def _header_callback(value: Optional[list[str]]) -> Optional[list[str]]:
    """Reject malformed header lines during argument parsing."""
    for line in value or ():
        parse_header(line)
    return value


def _version_callback(ctx: typer.Context, value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        out = (ctx.obj or {}).get("stdout") or sys.stdout
        out.write(f"specval {__version__}\n")
        raise typer.Exit()


@app.command()
def validate_command(
    ctx: typer.Context,
    specs: Optional[list[str]] = typer.Argument(
        None,
        metavar="[SPEC]...",
        help="OpenAPI/Swagger files to validate, or - for stdin.",
        show_default=False,
    ),
    header: Optional[list[str]] = typer.Option(
        None,
        "--header",
        "-H",
        metavar="HEADER",
        callback=_header_callback,
        help="Additional HTTP header to send, as 'Name: value'. Repeatable.",
    ),
    quiet: int = typer.Option(
        0, "--quiet", "-q", count=True, help="Print less output. Repeatable."
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Print more output. Repeatable."
    ),
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        metavar="VALIDATOR_URL",
        help=f"Validator URL. [default: {DEFAULT_URL}]",
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", help="Read defaults from this JSON file."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> int:
    """Validate OpenAPI/Swagger files using the swagger.io online validator.

    Problems reported by the validator are printed to stdout, prefixed with
    the file name. Errors and status messages go to stderr.
    """
    streams = ctx.obj or {}
    verbosity = verbose - quiet
    user_config = load_user_config(config)

    options = ValidationOptions(
        url=url or user_config.url,
        headers=combine_headers(user_config.headers, parse_headers(header)),
        verbosity=verbosity,
        stdin=streams.get("stdin"),
        stdout=streams.get("stdout"),
        stderr=streams.get("stderr"),
        timeout=user_config.timeout,
    )
    output = OutputManager.from_options(options)

    targets = list(specs or ())
    if not targets:
        targets.append(STDIN_TARGET)
        if verbosity > 1:
            output.data("Reading spec from stdin...\n")

    return run_batch(targets, options, output)


def _check_stream(name: str, stream: Any, method: str) -> None:
    if stream is not None and not callable(getattr(stream, method, None)):
        kind = "readable" if method == "read" else "writable"
        raise TypeError(f"{name} must be a {kind} stream")


def main(
    argv: Optional[Sequence[str]] = None,
    stdin: Optional[IO[Any]] = None,
    stdout: Optional[IO[str]] = None,
    stderr: Optional[IO[str]] = None,
) -> int:
    """Run the ``specval`` command and return its exit code.

    Args:
        argv: Arguments, without the program name. Defaults to
            ``sys.argv[1:]``.
        stdin: Stream read for ``-``. Defaults to the process stdin.
        stdout: Stream for validation messages. Defaults to the process stdout.
        stderr: Stream for errors and status. Defaults to the process stderr.

    Returns:
        The process exit code.

    Raises:
        TypeError: If a stream does not have the required method.
    """
    _check_stream("stdin", stdin, "read")
    _check_stream("stdout", stdout, "write")
    _check_stream("stderr", stderr, "write")

    args = list(sys.argv[1:] if argv is None else argv)
    err = stderr if stderr is not None else sys.stderr
    obj = {"stdin": stdin, "stdout": stdout, "stderr": stderr}
    # Typer prints help to the process stdout
    redirect = (
        contextlib.redirect_stdout(stdout) if stdout is not None else contextlib.nullcontext()
    )

    try:
        with redirect:
            rv = app(args=args, prog_name="specval", standalone_mode=False, obj=obj)
    except typer.TyperException as exc:
        # usage errors from argument parsing
        exc.show(file=err)
        return EXIT_INVALID_USAGE
    except (typer.Abort, KeyboardInterrupt):
        err.write("\nCancelled.\n")
        return EXIT_CANCELLED
    except SpecvalError as exc:
        OutputManager(stdout=stdout, stderr=stderr).error_line(f"Error: {exc}\n")
        return exc.exit_code

    return rv if isinstance(rv, int) else EXIT_SUCCESS


def run() -> None:
    """Console-script entry point. Exits the process with :func:`main`'s code."""
    sys.exit(main())

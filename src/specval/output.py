"""Output routing with strict stdout/stderr discipline.

Follows `clig.dev <https://clig.dev/>`_ conventions:

* **stdout** -- primary data only: the problems the validator reported,
  one ``<spec>: <message>`` line each, so they can be piped and grepped,
  plus the stdin notice at high verbosity.
* **stderr** -- all diagnostics (errors, tracebacks, confirmations, debug
  notes). Never contaminates the data stream.
* **Colour control** -- Rich styling on stderr only when it is an
  interactive terminal; respects ``NO_COLOR`` and ``TERM=dumb``.

Every write is a single call on the underlying stream so lines produced by
concurrent validations never interleave mid-line.

Verbosity thresholds are decided by callers; :meth:`OutputManager.debug` is
the only method that gates on verbosity itself.
"""

from __future__ import annotations

import os
import sys
from typing import IO, Any, Optional

from rich.console import Console
from rich.text import Text


class OutputManager:
    """Writes data to stdout and diagnostics to stderr.

    Args:
        stdout: Stream for primary data. ``None`` uses :data:`sys.stdout`.
        stderr: Stream for diagnostics. ``None`` uses :data:`sys.stderr`.
        verbosity: Current verbosity, consulted by :meth:`debug`.
        no_color: Disable Rich styling on stderr.
    """

    def __init__(
        self,
        stdout: Optional[IO[str]] = None,
        stderr: Optional[IO[str]] = None,
        verbosity: int = 0,
        no_color: bool = False,
    ) -> None:
        self._stdout = stdout if stdout is not None else sys.stdout
        self._stderr = stderr if stderr is not None else sys.stderr
        self._verbosity = verbosity
        self._no_color = no_color or _should_disable_color() or not _is_tty(self._stderr)

        self._console: Optional[Console] = None
        if not self._no_color:
            self._console = Console(file=self._stderr, stderr=True, highlight=False)

    @classmethod
    def from_options(cls, options: Any) -> OutputManager:
        """Build a manager from a :class:`~specval.models.ValidationOptions`."""
        return cls(
            stdout=options.stdout,
            stderr=options.stderr,
            verbosity=options.verbosity,
        )

    @property
    def verbosity(self) -> int:
        """The verbosity this manager was created with."""
        return self._verbosity

    # ------------------------------------------------------------------ #
    # Data output (stdout)
    # ------------------------------------------------------------------ #

    def data(self, text: str) -> None:
        """Write *text* to stdout verbatim, in one write."""
        self._stdout.write(text)
        _flush(self._stdout)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def error_line(self, text: str) -> None:
        """Write an error line to stderr, bold red on a terminal."""
        self._write_err(text, style="bold red")

    def success(self, text: str) -> None:
        """Write a success line to stderr, green on a terminal."""
        self._write_err(text, style="green")

    def debug(self, text: str, level: int = 1) -> None:
        """Write *text* to stderr when verbosity is at least *level*.

        A trailing newline is appended if missing.
        """
        if self._verbosity < level:
            return
        if not text.endswith("\n"):
            text += "\n"
        self._write_err(text, style="dim")

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _write_err(self, text: str, style: str) -> None:
        if self._console is None:
            self._stderr.write(text)
            _flush(self._stderr)
        else:
            self._console.print(Text(text, style=style), end="", soft_wrap=True)


# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _is_tty(stream: Any) -> bool:
    """Check if *stream* is a TTY."""
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


def _should_disable_color() -> bool:
    """Check if color should be disabled per clig.dev.

    Returns True when NO_COLOR env var is set (any value) or TERM=dumb.
    """
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


def _flush(stream: Any) -> None:
    flush = getattr(stream, "flush", None)
    if flush is not None:
        flush()

"""Request body handling shared by the sync and async clients.

Spec documents arrive as ``str``/bytes or as readable streams (open files,
standard input). Streams are piped to the transport in chunks through
:class:`GuardedBody`, which remembers the first read failure so that a
broken stream is reported once, as itself, even when the transport then
fails with an error of its own.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import AsyncIterator, Iterator
from typing import IO, Any, Optional

from specval.exceptions import SpecFileNotFoundError, TransportError

CHUNK_SIZE = 64 * 1024

_IN_MEMORY = (str, bytes, bytearray, memoryview)


def is_in_memory(spec: Any) -> bool:
    """Return True for ``str`` and bytes-like documents."""
    return isinstance(spec, _IN_MEMORY)


def check_spec(spec: Any) -> None:
    """Raise :class:`TypeError` unless *spec* is a document we can send."""
    if spec is None or not (is_in_memory(spec) or callable(getattr(spec, "read", None))):
        raise TypeError("spec must be a str, bytes-like object, or readable stream")


def open_spec_file(path: str | os.PathLike[str]) -> IO[bytes]:
    """Open a spec file for streaming.

    Raises:
        TypeError: If *path* is not a path.
        SpecFileNotFoundError: If the file does not exist.
        TransportError: If the file cannot be opened for another reason.
    """
    if not isinstance(path, (str, os.PathLike)):
        raise TypeError("spec path must be a str or os.PathLike")
    try:
        return open(path, "rb")
    except FileNotFoundError as exc:
        raise SpecFileNotFoundError(f"Spec file not found: {os.fspath(path)}") from exc
    except OSError as exc:
        raise TransportError(f"Error opening spec file {os.fspath(path)}: {exc}") from exc


class GuardedBody:
    """Chunked reader over a stream that latches the first read error.

    Args:
        stream: Readable stream, binary or text. Text is encoded as UTF-8.
        chunk_size: Maximum bytes (or characters) per read.
    """

    def __init__(self, stream: Any, chunk_size: int = CHUNK_SIZE) -> None:
        self._stream = stream
        self._chunk_size = chunk_size
        self.error: Optional[BaseException] = None

    def _read(self) -> bytes:
        try:
            chunk = self._stream.read(self._chunk_size)
        except (OSError, ValueError) as exc:
            if self.error is None:
                self.error = exc
            raise
        if isinstance(chunk, str):
            return chunk.encode("utf-8")
        return bytes(chunk) if chunk else b""

    def iter_chunks(self) -> Iterator[bytes]:
        """Yield chunks until the stream is exhausted."""
        while True:
            chunk = self._read()
            if not chunk:
                return
            yield chunk

    async def aiter_chunks(self) -> AsyncIterator[bytes]:
        """Yield chunks until the stream is exhausted, reading in a worker thread."""
        while True:
            chunk = await asyncio.to_thread(self._read)
            if not chunk:
                return
            yield chunk


def prepare_content(body: Any) -> tuple[Any, Optional[GuardedBody]]:
    """Split *body* into httpx ``content`` and its guard, if it is a stream.

    In-memory bodies are returned as-is (bytes-likes converted to bytes) with
    no guard.
    """
    if isinstance(body, (bytearray, memoryview)):
        return bytes(body), None
    if is_in_memory(body):
        return body, None
    return None, GuardedBody(body)

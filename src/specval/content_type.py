"""Content-Type detection for spec documents.

The validator service accepts JSON and YAML, and it needs to be told which
one it is receiving. This module picks the ``Content-Type`` to declare:

1. A ``Content-Type`` the caller already set always wins; nothing is done.
2. Documents with a file name are matched by extension (``.json``,
   ``.yaml``, ``.yml``, case-insensitive).
3. Anything else is *sniffed*: if it parses as JSON it is JSON, otherwise it
   is assumed to be YAML. This is deliberately not a general detector.

Sniffing a stream requires reading it completely. The buffered bytes are
handed back to the caller to use as the request body, since a stream cannot
be read twice.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import PurePath
from typing import Any, Optional

from specval.output import OutputManager

JSON_CONTENT_TYPE = "application/json"

YAML_CONTENT_TYPE = "application/yaml"
"""The only YAML media type validator.swagger.io is known to accept."""

_EXTENSION_TYPES = {
    ".json": JSON_CONTENT_TYPE,
    ".yaml": YAML_CONTENT_TYPE,
    ".yml": YAML_CONTENT_TYPE,
}


def has_content_type(headers: Optional[Mapping[str, str]]) -> bool:
    """Return True if *headers* names ``Content-Type`` in any capitalization."""
    if not headers:
        return False
    return any(name.lower() == "content-type" for name in headers)


def content_type_for_path(path: str) -> Optional[str]:
    """Return the content type implied by the extension of *path*, if any.

    Args:
        path: File path or name. Only the final suffix is considered.

    Returns:
        ``application/json``, ``application/yaml``, or ``None`` when the
        extension is not recognised.
    """
    return _EXTENSION_TYPES.get(PurePath(path).suffix.lower())


def sniff_content_type(data: bytes | str) -> str:
    """Guess the content type of an in-memory document.

    Returns ``application/json`` if *data* parses as JSON and
    ``application/yaml`` otherwise.
    """
    try:
        json.loads(data)
    except (ValueError, TypeError):
        return YAML_CONTENT_TYPE
    return JSON_CONTENT_TYPE


def stream_name(stream: Any) -> Optional[str]:
    """Return the file name of *stream*, or ``None`` for anonymous streams.

    Pseudo-names such as ``<stdin>`` are treated as anonymous.
    """
    name = getattr(stream, "name", None)
    if not isinstance(name, str) or (name.startswith("<") and name.endswith(">")):
        return None
    return name


def read_all(stream: Any) -> bytes:
    """Read *stream* to the end and return its content as bytes."""
    data = stream.read()
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def resolve_content_type(
    spec: Any,
    headers: Optional[Mapping[str, str]],
    output: OutputManager,
) -> tuple[Optional[str], Any]:
    """Decide the ``Content-Type`` for *spec* and the body to send.

    Args:
        spec: The document: ``str``, bytes-like, or a readable stream.
        headers: Headers the caller already intends to send.
        output: Receives the buffering note (verbosity >= 1).

    Returns:
        A ``(content_type, body)`` tuple. ``content_type`` is ``None`` when
        the caller's headers already declare one. ``body`` is *spec* itself
        unless the stream had to be buffered for sniffing, in which case it
        is the buffered bytes.
    """
    if has_content_type(headers):
        return None, spec

    if isinstance(spec, (str, bytes, bytearray, memoryview)):
        data = spec if isinstance(spec, str) else bytes(spec)
        return sniff_content_type(data), spec

    name = stream_name(spec)
    if name is not None:
        by_extension = content_type_for_path(name)
        if by_extension is not None:
            return by_extension, spec

    output.debug(f"Buffering {name or 'input'} to detect its content type.")
    data = read_all(spec)
    return sniff_content_type(data), data

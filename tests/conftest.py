"""Shared test fixtures for specval.

Provides spec fixture paths, a fake validator service backed by
:class:`httpx.MockTransport`, and a factory for
:class:`~specval.models.ValidationOptions` wired to in-memory streams. These
fixtures are automatically discovered by pytest and available to all test
modules without explicit imports.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from specval.models import ValidationOptions


FIXTURES_DIR = Path(__file__).parent / "fixtures"

TEST_URL = "http://validator.test/validator/debug"

INVALID_RESPONSE = {
    "messages": ["attribute paths is missing"],
    "schemaValidationMessages": [
        {"level": "error", "message": "object has missing required properties ([\"version\"])"},
    ],
}


def validator_response(request: httpx.Request) -> httpx.Response:
    """Answer like the real validator: problems for invalid.yaml, {} otherwise."""
    if b"Missing paths" in request.content:
        return httpx.Response(200, json=INVALID_RESPONSE)
    return httpx.Response(200, json={})


class FakeValidator:
    """Records requests and answers them with a swappable handler."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = validator_response
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def bodies(self) -> list[bytes]:
        return [r.content for r in self.requests]


# ---------------------------------------------------------------------------
# Spec file fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def petstore_yaml() -> Path:
    return FIXTURES_DIR / "petstore.yaml"


@pytest.fixture
def petstore_json() -> Path:
    return FIXTURES_DIR / "petstore.json"


@pytest.fixture
def invalid_yaml() -> Path:
    return FIXTURES_DIR / "invalid.yaml"


@pytest.fixture
def unknown_ext_spec() -> Path:
    """A JSON document whose extension says nothing about its type."""
    return FIXTURES_DIR / "petstore.spec"


# ---------------------------------------------------------------------------
# Fake validator and options
# ---------------------------------------------------------------------------


@pytest.fixture
def validator() -> FakeValidator:
    """A fake validator service. Swap ``validator.handler`` to change answers."""
    return FakeValidator()


@pytest.fixture
def make_options(validator: FakeValidator) -> Callable[..., ValidationOptions]:
    """Factory for options pointing at the fake validator.

    stdout and stderr are fresh :class:`io.StringIO` objects; stdin is an
    empty :class:`io.BytesIO` unless overridden.
    """

    def _make(**kwargs: Any) -> ValidationOptions:
        values: dict[str, Any] = {
            "url": TEST_URL,
            "transport": validator.transport,
            "stdin": io.BytesIO(),
            "stdout": io.StringIO(),
            "stderr": io.StringIO(),
        }
        values.update(kwargs)
        return ValidationOptions(**values)

    return _make


@pytest.fixture(autouse=True)
def _no_color(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep Rich styling out of captured output."""
    monkeypatch.setenv("NO_COLOR", "1")

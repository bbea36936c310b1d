"""Tests for the asynchronous validator client."""

from __future__ import annotations

import asyncio
import io

import httpx
import pytest

from specval.client.async_client import AsyncValidationClient
from specval.exceptions import (
    HTTPStatusError,
    SpecFileNotFoundError,
    TransportError,
    UnsupportedProtocolError,
)

from conftest import INVALID_RESPONSE, TEST_URL


def _run(options, method: str, *args):
    async def go():
        async with AsyncValidationClient(options) as client:
            return await getattr(client, method)(*args)

    return asyncio.run(go())


class TestAsyncValidate:
    def test_json_string(self, validator, make_options) -> None:
        assert _run(make_options(), "validate", '{"openapi": "3.0.3"}') == {}
        request = validator.requests[0]
        assert str(request.url) == TEST_URL
        assert request.headers["content-type"] == "application/json"

    def test_stdin_like_stream(self, validator, make_options) -> None:
        _run(make_options(), "validate", io.BytesIO(b"openapi: 3.0.3\n"))
        assert validator.requests[0].headers["content-type"] == "application/yaml"
        assert validator.bodies == [b"openapi: 3.0.3\n"]

    def test_streamed_body(self, validator, make_options) -> None:
        options = make_options(headers={"Content-Type": "application/yaml"})
        _run(options, "validate", io.BytesIO(b"a" * 200_000))
        assert validator.bodies == [b"a" * 200_000]

    def test_bad_spec_type(self, make_options) -> None:
        with pytest.raises(TypeError):
            _run(make_options(), "validate", 3.14)


class TestAsyncValidateFile:
    def test_yaml_file(self, validator, make_options, petstore_yaml) -> None:
        _run(make_options(), "validate_file", petstore_yaml)
        request = validator.requests[0]
        assert request.headers["content-type"] == "application/yaml"
        assert request.content == petstore_yaml.read_bytes()

    def test_invalid_file(self, make_options, invalid_yaml) -> None:
        assert _run(make_options(), "validate_file", invalid_yaml) == INVALID_RESPONSE

    def test_missing_file(self, make_options, tmp_path) -> None:
        with pytest.raises(SpecFileNotFoundError):
            _run(make_options(), "validate_file", tmp_path / "nope.json")


class TestAsyncErrors:
    def test_unsupported_protocol(self, validator, make_options) -> None:
        with pytest.raises(UnsupportedProtocolError):
            _run(make_options(url="file:///tmp/v"), "validate", "{}")
        assert validator.requests == []

    def test_http_status(self, validator, make_options) -> None:
        validator.handler = lambda request: httpx.Response(404, content=b"missing")
        with pytest.raises(HTTPStatusError, match="HTTP 404: Not Found") as info:
            _run(make_options(), "validate", "{}")
        assert info.value.body == b"missing"

    def test_connection_error(self, validator, make_options) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        validator.handler = refuse
        with pytest.raises(TransportError, match="connection refused"):
            _run(make_options(), "validate", "{}")

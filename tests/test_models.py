"""Tests for specval.models."""

from __future__ import annotations

import io

import httpx
import pydantic
import pytest

from specval.models import UserConfig, ValidationOptions, ValidationResult


class TestValidationOptions:
    def test_defaults(self) -> None:
        options = ValidationOptions()
        assert options.url is None
        assert options.headers == {}
        assert options.verbosity == 0
        assert options.timeout is None
        assert options.verify is True

    def test_accepts_url_object(self) -> None:
        url = httpx.URL("https://example.com")
        assert ValidationOptions(url=url).url is url

    def test_verbosity_unbounded(self) -> None:
        assert ValidationOptions(verbosity=-10).verbosity == -10
        assert ValidationOptions(verbosity=42).verbosity == 42

    def test_frozen(self) -> None:
        options = ValidationOptions()
        with pytest.raises(pydantic.ValidationError):
            options.verbosity = 3  # type: ignore[misc]

    def test_model_copy_update(self) -> None:
        options = ValidationOptions(verbosity=1)
        assert options.model_copy(update={"verbosity": 2}).verbosity == 2
        assert options.verbosity == 1

    def test_streams(self) -> None:
        options = ValidationOptions(stdin=io.BytesIO(), stdout=io.StringIO(), stderr=io.StringIO())
        assert options.stdin is not None

    def test_rejects_unreadable_stdin(self) -> None:
        with pytest.raises(TypeError, match="stdin"):
            ValidationOptions(stdin=object())

    def test_rejects_unwritable_stdout(self) -> None:
        with pytest.raises(TypeError, match="writable"):
            ValidationOptions(stdout="not a stream")

    def test_rejects_non_int_verbosity(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ValidationOptions(verbosity="loud")


class TestValidationResult:
    def test_empty_is_valid(self) -> None:
        result = ValidationResult.from_response({})
        assert result.is_valid
        assert result.diagnostics() == []

    def test_empty_lists_are_valid(self) -> None:
        result = ValidationResult.from_response({"messages": [], "schemaValidationMessages": []})
        assert result.is_valid

    def test_null_lists_are_valid(self) -> None:
        result = ValidationResult.from_response({"messages": None, "schemaValidationMessages": None})
        assert result.is_valid

    def test_messages_then_schema_messages(self) -> None:
        result = ValidationResult.from_response(
            {
                "schemaValidationMessages": [{"level": "error", "message": "bad type"}],
                "messages": ["attribute paths is missing"],
            }
        )
        assert not result.is_valid
        assert result.diagnostics() == ["attribute paths is missing", "error: bad type"]

    def test_schema_message_extra_fields_kept(self) -> None:
        result = ValidationResult.from_response(
            {"schemaValidationMessages": [{"level": "warning", "message": "m", "domain": "validation"}]}
        )
        assert result.schema_validation_messages[0].model_extra == {"domain": "validation"}

    def test_unknown_fields_preserved(self) -> None:
        result = ValidationResult.from_response({"swagger": "2.0"})
        assert result.model_extra == {"swagger": "2.0"}

    def test_non_object_response(self) -> None:
        assert ValidationResult.from_response(["messages"]).diagnostics() == []
        assert ValidationResult.from_response(None).diagnostics() == []

    def test_non_string_messages_are_stringified(self) -> None:
        result = ValidationResult.from_response({"messages": [1, {"a": 2}]})
        assert result.diagnostics() == ["1", "{'a': 2}"]


class TestUserConfig:
    def test_defaults(self) -> None:
        config = UserConfig()
        assert config.url is None
        assert config.headers == {}

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            UserConfig.model_validate({"urll": "typo"})

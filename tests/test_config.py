"""Tests for specval.config -- XDG paths and user config loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from specval.config import default_config_path, get_config_dir, load_user_config
from specval.exceptions import ConfigError
from specval.exit_codes import EXIT_INVALID_USAGE


@pytest.fixture
def xdg_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr("specval.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    return tmp_path


class TestConfigDir:
    def test_xdg_config_home(self, xdg_home: Path) -> None:
        assert get_config_dir() == xdg_home / "specval"
        assert default_config_path() == xdg_home / "specval" / "config.json"

    def test_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("specval.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".config" / "specval"

    def test_non_xdg_platform(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("specval.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".specval"

    def test_not_created(self, xdg_home: Path) -> None:
        get_config_dir()
        assert not (xdg_home / "specval").exists()


class TestLoadUserConfig:
    def test_missing_default_file_gives_defaults(self, xdg_home: Path) -> None:
        config = load_user_config()
        assert config.url is None
        assert config.headers == {}

    def test_default_location(self, xdg_home: Path) -> None:
        path = xdg_home / "specval" / "config.json"
        path.parent.mkdir()
        path.write_text(json.dumps({"url": "http://localhost/v", "headers": {"X-Key": "k"}}))
        config = load_user_config()
        assert config.url == "http://localhost/v"
        assert config.headers == {"X-Key": "k"}

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"timeout": 12.5}))
        assert load_user_config(path).timeout == 12.5

    def test_explicit_missing_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_user_config(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid config") as info:
            load_user_config(path)
        assert info.value.exit_code == EXIT_INVALID_USAGE

    def test_schema_violation(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"headers": ["not", "a", "mapping"]}))
        with pytest.raises(ConfigError):
            load_user_config(path)

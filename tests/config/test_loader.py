"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence and error mapping
"""

from __future__ import annotations

import os

from pathlib import Path
from unittest.mock import patch

import pytest

from wicketry.config.loader import PROJECT_CONFIG_NAME, _deep_merge, _load_yaml, load_config
from wicketry.core.errors import ConfigError, ErrorCode


@pytest.fixture(autouse=True)
def _no_global_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point the global config at an empty location and clear WICKETRY__ env vars."""
    for key in list(os.environ):
        if key.upper().startswith("WICKETRY__"):
            monkeypatch.delenv(key)
    with patch("wicketry.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "global" / "config.yaml"):
        yield


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        """Loads valid YAML content."""
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("logging:\n  level: DEBUG\n")

        assert _load_yaml(yaml_file) == {"logging": {"level": "DEBUG"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_invalid_yaml_raises_parse_error(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("server: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_non_mapping_raises_parse_error(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            _load_yaml(yaml_file)


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_nested_keys_merged(self) -> None:
        base = {"server": {"host": "0.0.0.0", "port": 80}}
        override = {"server": {"port": 9000}}

        assert _deep_merge(base, override) == {"server": {"host": "0.0.0.0", "port": 9000}}

    def test_base_not_mutated(self) -> None:
        base = {"a": {"b": 1}}
        _deep_merge(base, {"a": {"b": 2}})

        assert base == {"a": {"b": 1}}


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_defaults_without_any_source(self, tmp_path: Path) -> None:
        config = load_config(project_root=tmp_path)

        assert config.server.port == 8080
        assert config.filter.filter_mapping is None

    def test_project_yaml_applied(self, tmp_path: Path) -> None:
        (tmp_path / PROJECT_CONFIG_NAME).write_text(
            "filter:\n  filter_mapping: /app/*\nresources:\n  default_cache_duration_sec: 60\n"
        )

        config = load_config(project_root=tmp_path)

        assert config.filter.filter_mapping == "/app/*"
        assert config.resources.default_cache_duration_sec == 60

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / PROJECT_CONFIG_NAME).write_text("server:\n  port: 9000\n")
        monkeypatch.setenv("WICKETRY__SERVER__PORT", "9100")

        config = load_config(project_root=tmp_path)

        assert config.server.port == 9100

    def test_kwargs_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WICKETRY__SERVER__PORT", "9100")

        config = load_config(project_root=tmp_path, server={"port": 9200})

        assert config.server.port == 9200

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        (tmp_path / PROJECT_CONFIG_NAME).write_text("server:\n  port: 700000\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(project_root=tmp_path)
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"] == "server.port"

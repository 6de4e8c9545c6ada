# Copyright 2026 Pennyworth Technologies, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for configuration system."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from splinde.config import (
    ConfigLoadError,
    ConfigValidationError,
    DisplayConfig,
    NotificationConfig,
    ServerConfig,
    SplindeConfig,
    apply_env_overrides,
    generate_config_template,
    get_config,
    get_global_config_path,
    get_project_config_path,
    load_config_file,
    merge_configs,
    strip_template_comments,
)


class TestDefaults:
    def test_defaults(self):
        config = SplindeConfig()
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 8000
        assert config.notifications.duration_ms == 3000
        assert config.display.precision == 2
        assert config.data.path is None

    def test_defaults_validate(self):
        SplindeConfig().validate()


class TestValidation:
    def test_bad_port(self):
        with pytest.raises(ConfigValidationError, match="port"):
            ServerConfig(port=0).validate()
        with pytest.raises(ConfigValidationError, match="port"):
            ServerConfig(port=70000).validate()

    def test_negative_duration(self):
        with pytest.raises(ConfigValidationError, match="duration_ms"):
            NotificationConfig(duration_ms=-1).validate()

    def test_zero_duration_is_allowed(self):
        NotificationConfig(duration_ms=0).validate()

    def test_bad_display(self):
        with pytest.raises(ConfigValidationError, match="precision"):
            DisplayConfig(precision=-1).validate()
        with pytest.raises(ConfigValidationError, match="width"):
            DisplayConfig(width=0).validate()


class TestSerialization:
    def test_round_trip(self):
        config = SplindeConfig()
        config.server.port = 9001
        config.data.path = "report.yaml"
        assert SplindeConfig.from_dict(config.to_dict()) == config

    def test_strict_rejects_unknown_top_level(self):
        with pytest.raises(ConfigValidationError, match="top-level"):
            SplindeConfig.from_dict({"colour": "blue"}, strict=True)

    def test_strict_rejects_unknown_nested(self):
        with pytest.raises(ConfigValidationError, match="server"):
            SplindeConfig.from_dict({"server": {"hots": "x"}}, strict=True)

    def test_lenient_ignores_unknown(self):
        config = SplindeConfig.from_dict({"colour": "blue", "server": {"port": 9000}})
        assert config.server.port == 9000


class TestLoadConfigFile:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config_file(tmp_path / "none.json") == SplindeConfig()

    def test_loads_partial_file(self, tmp_path):
        path = tmp_path / "splinde.json"
        path.write_text(json.dumps({"display": {"precision": 0}}))
        config = load_config_file(path)
        assert config.display.precision == 0
        assert config.display.width == 120

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "splinde.json"
        path.write_text("{oops")
        with pytest.raises(ConfigLoadError, match="Invalid JSON"):
            load_config_file(path)

    def test_non_object(self, tmp_path):
        path = tmp_path / "splinde.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigLoadError, match="JSON object"):
            load_config_file(path)

    def test_template_loads_strictly(self, tmp_path):
        path = tmp_path / "splinde.json"
        path.write_text(json.dumps(generate_config_template()))
        config = load_config_file(path, strict=True)
        assert config == SplindeConfig()


class TestMerge:
    def test_later_overrides_earlier(self):
        first = SplindeConfig()
        first.server.port = 9000
        second = SplindeConfig()
        second.server.port = 9100
        assert merge_configs(first, second).server.port == 9100

    def test_defaults_do_not_override(self):
        first = SplindeConfig()
        first.display.precision = 4
        merged = merge_configs(first, SplindeConfig())
        assert merged.display.precision == 4

    def test_inputs_untouched(self):
        first = SplindeConfig()
        second = SplindeConfig()
        second.data.path = "x.json"
        merge_configs(first, second)
        assert first.data.path is None

    def test_no_configs(self):
        assert merge_configs() == SplindeConfig()


class TestEnvOverrides:
    def test_env_values(self, monkeypatch):
        monkeypatch.setenv("SPLINDE_HOST", "0.0.0.0")
        monkeypatch.setenv("SPLINDE_PORT", "8123")
        monkeypatch.setenv("SPLINDE_NOTIFY_DURATION_MS", "0")
        monkeypatch.setenv("SPLINDE_DATA", "tree.yaml")
        monkeypatch.setenv("SPLINDE_PRECISION", "3")
        config = apply_env_overrides(SplindeConfig())
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 8123
        assert config.notifications.duration_ms == 0
        assert config.data.path == "tree.yaml"
        assert config.display.precision == 3

    def test_non_integer_env(self, monkeypatch):
        monkeypatch.setenv("SPLINDE_PORT", "eighty")
        with pytest.raises(ConfigValidationError, match="SPLINDE_PORT"):
            apply_env_overrides(SplindeConfig())


class TestGetConfig:
    def test_paths(self, tmp_path):
        assert get_global_config_path() == Path.home() / ".splinde_config.json"
        assert get_project_config_path(tmp_path) == tmp_path / "splinde.json"
        assert get_project_config_path() == Path.cwd() / "splinde.json"

    def test_precedence(self, monkeypatch):
        get_global_config_path().write_text(json.dumps({
            "server": {"port": 9000, "host": "10.0.0.1"},
            "display": {"precision": 4},
        }))
        get_project_config_path().write_text(json.dumps({"server": {"port": 9100}}))
        monkeypatch.setenv("SPLINDE_PRECISION", "1")

        config = get_config()
        assert config.server.host == "10.0.0.1"
        assert config.server.port == 9100
        assert config.display.precision == 1

    def test_explicit_config_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"notifications": {"duration_ms": 10}}))
        assert get_config(config_path=path).notifications.duration_ms == 10

    def test_invalid_result_raises(self):
        get_project_config_path().write_text(json.dumps({"server": {"port": -1}}))
        with pytest.raises(ConfigValidationError):
            get_config()


def test_strip_template_comments():
    data = {"a": 1, "_comment": "x", "b": {"_comment_c": "y", "c": 2}}
    assert strip_template_comments(data) == {"a": 1, "b": {"c": 2}}

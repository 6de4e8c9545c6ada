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

"""Configuration system for SPLINDE.

Provides hierarchical configuration with precedence:
1. CLI flags (highest)
2. Environment variables
3. Project config (./splinde.json)
4. Global config (~/.splinde_config.json)
5. Hardcoded defaults (lowest)
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from splinde.errors import SplindeError
from splinde.notifications import DEFAULT_DURATION_MS

logger = logging.getLogger(__name__)

# Hardcoded defaults
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_PRECISION = 2
DEFAULT_WIDTH = 120

PROJECT_CONFIG_NAME = "splinde.json"
GLOBAL_CONFIG_NAME = ".splinde_config.json"

# Environment variable names
ENV_HOST = "SPLINDE_HOST"
ENV_PORT = "SPLINDE_PORT"
ENV_NOTIFY_DURATION_MS = "SPLINDE_NOTIFY_DURATION_MS"
ENV_DATA = "SPLINDE_DATA"
ENV_PRECISION = "SPLINDE_PRECISION"


class ConfigValidationError(SplindeError):
    """Raised when configuration validation fails."""

    pass


class ConfigLoadError(SplindeError):
    """Raised when configuration file cannot be loaded."""

    pass


def _reject_unknown(cls: type, data: dict[str, Any], section: str) -> None:
    known_fields = {f.name for f in fields(cls)}
    unknown = set(data.keys()) - known_fields
    if unknown:
        raise ConfigValidationError(
            f"Unknown fields in {section} config: {', '.join(sorted(unknown))}"
        )


@dataclass
class ServerConfig:
    """HTTP server configuration."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def validate(self) -> None:
        if not isinstance(self.port, int) or not 0 < self.port < 65536:
            raise ConfigValidationError(
                f"port must be between 1 and 65535, got {self.port}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {"host": self.host, "port": self.port}

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "ServerConfig":
        if strict:
            _reject_unknown(cls, data, "server")
        return cls(
            host=data.get("host", DEFAULT_HOST),
            port=data.get("port", DEFAULT_PORT),
        )


@dataclass
class NotificationConfig:
    """Toast notification configuration."""

    duration_ms: int = DEFAULT_DURATION_MS

    def validate(self) -> None:
        if not isinstance(self.duration_ms, int) or self.duration_ms < 0:
            raise ConfigValidationError(
                f"duration_ms must be a non-negative integer, got {self.duration_ms}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {"duration_ms": self.duration_ms}

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "NotificationConfig":
        if strict:
            _reject_unknown(cls, data, "notifications")
        return cls(duration_ms=data.get("duration_ms", DEFAULT_DURATION_MS))


@dataclass
class DisplayConfig:
    """Rendering configuration."""

    precision: int = DEFAULT_PRECISION
    width: int = DEFAULT_WIDTH
    icons: bool = True

    def validate(self) -> None:
        if not isinstance(self.precision, int) or self.precision < 0:
            raise ConfigValidationError(
                f"precision must be a non-negative integer, got {self.precision}"
            )
        if not isinstance(self.width, int) or self.width <= 0:
            raise ConfigValidationError(f"width must be positive, got {self.width}")

    def to_dict(self) -> dict[str, Any]:
        return {"precision": self.precision, "width": self.width, "icons": self.icons}

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "DisplayConfig":
        if strict:
            _reject_unknown(cls, data, "display")
        return cls(
            precision=data.get("precision", DEFAULT_PRECISION),
            width=data.get("width", DEFAULT_WIDTH),
            icons=data.get("icons", True),
        )


@dataclass
class DataConfig:
    """Where the initial tree comes from (None means the demo report)."""

    path: str | None = None

    def to_dict(self, exclude_none: bool = False) -> dict[str, Any]:
        result = {"path": self.path}
        if exclude_none:
            return {k: v for k, v in result.items() if v is not None}
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "DataConfig":
        if strict:
            _reject_unknown(cls, data, "data")
        return cls(path=data.get("path"))


@dataclass
class SplindeConfig:
    """Main configuration container."""

    version: str = "1"
    server: ServerConfig = field(default_factory=ServerConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    data: DataConfig = field(default_factory=DataConfig)

    def validate(self) -> None:
        """Validate entire configuration."""
        self.server.validate()
        self.notifications.validate()
        self.display.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "server": self.server.to_dict(),
            "notifications": self.notifications.to_dict(),
            "display": self.display.to_dict(),
            "data": self.data.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], strict: bool = False) -> "SplindeConfig":
        if strict:
            _reject_unknown(cls, data, "top-level")

        return cls(
            version=str(data.get("version", "1")),
            server=ServerConfig.from_dict(data.get("server", {}), strict),
            notifications=NotificationConfig.from_dict(data.get("notifications", {}), strict),
            display=DisplayConfig.from_dict(data.get("display", {}), strict),
            data=DataConfig.from_dict(data.get("data", {}), strict),
        )


def get_global_config_path() -> Path:
    """Get path to global config file."""
    return Path.home() / GLOBAL_CONFIG_NAME


def get_project_config_path(project_dir: Path | None = None) -> Path:
    """Get path to project config file."""
    return (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME


def load_config_file(path: Path, strict: bool = False) -> SplindeConfig:
    """Load configuration from a JSON file.

    A missing file yields the defaults.

    Raises:
        ConfigLoadError: If file cannot be read or parsed
        ConfigValidationError: If strict=True and unknown fields found
    """
    if not path.exists():
        return SplindeConfig()

    try:
        content = path.read_text()
    except PermissionError as e:
        raise ConfigLoadError(f"Permission denied reading {path}: {e}")
    except OSError as e:
        raise ConfigLoadError(f"Error reading {path}: {e}")

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigLoadError(f"Invalid JSON in {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigLoadError(f"Config in {path} must be a JSON object")

    return SplindeConfig.from_dict(strip_template_comments(data), strict=strict)


def merge_configs(*configs: SplindeConfig) -> SplindeConfig:
    """Merge multiple configs with later configs taking precedence.

    Only values that differ from the defaults override earlier configs, so
    partial config files layer properly.
    """
    if not configs:
        return SplindeConfig()

    defaults = SplindeConfig()
    result = copy.deepcopy(configs[0])

    for config in configs[1:]:
        if config.server.host != defaults.server.host:
            result.server.host = config.server.host
        if config.server.port != defaults.server.port:
            result.server.port = config.server.port

        if config.notifications.duration_ms != defaults.notifications.duration_ms:
            result.notifications.duration_ms = config.notifications.duration_ms

        if config.display.precision != defaults.display.precision:
            result.display.precision = config.display.precision
        if config.display.width != defaults.display.width:
            result.display.width = config.display.width
        if config.display.icons != defaults.display.icons:
            result.display.icons = config.display.icons

        if config.data.path is not None:
            result.data.path = config.data.path

    return result


def _int_from_env(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ConfigValidationError(f"{name} must be an integer, got '{raw}'")


def apply_env_overrides(config: SplindeConfig) -> SplindeConfig:
    """Apply environment variable overrides to config.

    Raises:
        ConfigValidationError: If an env var value is invalid
    """
    result = copy.deepcopy(config)

    if host := os.environ.get(ENV_HOST):
        result.server.host = host

    if port := os.environ.get(ENV_PORT):
        result.server.port = _int_from_env(ENV_PORT, port)

    if duration := os.environ.get(ENV_NOTIFY_DURATION_MS):
        result.notifications.duration_ms = _int_from_env(ENV_NOTIFY_DURATION_MS, duration)

    if data_path := os.environ.get(ENV_DATA):
        result.data.path = data_path

    if precision := os.environ.get(ENV_PRECISION):
        result.display.precision = _int_from_env(ENV_PRECISION, precision)

    logger.debug("Config after env overrides: %s", result.to_dict())
    return result


def get_config(
    project_dir: Path | None = None,
    config_path: Path | None = None,
) -> SplindeConfig:
    """Load and merge configuration from all sources.

    Loads in order (later sources override earlier):
    1. Hardcoded defaults
    2. Global config (~/.splinde_config.json)
    3. Project config (./splinde.json, or ``config_path`` if given)
    4. Environment variables

    Returns:
        Merged, validated configuration
    """
    global_config = load_config_file(get_global_config_path())
    project_config = load_config_file(config_path or get_project_config_path(project_dir))

    merged = merge_configs(SplindeConfig(), global_config, project_config)
    result = apply_env_overrides(merged)
    result.validate()
    return result


def generate_config_template() -> dict[str, Any]:
    """Generate a config template dictionary with explanatory comments."""
    return {
        "version": "1",
        "_comment_version": "Config file format version",
        "server": {
            "host": DEFAULT_HOST,
            "port": DEFAULT_PORT,
            "_comment": "Address 'splinde serve' binds to",
        },
        "notifications": {
            "duration_ms": DEFAULT_DURATION_MS,
            "_comment_duration_ms": "How long toasts stay visible; 0 keeps them until dismissed",
        },
        "display": {
            "precision": DEFAULT_PRECISION,
            "_comment_precision": "Decimals shown for values and totals",
            "width": DEFAULT_WIDTH,
            "_comment_width": "Terminal width for 'splinde show'",
            "icons": True,
            "_comment_icons": "Show an icon next to each node name",
        },
        "data": {
            "path": None,
            "_comment_path": "JSON or YAML tree file to load (demo report when unset)",
        },
    }


def strip_template_comments(data: Any) -> Any:
    """Drop the ``_comment*`` keys a template carries."""
    if isinstance(data, dict):
        return {
            k: strip_template_comments(v)
            for k, v in data.items()
            if not k.startswith("_comment")
        }
    return data

"""Cascading configuration layers for websearch.

Configuration priority (highest first):
1. Environment variables
2. .websearch/config.local.toml (git-ignored, per-machine overrides)
3. .websearch/config.toml (project-specific)
4. ~/.websearch/config.toml (user defaults)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib


logger = logging.getLogger("websearch.config")

CONFIG_DIR_NAME = ".websearch"


@dataclass
class ConfigLayer:
    """A single layer in the configuration cascade."""

    name: str
    path: Path | None
    data: dict[str, Any] = field(default_factory=dict)
    source: str = ""

    @classmethod
    def from_file(cls, path: Path) -> ConfigLayer:
        """Load a config layer from a TOML file."""
        if not path.exists():
            return cls(name=path.stem, path=path, data={}, source="file")

        try:
            data = tomllib.loads(path.read_bytes().decode())
            return cls(name=path.stem, path=path, data=data, source="file")
        except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
            logger.warning(
                "config_load_failed",
                extra={"data": {"path": str(path), "error": str(e)}},
            )
            return cls(name=path.stem, path=path, data={}, source="file")

    @classmethod
    def from_env(cls) -> ConfigLayer:
        """Load config from environment variables."""
        data: dict[str, Any] = {}

        if browser := os.getenv("WEBSEARCH_BROWSER"):
            data["browser"] = browser

        if level := os.getenv("WEBSEARCH_LOG_LEVEL"):
            data["log_level"] = level

        new_window = os.getenv("WEBSEARCH_NEW_WINDOW")
        if new_window is not None:
            data["new_window"] = new_window.strip().lower() in ("1", "true", "yes")

        return cls(name="environment", path=None, data=data, source="env")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a nested value using dot notation."""
        return _lookup(self.data, key, default)


class CascadingConfig:
    """Manages multiple configuration layers with proper override behavior."""

    def __init__(self, workspace: Path | None = None, user_dir: Path | None = None):
        self.workspace = workspace
        self.user_dir = user_dir or Path.home() / CONFIG_DIR_NAME
        self.layers: list[ConfigLayer] = []
        self._merged: dict[str, Any] = {}
        self._load_layers()

    def _load_layers(self):
        """Load all config layers in priority order (lowest first)."""
        self.layers = []

        # 1. User defaults (~/.websearch/config.toml)
        self.layers.append(ConfigLayer.from_file(self.user_dir / "config.toml"))

        if self.workspace:
            # 2. Project config (.websearch/config.toml)
            project_dir = self.workspace / CONFIG_DIR_NAME
            self.layers.append(ConfigLayer.from_file(project_dir / "config.toml"))

            # 3. Local config (.websearch/config.local.toml)
            self.layers.append(ConfigLayer.from_file(project_dir / "config.local.toml"))

        # 4. Environment variables (highest priority)
        self.layers.append(ConfigLayer.from_env())

        # Merge layers (later layers override earlier ones)
        self._merged = self._merge_layers()

    def _merge_layers(self) -> dict[str, Any]:
        """Merge all layers into a single config dict."""
        merged: dict[str, Any] = {}

        for layer in self.layers:
            self._deep_merge(merged, layer.data)

        return merged

    @staticmethod
    def _deep_merge(base: dict, updates: dict):
        """Deep merge two dicts."""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                CascadingConfig._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value using dot notation."""
        return _lookup(self._merged, key, default)

    def get_sources(self, key: str) -> list[str]:
        """Find which config layers contributed to a key."""
        sources = []
        for layer in reversed(self.layers):  # Check highest priority first
            value = layer.get(key)
            if value is not None:
                sources.append(f"{layer.name} ({layer.source})")
        return sources

    def reload(self):
        """Reload all configuration layers."""
        self._load_layers()


def _lookup(data: dict[str, Any], key: str, default: Any) -> Any:
    current: Any = data
    for part in key.split("."):
        if isinstance(current, dict):
            current = current.get(part)
            if current is None:
                return default
        else:
            return default
    return current

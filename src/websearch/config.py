"""Configuration management for websearch.

Config loading priority (highest first):
1. Environment variables
2. .websearch/config.local.toml (git-ignored, per-machine)
3. .websearch/config.toml (project-specific)
4. ~/.websearch/config.toml (user defaults)

Example::

    browser = "firefox"
    disable = ["yahoo"]

    [engines.pypi]
    title = "PyPI"
    url = "https://pypi.org/search/?q=%s"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from websearch.cascade import CONFIG_DIR_NAME, CascadingConfig
from websearch.engines import EngineDefinition, resolve_filter


@dataclass
class EngineConfig:
    """A user-defined engine. ``filter`` is a filter name or "module:function"."""

    id: str
    title: str
    url: str
    filter: str | None = None

    @classmethod
    def from_dict(cls, engine_id: str, data: Any) -> EngineConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Engine '{engine_id}' must be a table")
        for key in ("url", "title", "filter"):
            if key in data and not isinstance(data[key], str):
                raise ValueError(f"Engine '{engine_id}': '{key}' must be a string")
        url = data.get("url")
        if not url:
            raise ValueError(f"Engine '{engine_id}' is missing 'url'")
        return cls(
            id=engine_id,
            title=data.get("title") or engine_id,
            url=url,
            filter=data.get("filter") or None,
        )

    def to_definition(self) -> EngineDefinition:
        text_filter = resolve_filter(self.filter) if self.filter else None
        return EngineDefinition(self.id, self.title, self.url, text_filter)


@dataclass
class Config:
    """Global configuration."""

    data_dir: Path = field(default_factory=lambda: Path.home() / CONFIG_DIR_NAME)
    browser: str | None = None
    new_window: bool = False
    log_level: str = "INFO"
    disabled: list[str] = field(default_factory=list)
    engines: dict[str, EngineConfig] = field(default_factory=dict)

    @property
    def config_path(self) -> Path:
        return self.data_dir / "config.toml"

    @property
    def history_path(self) -> Path:
        return self.data_dir / "history"

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"

    def ensure_data_dir(self):
        self.data_dir.mkdir(parents=True, exist_ok=True)

    # ── Loading ──────────────────────────────────────────────

    @classmethod
    def load(
        cls,
        workspace: Path | None = None,
        data_dir: Path | None = None,
    ) -> Config:
        """Load config from the cascade (env > local > project > user).

        Raises ValueError for malformed engine entries.
        """
        cfg = cls(data_dir=data_dir) if data_dir else cls()
        cascade = CascadingConfig(workspace=workspace, user_dir=cfg.data_dir)
        cfg._apply_cascade(cascade)
        return cfg

    def _apply_cascade(self, cascade: CascadingConfig):
        self.browser = cascade.get("browser") or None
        self.new_window = bool(cascade.get("new_window", False))
        self.log_level = str(cascade.get("log_level", "INFO"))

        disabled = cascade.get("disable", [])
        if not isinstance(disabled, list):
            raise ValueError("'disable' must be a list of engine ids")
        self.disabled = [str(d) for d in disabled]

        engines = cascade.get("engines", {})
        if not isinstance(engines, dict):
            raise ValueError("'engines' must be a table of engine tables")
        for engine_id, data in engines.items():
            self.engines[engine_id] = EngineConfig.from_dict(engine_id, data)

    # ── Accessors ────────────────────────────────────────────

    def engine_definitions(self) -> list[EngineDefinition]:
        """Engines defined in config, with filters resolved."""
        return [e.to_definition() for e in self.engines.values()]

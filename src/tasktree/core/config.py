"""Application settings via pydantic-settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from tasktree.core.exceptions import ConfigError

# Prefix used by the editor configuration section these options come from.
CONFIG_SECTION = "agenticTools"


class SearchSettings(BaseModel):
    """Tunables for ranking and paging search results."""

    model_config = ConfigDict(extra="forbid")

    threshold: float = Field(0.3, ge=0.1, le=1.0)
    max_results: int = Field(200, ge=10, le=1000)
    page_size: int = Field(20, ge=5, le=100)
    # Keystroke debounce applied by interactive callers before searching.
    debounce_ms: int = Field(300, ge=0)


class PerformanceSettings(BaseModel):
    """Switches for the scorer's early-exit optimisation."""

    model_config = ConfigDict(extra="forbid")

    enable_early_termination: bool = True
    low_score_threshold: float = Field(0.1, ge=0.01, le=0.5)


class FileWatchingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    debounce_ms: int = Field(500, ge=0)


class Settings(BaseSettings):
    """Global configuration for tasktree.

    Values can be set via environment variables prefixed with TASKTREE_,
    using ``__`` for nesting, e.g. TASKTREE_SEARCH__MAX_RESULTS=50.
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKTREE_",
        env_nested_delimiter="__",
    )

    search: SearchSettings = Field(default_factory=SearchSettings)
    performance: PerformanceSettings = Field(default_factory=PerformanceSettings)
    file_watching: FileWatchingSettings = Field(default_factory=FileWatchingSettings)


def _snake_case(name: str) -> str:
    out: list[str] = []
    for ch in name:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out)


def _nest_dotted(flat: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Turn ``{"search.maxResults": 50}`` into ``{"search": {"max_results": 50}}``."""
    nested: dict[str, dict[str, Any]] = {}
    section_prefix = CONFIG_SECTION + "."
    for key, value in flat.items():
        if key.startswith(section_prefix):
            key = key[len(section_prefix):]
        group, sep, option = key.partition(".")
        if not sep:
            raise ConfigError(f"Unrecognised configuration key: {key!r}")
        nested.setdefault(_snake_case(group), {})[_snake_case(option)] = value
    return nested


def load_settings(config_path: Path | None = None) -> Settings:
    """Load and validate settings.

    Parameters
    ----------
    config_path:
        Optional JSON file holding dotted editor-style keys, e.g.
        ``{"agenticTools.search.threshold": 0.5}``.  Values found there
        override environment variables.  When ``None`` only the
        environment and built-in defaults are used.

    Raises
    ------
    ConfigError
        If the file cannot be parsed or a value is out of range.
    """
    overrides: dict[str, Any] = {}
    if config_path is not None:
        try:
            raw = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigError(f"Cannot read settings file {config_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"Settings file {config_path} must contain a JSON object")
        overrides = _nest_dotted(raw)

    try:
        if not overrides:
            return Settings()
        # Merge file values over environment values group by group so a file
        # that only sets one search option keeps the others.
        base = Settings().model_dump()
        for group, values in overrides.items():
            if group not in base:
                raise ConfigError(f"Unrecognised configuration group: {group!r}")
            base[group].update(values)
        return Settings(**base)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

"""Catalog config persistence - the configured repository set.

File format (YAML):

    version: 1
    default_platforms: [claude, opencode, codex, gemini]
    repos:
      <name>: {url: ..., name: ..., path: ..., added_at: RFC3339}

Writes are atomic (temp file in the same directory, then rename), so an
interrupted write leaves the previous file intact.
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator
from pydantic import model_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_VERSION = 1

PLATFORMS = ["claude", "opencode", "codex", "gemini"]


class RepoEntry(BaseModel):
    """One configured repository source.

    ``path`` is always ``<cache dir>/<name>``.
    """

    name: str = Field(..., description="Unique repository name")
    url: str = Field(..., description="Remote git URL")
    path: Path = Field(..., description="Local cache clone path")
    added_at: datetime = Field(..., description="When the repository was added")


class CatalogConfig(BaseModel):
    """Top-level config document. Unknown top-level keys survive a rewrite."""

    model_config = ConfigDict(extra="allow")

    version: int = CONFIG_VERSION
    default_platforms: list[str] = Field(default_factory=lambda: list(PLATFORMS))
    repos: dict[str, RepoEntry] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fill_repo_names(cls, data: Any) -> Any:
        """Entries may omit ``name``; the mapping key supplies it."""
        if isinstance(data, dict) and isinstance(data.get("repos"), dict):
            repos = {}
            for key, entry in data["repos"].items():
                if isinstance(entry, dict) and not entry.get("name"):
                    entry = {**entry, "name": key}
                repos[key] = entry
            data = {**data, "repos": repos}
        return data

    @field_validator("version")
    @classmethod
    def _check_version(cls, value: int) -> int:
        if value != CONFIG_VERSION:
            raise ValueError(f"unsupported config version: {value}")
        return value

    @field_validator("default_platforms")
    @classmethod
    def _check_platforms(cls, value: list[str]) -> list[str]:
        for platform in value:
            if platform not in PLATFORMS:
                raise ValueError(f"invalid default platform: {platform}")
        return value


def load_config(path: Path) -> CatalogConfig:
    """Load the config file.

    A missing file yields the default config (no repositories).

    Raises:
        ConfigError: File unreadable, not valid YAML, or fails validation
    """
    if not path.exists():
        return CatalogConfig()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"cannot read config file {path}: {e}") from e

    if data is None:
        return CatalogConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")

    try:
        return CatalogConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid config file {path}: {e}") from e


def save_config(path: Path, config: CatalogConfig) -> None:
    """Write the config atomically.

    Raises:
        ConfigError: Directory cannot be created or the write/rename failed
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"cannot create config directory {path.parent}: {e}") from e

    document = config.model_dump(mode="json")

    # Write to temp file first (atomic write pattern)
    try:
        tmp_file = tempfile.NamedTemporaryFile(
            mode="w", encoding="utf-8", dir=path.parent, prefix=".config-", suffix=".tmp", delete=False
        )
    except OSError as e:
        raise ConfigError(f"cannot create temporary file in {path.parent}: {e}") from e

    with tmp_file:
        temp_path = Path(tmp_file.name)
        try:
            yaml.safe_dump(document, tmp_file, default_flow_style=False, sort_keys=False)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())

            # Atomic rename
            temp_path.replace(path)

        except (OSError, yaml.YAMLError) as e:
            with contextlib.suppress(OSError):
                temp_path.unlink()
            raise ConfigError(f"cannot write config file {path}: {e}") from e

    logger.debug(f"Saved config with {len(config.repos)} repositories to {path}")

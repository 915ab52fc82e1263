"""CLI path policy and dependency injection helpers.

Centralizes where the CLI keeps its config and repository cache. Library
code receives paths via injection; this module makes the CLI's choices.
"""

from __future__ import annotations

import os
from pathlib import Path

from .repos.manager import RepoManager
from .resources.scanner import Scanner

APP_NAME = "skillhub"


def get_config_home() -> Path:
    """Directory holding the config file.

    ``$SKILLHUB_CONFIG_DIR`` wins; otherwise ``$XDG_CONFIG_HOME/skillhub``
    (``~/.config/skillhub`` when unset).
    """
    override = os.environ.get("SKILLHUB_CONFIG_DIR")
    if override:
        return Path(override).expanduser()
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base).expanduser() / APP_NAME


def get_cache_home() -> Path:
    """``$XDG_CACHE_HOME/skillhub`` (``~/.cache/skillhub`` when unset)."""
    base = os.environ.get("XDG_CACHE_HOME") or Path.home() / ".cache"
    return Path(base).expanduser() / APP_NAME


def get_config_path() -> Path:
    return get_config_home() / "config.yaml"


def get_repos_cache_dir() -> Path:
    """One shallow clone per configured repository lives here."""
    return get_cache_home() / "repos"


def get_log_path() -> Path:
    return get_cache_home() / f"{APP_NAME}.log.jsonl"


# ===== DEPENDENCY INJECTION HELPERS =====


def create_repo_manager() -> RepoManager:
    """Create a RepoManager bound to the CLI's config and cache locations."""
    return RepoManager(config_path=get_config_path(), cache_dir=get_repos_cache_dir())


def create_scanner() -> Scanner:
    """Create the resource scanner used by search and lookup commands."""
    return Scanner()

"""Repository lifecycle - add, list, get, update, remove.

The manager exclusively owns the configured repository set. Mutations are
ordered so the config file and the cache directory never disagree after a
failed operation:

- add: validate everything first, clone, then persist (rolling back the
  clone when the write fails)
- remove: persist first, then delete the clone
"""

from __future__ import annotations

import logging
import re
import shutil
from datetime import UTC
from datetime import datetime
from pathlib import Path
from types import ModuleType
from typing import Any

from . import git as git_module
from .config import RepoEntry
from .config import load_config
from .config import save_config
from .errors import CacheCleanupFailedError
from .errors import CloneError
from .errors import ConfigError
from .errors import InvalidNameError
from .errors import NameCollisionError
from .errors import RepoError
from .errors import RepoNotFoundError
from .errors import RepoUpdateError

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"[a-z][a-z0-9]*(-[a-z0-9]+)*")


def validate_name(name: str) -> None:
    """Raise InvalidNameError unless ``name`` is lowercase, hyphen-separated, letter-first."""
    if not NAME_PATTERN.fullmatch(name):
        raise InvalidNameError(name)


def derive_name_from_url(url: str) -> str:
    """Repository name implied by a URL: last path segment, no ``.git``, lowercased.

    Example:
        >>> derive_name_from_url("git@github.com:user/My-Skills.git")
        'my-skills'
    """
    tail = url.rstrip("/")
    if "://" not in tail and ":" in tail:
        tail = tail.rsplit(":", 1)[1]
    tail = tail.rsplit("/", 1)[-1]
    if tail.endswith(".git"):
        tail = tail[: -len(".git")]
    return tail.lower()


class RepoManager:
    """Owns the config file and the cache directory of cloned repositories.

    Args:
        config_path: YAML config file
        cache_dir: Directory holding one clone per repository
        git: Object providing ``clone(url, dest, depth)``, ``pull(path)``,
            ``validate_url(url)`` and ``validate_remote(path)``; defaults to
            the subprocess-backed :mod:`skillhub_cli.repos.git`
    """

    def __init__(self, config_path: Path, cache_dir: Path, git: ModuleType | Any | None = None):
        self.config_path = Path(config_path)
        self.cache_dir = Path(cache_dir)
        self.git = git if git is not None else git_module

    def add(self, url: str, name: str | None = None) -> RepoEntry:
        """Clone a repository and register it.

        Raises:
            InvalidURLError: URL rejected (no side effects)
            InvalidNameError: Name rejected (no side effects)
            NameCollisionError: Name already configured (no side effects)
            CloneError: Clone failed; partial clone removed
            ConfigError: Config unreadable, or the write failed and the clone was rolled back
        """
        self.git.validate_url(url)

        name = name or derive_name_from_url(url)
        validate_name(name)

        config = load_config(self.config_path)
        existing = config.repos.get(name)
        if existing is not None:
            raise NameCollisionError(name, existing.url)

        dest = self.cache_dir / name
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CloneError(f"cannot create cache directory {self.cache_dir}: {e}") from e

        if dest.exists():
            # Leftover from an earlier remove whose cleanup failed
            logger.warning(f"Removing stale cache directory {dest}")
            _remove_partial(dest)

        logger.info(f"Cloning {url} into {dest}")
        try:
            self.git.clone(url, dest, depth=1)
        except (RepoError, OSError) as e:
            message = f"failed to clone {url}: {e}"
            if not _remove_partial(dest):
                message += f" (could not remove partial clone at {dest})"
            raise CloneError(message) from e

        entry = RepoEntry(name=name, url=url, path=dest, added_at=datetime.now(UTC))
        config.repos[name] = entry
        try:
            save_config(self.config_path, config)
        except ConfigError:
            logger.warning(f"Config write failed; rolling back clone at {dest}")
            _remove_partial(dest)
            raise

        logger.info(f"Added repository {name} ({url})")
        return entry

    def list(self) -> list[RepoEntry]:
        """All configured repositories ordered by name. Absent config means none."""
        config = load_config(self.config_path)
        return [config.repos[name] for name in sorted(config.repos)]

    def get(self, name: str) -> RepoEntry:
        """Raises RepoNotFoundError if ``name`` is not configured."""
        config = load_config(self.config_path)
        entry = config.repos.get(name)
        if entry is None:
            raise RepoNotFoundError(name)
        return entry

    def update(self, name: str | None = None) -> list[RepoEntry]:
        """Pull one repository, or every repository when ``name`` is empty.

        Updating all attempts every repository even after a failure; the
        failures are reported together at the end.

        Returns:
            Entries that were pulled successfully

        Raises:
            RepoNotFoundError: ``name`` is not configured
            GitError: Single-repository pull failed
            RepoUpdateError: One or more repositories failed during update-all
        """
        if name:
            entry = self.get(name)
            logger.info(f"Updating repository {entry.name}")
            self.update_by_path(entry.path)
            return [entry]

        updated: list[RepoEntry] = []
        failures: dict[str, Exception] = {}
        for entry in self.list():
            logger.info(f"Updating repository {entry.name}")
            try:
                self.update_by_path(entry.path)
            except (RepoError, OSError) as e:
                logger.warning(f"Failed to update {entry.name}: {e}")
                failures[entry.name] = e
                continue
            updated.append(entry)

        if failures:
            raise RepoUpdateError(failures)
        return updated

    def update_by_path(self, path: Path) -> None:
        """Pull a clone directly by path, bypassing the config.

        Checks for a git working tree first, so a deleted clone reports
        "not a git repository" rather than a raw git failure.

        Raises:
            GitError: Not a git working tree, or the pull failed
        """
        self.git.validate_remote(path)
        self.git.pull(path)

    def remove(self, name: str) -> None:
        """Unregister a repository, then delete its clone.

        The config is written before the directory is deleted, so once this
        returns (normally or with CacheCleanupFailedError) the name is gone
        from :meth:`list`.

        Raises:
            RepoNotFoundError: ``name`` is not configured
            ConfigError: Config write failed (nothing was changed)
            CacheCleanupFailedError: Unregistered, but the directory remains
        """
        config = load_config(self.config_path)
        entry = config.repos.pop(name, None)
        if entry is None:
            raise RepoNotFoundError(name)

        save_config(self.config_path, config)
        logger.info(f"Removed repository {name} from config")

        if not entry.path.exists():
            return
        try:
            shutil.rmtree(entry.path)
        except OSError as e:
            logger.warning(f"Failed to remove cache directory {entry.path}: {e}")
            raise CacheCleanupFailedError(name, entry.path, str(e)) from e


def _remove_partial(path: Path) -> bool:
    """Best-effort delete of a clone directory. True if it is gone afterwards."""
    shutil.rmtree(path, ignore_errors=True)
    return not path.exists()

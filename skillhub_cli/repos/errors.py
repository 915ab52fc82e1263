"""Repository lifecycle errors.

Every failed mutation surfaces as one of these, so callers can offer
remediation by type (e.g. suggest ``--name`` on a collision) instead of
matching message text.
"""

from __future__ import annotations

from pathlib import Path


class RepoError(Exception):
    """Base class for repository lifecycle errors."""


class RepoNotFoundError(RepoError):
    """Repository name is not in the configured set."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"repository {name!r} not found")


class InvalidURLError(RepoError):
    """Remote locator failed the allow-list."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"invalid git URL: {reason}")


class InvalidNameError(RepoError):
    """Repository name failed the naming pattern."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"invalid repository name {name!r}: must be lowercase alphanumeric with hyphens, starting with a letter"
        )


class NameCollisionError(RepoError):
    """A repository with this name is already configured."""

    def __init__(self, name: str, existing_url: str):
        self.name = name
        self.existing_url = existing_url
        super().__init__(f"name {name!r} is already used by {existing_url}")


class CacheCleanupFailedError(RepoError):
    """Repository was removed from config but its cache directory remains.

    Partial success: the repository is logically gone.
    """

    def __init__(self, name: str, path: Path, reason: str):
        self.name = name
        self.path = path
        self.reason = reason
        super().__init__(f"config updated but failed to remove cached directory {str(path)!r}: {reason}")


class CloneError(RepoError):
    """Clone failed; any partial destination was removed."""


class RepoUpdateError(RepoError):
    """One or more repositories failed to update.

    Attributes:
        failures: Repository name -> exception, for each failed repository
    """

    def __init__(self, failures: dict[str, Exception]):
        self.failures = failures
        details = "\n  ".join(f"{name}: {err}" for name, err in failures.items())
        super().__init__(f"some repositories failed to update:\n  {details}")


class ConfigError(RepoError):
    """Config file could not be read, validated, or written."""


class GitError(RepoError):
    """A git subprocess failed."""


class NoReposConfiguredError(RepoError):
    """An operation needs repositories but none are configured."""

    def __init__(self) -> None:
        super().__init__("no repositories configured")

"""Exact-name resource lookup across configured repositories."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..repos.errors import NoReposConfiguredError
from .models import Resource
from .models import ResourceType
from .scanner import Scanner

if TYPE_CHECKING:
    from ..repos.manager import RepoManager


def find_by_name(resources: Iterable[Resource], name: str, resource_type: ResourceType) -> list[Resource]:
    """Every resource with exactly this name and type, in index order."""
    return [r for r in resources if r.name == name and r.type == resource_type]


def find_by_name_in_repos(
    manager: RepoManager, scanner: Scanner, name: str, resource_type: ResourceType
) -> list[Resource]:
    """Scan all configured repositories and return exact matches.

    Several repositories may provide the same name; callers disambiguate.

    Raises:
        NoReposConfiguredError: No repositories are configured
    """
    repos = manager.list()
    if not repos:
        raise NoReposConfiguredError()
    return find_by_name(scanner.scan_all(repos), name, resource_type)


def find_by_name_in_repo(
    manager: RepoManager, scanner: Scanner, name: str, resource_type: ResourceType, repo_name: str
) -> Resource | None:
    """Scan a single repository and return its match, or None.

    Raises:
        RepoNotFoundError: ``repo_name`` is not configured
    """
    entry = manager.get(repo_name)
    matches = find_by_name(scanner.scan_repo(entry.path, entry.name, entry.url), name, resource_type)
    return matches[0] if matches else None

"""Resource scanner - builds the resource index from cached repositories.

Failure isolation:
- A missing resource directory means zero resources of that kind
- An unreadable directory or manifest is logged and skipped
- A repository whose scan raises contributes zero resources; others still count
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import ManifestError
from .layout import iter_candidates
from .layout import load_resource
from .models import Resource
from .models import ResourceType

if TYPE_CHECKING:
    from ..repos.config import RepoEntry


class Scanner:
    """Scans cached repositories for skills, commands, agents, and MCP servers."""

    def __init__(self, logger: logging.Logger | None = None, max_workers: int | None = None):
        """Initialize scanner.

        Args:
            logger: Logger for skip warnings (default: module logger)
            max_workers: Upper bound on scan threads (default: CPU count)
        """
        self.logger = logger or logging.getLogger(__name__)
        self.max_workers = max_workers

    def scan_repo(self, repo_path: str | Path, repo_name: str, repo_url: str = "") -> list[Resource]:
        """Scan one repository.

        Runs the skills, commands, agents, and MCP sub-scans in turn. Never
        raises for problems inside the repository.

        Args:
            repo_path: Repository root on disk
            repo_name: Configured repository name (attributed to every resource)
            repo_url: Repository remote URL

        Returns:
            Resources found, possibly empty
        """
        root = Path(repo_path)
        resources: list[Resource] = []
        for resource_type in ResourceType:
            resources.extend(self._scan_kind(root, resource_type, repo_name, repo_url))
        return resources

    def scan_all(self, repos: Sequence[RepoEntry]) -> list[Resource]:
        """Scan many repositories in parallel.

        Uses a pool of ``min(cpu_count, len(repos))`` threads, one repository
        per task. A failing repository is logged and yields nothing; it never
        suppresses results from the others.

        Args:
            repos: Configured repositories

        Returns:
            Union of every repository's resources. Callers must not rely on
            ordering across repositories.
        """
        if not repos:
            return []

        workers = min(self.max_workers or os.cpu_count() or 1, len(repos))
        resources: list[Resource] = []

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="repo-scan") as pool:
            futures = [(repo, pool.submit(self.scan_repo, repo.path, repo.name, repo.url)) for repo in repos]
            for repo, future in futures:
                try:
                    resources.extend(future.result())
                except Exception as e:
                    self.logger.warning(
                        f"Failed to scan repository {repo.name}: {e}",
                        extra={"repo": repo.name, "path": str(repo.path)},
                    )

        self.logger.debug(f"Scanned {len(repos)} repositories with {workers} workers: {len(resources)} resources")
        return resources

    def _scan_kind(
        self, root: Path, resource_type: ResourceType, repo_name: str, repo_url: str
    ) -> list[Resource]:
        """Run one sub-scan, absorbing directory and manifest errors."""
        directory = root / resource_type.directory
        try:
            candidates = iter_candidates(root, resource_type)
        except FileNotFoundError:
            return []
        except PermissionError as e:
            self.logger.warning(
                f"Permission denied reading {resource_type.directory} directory: {directory}",
                extra={"repo": repo_name, "path": str(directory), "error": str(e)},
            )
            return []
        except OSError as e:
            self.logger.warning(
                f"Failed to read {resource_type.directory} directory {directory}: {e}",
                extra={"repo": repo_name, "path": str(directory)},
            )
            return []

        resources: list[Resource] = []
        for candidate in candidates:
            if candidate.is_inaccessible:
                self.logger.warning(
                    f"Skipping {resource_type.value} {candidate.manifest_relpath} in {repo_name}: {candidate.error}",
                    extra={"repo": repo_name, "path": candidate.manifest_relpath, "error": str(candidate.error)},
                )
                continue
            if candidate.is_missing_manifest:
                self.logger.debug(f"Skipping {candidate.resource_path}: no {candidate.manifest_relpath}")
                continue
            try:
                resources.append(load_resource(candidate, repo_name, repo_url))
            except (OSError, ManifestError) as e:
                self.logger.warning(
                    f"Skipping {resource_type.value} {candidate.manifest_relpath} in {repo_name}: {e}",
                    extra={"repo": repo_name, "path": candidate.manifest_relpath},
                )
        return resources

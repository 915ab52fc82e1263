"""Repository content validation - advisory structural checks.

Walks the same layout as the scanner but reports every problem as a
warning instead of skipping it. Never raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..resources.errors import FrontmatterError
from ..resources.errors import McpDescriptorError
from ..resources.layout import DIRECTORY_MANIFESTS
from ..resources.layout import iter_candidates
from ..resources.layout import load_resource
from ..resources.models import ResourceType

logger = logging.getLogger(__name__)

DIRECTORY_NOT_FOUND = "directory not found"


@dataclass
class ValidationWarning:
    """A structural problem in a repository.

    Attributes:
        path: Location relative to the repository root
        message: What is wrong
    """

    path: str
    message: str

    def is_actionable(self) -> bool:
        """False for missing top-level directories, which are normal in small repositories."""
        return self.message != DIRECTORY_NOT_FOUND

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


def validate_repo_content(repo_path: str | Path) -> list[ValidationWarning]:
    """Check a repository against the skills/commands/agents/mcp layout.

    Args:
        repo_path: Repository root on disk

    Returns:
        Warnings in directory order (skills, commands, agents, mcp)
    """
    root = Path(repo_path)
    warnings: list[ValidationWarning] = []
    for resource_type in ResourceType:
        warnings.extend(_validate_kind(root, resource_type))

    logger.debug(f"Validated {root}: {len(warnings)} warnings")
    return warnings


def _validate_kind(root: Path, resource_type: ResourceType) -> list[ValidationWarning]:
    top = resource_type.directory
    try:
        candidates = iter_candidates(root, resource_type)
    except FileNotFoundError:
        return [ValidationWarning(top, DIRECTORY_NOT_FOUND)]
    except NotADirectoryError:
        return [ValidationWarning(top, "expected directory, found file")]
    except OSError as e:
        return [ValidationWarning(top, f"cannot access directory: {e}")]

    warnings: list[ValidationWarning] = []
    for candidate in candidates:
        if candidate.is_inaccessible:
            warnings.append(ValidationWarning(candidate.manifest_relpath, f"cannot access: {candidate.error}"))
            continue
        if candidate.is_missing_manifest:
            manifest_name = DIRECTORY_MANIFESTS[resource_type]
            warnings.append(
                ValidationWarning(
                    candidate.resource_path,
                    f"{resource_type.value} directory missing {manifest_name}",
                )
            )
            continue

        try:
            load_resource(candidate, repo_name="")
        except FrontmatterError as e:
            warnings.append(ValidationWarning(candidate.manifest_relpath, f"invalid frontmatter: {e}"))
        except McpDescriptorError as e:
            warnings.append(ValidationWarning(candidate.manifest_relpath, f"invalid JSON: {e}"))
        except OSError as e:
            warnings.append(ValidationWarning(candidate.manifest_relpath, f"cannot read file: {e}"))

    return warnings

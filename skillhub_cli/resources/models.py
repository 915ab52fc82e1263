"""Resource data models.

Defines the value types produced by repository scans:
- ResourceType: The four kinds of shareable resources
- Resource: One discovered resource and where it lives
- SearchOptions: Filter predicate for search
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from pathlib import Path
from typing import Any


class ResourceType(str, Enum):
    """Kind of shareable resource.

    Each kind has its own top-level directory in a repository:
    - SKILL: skills/<name>/SKILL.md
    - COMMAND: commands/<name>/command.md or commands/<name>.md
    - AGENT: agents/<name>/AGENT.md or agents/<name>.md
    - MCP: mcp/<name>.json
    """

    SKILL = "skill"
    COMMAND = "command"
    AGENT = "agent"
    MCP = "mcp"

    @property
    def directory(self) -> str:
        """Top-level repository directory holding this kind."""
        return _DIRECTORIES[self]


_DIRECTORIES: dict[ResourceType, str] = {
    ResourceType.SKILL: "skills",
    ResourceType.COMMAND: "commands",
    ResourceType.AGENT: "agents",
    ResourceType.MCP: "mcp",
}


@dataclass
class Resource:
    """A shareable resource discovered in a cached repository.

    Identity is not globally unique: the same name and type may come from
    several repositories. Resources are rebuilt on every scan.

    Attributes:
        name: Resource name (manifest ``name`` or directory/file name)
        description: Short human-readable description
        type: Resource kind
        repo_name: Configured name of the owning repository
        repo_url: Remote URL of the owning repository
        path: Path relative to the repository root (e.g. ``skills/code-review``)
        metadata: Extra manifest fields, stringified
    """

    name: str
    type: ResourceType
    repo_name: str
    path: str
    description: str = ""
    repo_url: str = ""
    metadata: dict[str, str] = field(default_factory=dict)

    def source_path(self, cache_dir: Path) -> Path:
        """Absolute location of the resource inside the repository cache."""
        return cache_dir / self.repo_name / self.path

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary (JSON output shape)."""
        result: dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "repo_name": self.repo_name,
            "path": self.path,
        }
        if self.description:
            result["description"] = self.description
        if self.repo_url:
            result["repo_url"] = self.repo_url
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result


@dataclass
class SearchOptions:
    """Filters applied before search scoring. ``None`` matches everything."""

    type: ResourceType | None = None
    repo_name: str | None = None

    def matches(self, resource: Resource) -> bool:
        if self.type is not None and resource.type != self.type:
            return False
        if self.repo_name and resource.repo_name != self.repo_name:
            return False
        return True

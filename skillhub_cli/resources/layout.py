"""Repository layout walk - the single traversal of the directory convention.

Convention (per repository root):
- skills/<name>/SKILL.md
- commands/<name>/command.md or commands/<name>.md
- agents/<name>/AGENT.md or agents/<name>.md
- mcp/<name>.json

The walk yields manifest candidates and never raises past the initial
listing; an entry that cannot be inspected carries its error instead.
Consumers decide what to do with problems: the scanner skips them, the
validator reports them.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .frontmatter import read_manifest
from .mcp import parse_mcp_server
from .models import Resource
from .models import ResourceType

# Manifest file expected inside a resource subdirectory
DIRECTORY_MANIFESTS: dict[ResourceType, str] = {
    ResourceType.SKILL: "SKILL.md",
    ResourceType.COMMAND: "command.md",
    ResourceType.AGENT: "AGENT.md",
}

# Suffix of resources stored as a single top-level file
FLAT_FILE_SUFFIXES: dict[ResourceType, str] = {
    ResourceType.COMMAND: ".md",
    ResourceType.AGENT: ".md",
    ResourceType.MCP: ".json",
}


@dataclass(frozen=True)
class ManifestCandidate:
    """A place in the repository where a resource manifest should be.

    Attributes:
        type: Resource kind
        fallback_name: Directory name, or file name without its suffix
        resource_path: Resource path relative to the repo root
        manifest: Absolute manifest path, None when a resource directory lacks one
        manifest_relpath: Manifest path relative to the repo root
        error: Set when the entry could not be inspected (e.g. permission denied)
    """

    type: ResourceType
    fallback_name: str
    resource_path: str
    manifest: Path | None
    manifest_relpath: str
    error: OSError | None = None

    @property
    def is_inaccessible(self) -> bool:
        return self.error is not None

    @property
    def is_missing_manifest(self) -> bool:
        return self.manifest is None and self.error is None


def iter_candidates(repo_path: Path, resource_type: ResourceType) -> Iterator[ManifestCandidate]:
    """List the candidates of one resource kind in a repository.

    The directory is listed eagerly, so listing errors surface here rather
    than on first iteration.

    Raises:
        FileNotFoundError: The kind's directory does not exist
        NotADirectoryError: A file sits where the directory should be
        PermissionError: The directory cannot be listed
        OSError: Any other listing failure
    """
    top = resource_type.directory
    entries = sorted((repo_path / top).iterdir(), key=lambda p: p.name)
    return _walk(entries, top, resource_type)


def _walk(entries: list[Path], top: str, resource_type: ResourceType) -> Iterator[ManifestCandidate]:
    manifest_name = DIRECTORY_MANIFESTS.get(resource_type)
    flat_suffix = FLAT_FILE_SUFFIXES.get(resource_type)

    for entry in entries:
        resource_path = f"{top}/{entry.name}"
        try:
            is_dir = entry.is_dir()
        except OSError as e:
            # is_dir() only returns False for missing entries; EACCES is raised
            yield ManifestCandidate(
                type=resource_type,
                fallback_name=entry.name,
                resource_path=resource_path,
                manifest=None,
                manifest_relpath=resource_path,
                error=e,
            )
            continue

        if is_dir:
            if manifest_name is None:
                continue
            manifest = entry / manifest_name
            error = None
            try:
                found = manifest.is_file()
            except OSError as e:
                found, error = False, e
            yield ManifestCandidate(
                type=resource_type,
                fallback_name=entry.name,
                resource_path=resource_path,
                manifest=manifest if found else None,
                manifest_relpath=f"{resource_path}/{manifest_name}",
                error=error,
            )
        elif flat_suffix and entry.name.endswith(flat_suffix):
            yield ManifestCandidate(
                type=resource_type,
                fallback_name=entry.name[: -len(flat_suffix)],
                resource_path=resource_path,
                manifest=entry,
                manifest_relpath=resource_path,
            )


def load_resource(candidate: ManifestCandidate, repo_name: str, repo_url: str = "") -> Resource:
    """Parse a candidate's manifest into a Resource.

    Raises:
        ValueError: The candidate has no manifest
        OSError: The manifest cannot be read
        ManifestError: The manifest is malformed
    """
    if candidate.manifest is None:
        raise ValueError(f"no manifest at {candidate.manifest_relpath}")

    if candidate.type is ResourceType.MCP:
        server = parse_mcp_server(candidate.manifest.read_bytes())
        return Resource(
            name=server.name or candidate.fallback_name,
            description=server.describe(),
            type=candidate.type,
            repo_name=repo_name,
            repo_url=repo_url,
            path=candidate.resource_path,
        )

    meta = read_manifest(candidate.manifest)
    return Resource(
        name=meta.name or candidate.fallback_name,
        description=meta.description,
        type=candidate.type,
        repo_name=repo_name,
        repo_url=repo_url,
        path=candidate.resource_path,
        metadata=meta.extra_fields(),
    )

"""
Resources module - discovery, validation input, and search over cached repositories.

Public API:
- ResourceType, Resource, SearchOptions: Value types
- Scanner: Build the resource index (concurrent across repositories)
- search: Filter and rank an index
- find_by_name, find_by_name_in_repos, find_by_name_in_repo: Exact lookup
- parse_header, parse_mcp_server: Manifest extraction
"""

from .errors import FrontmatterError
from .errors import ManifestError
from .errors import McpDescriptorError
from .frontmatter import ManifestMetadata
from .frontmatter import parse_header
from .lookup import find_by_name
from .lookup import find_by_name_in_repo
from .lookup import find_by_name_in_repos
from .mcp import McpServer
from .mcp import parse_mcp_server
from .models import Resource
from .models import ResourceType
from .models import SearchOptions
from .scanner import Scanner
from .search import search

__all__ = [
    "Resource",
    "ResourceType",
    "SearchOptions",
    "Scanner",
    "search",
    "find_by_name",
    "find_by_name_in_repos",
    "find_by_name_in_repo",
    "ManifestMetadata",
    "parse_header",
    "McpServer",
    "parse_mcp_server",
    "ManifestError",
    "FrontmatterError",
    "McpDescriptorError",
]

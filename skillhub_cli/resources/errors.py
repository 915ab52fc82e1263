"""Manifest parsing errors.

These never escape a scan or a validation run: the scanner skips the
offending resource and the validator turns it into a warning.
"""


class ManifestError(Exception):
    """Raised when a resource manifest cannot be parsed."""


class FrontmatterError(ManifestError):
    """Markdown frontmatter header is malformed."""


class McpDescriptorError(ManifestError):
    """MCP server JSON descriptor is malformed."""

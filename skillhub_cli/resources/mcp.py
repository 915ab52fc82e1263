"""MCP server descriptor model.

Repositories ship MCP servers as ``mcp/<name>.json`` files. A descriptor is
either local (a command run over stdio) or remote (an SSE endpoint URL).
"""

from __future__ import annotations

import json

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError

from .errors import McpDescriptorError

TRANSPORT_STDIO = "stdio"
TRANSPORT_SSE = "sse"


class McpServer(BaseModel):
    """Canonical MCP server descriptor. Unknown keys are preserved."""

    model_config = ConfigDict(extra="allow")

    name: str = ""
    command: str = ""
    args: list[str] = Field(default_factory=list)
    url: str = ""
    transport: str = ""
    env: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    platforms: list[str] = Field(default_factory=list)
    disabled: bool = False

    def is_local(self) -> bool:
        """Local when transport is stdio, or unset with a command."""
        if self.transport == TRANSPORT_STDIO:
            return True
        return self.transport == "" and self.command != ""

    def is_remote(self) -> bool:
        """Remote when transport is sse, or unset with a URL and no command."""
        if self.transport == TRANSPORT_SSE:
            return True
        return self.transport == "" and self.url != "" and self.command == ""

    def describe(self) -> str:
        """Human-readable one-line description."""
        if self.is_local():
            return f"Local MCP server: {self.command}"
        if self.is_remote():
            return f"Remote MCP server: {self.url}"
        return "MCP server"


def parse_mcp_server(data: bytes | str) -> McpServer:
    """Decode a JSON descriptor.

    Raises:
        McpDescriptorError: Invalid JSON, not an object, or wrong field types
    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        raise McpDescriptorError(str(e)) from e
    except UnicodeDecodeError as e:
        raise McpDescriptorError(f"not valid UTF-8: {e.reason}") from e

    if not isinstance(raw, dict):
        raise McpDescriptorError(f"expected a JSON object, got {type(raw).__name__}")

    try:
        return McpServer.model_validate(raw)
    except ValidationError as e:
        problems = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
        raise McpDescriptorError(problems) from e

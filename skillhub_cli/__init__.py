"""skillhub CLI - catalog of skills, commands, agents, and MCP servers from git repositories."""

__version__ = "0.1.0"

"""CLI command groups for skillhub."""

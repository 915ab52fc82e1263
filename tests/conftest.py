"""Pytest configuration for skillhub tests."""

import errno
import json
import logging
from pathlib import Path

import pytest

from skillhub_cli.logging_setup import JsonlHandler
from skillhub_cli.logging_setup import StderrHandler


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Point config, cache, and log locations into the test's tmp dir."""
    home = tmp_path / "home"
    monkeypatch.setenv("SKILLHUB_CONFIG_DIR", str(home / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(home / "cache"))
    monkeypatch.setenv("SKILLHUB_LOG_PATH", str(home / "skillhub.log.jsonl"))
    monkeypatch.delenv("SKILLHUB_LOG_LEVEL", raising=False)
    yield home

    # CLI invocations install handlers bound to CliRunner's streams
    root = logging.getLogger()
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler | StderrHandler):
            root.removeHandler(h)
            h.close()


@pytest.fixture
def make_repo(tmp_path):
    """Factory building a repository tree from {relative path: content}.

    Content may be a str (written as text), a dict (written as JSON), or
    None (creates a directory).
    """

    def _make(name: str, files: dict) -> Path:
        root = tmp_path / "repos" / name
        root.mkdir(parents=True)
        for rel, content in files.items():
            path = root / rel
            if content is None:
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, dict):
                path.write_text(json.dumps(content), encoding="utf-8")
            else:
                path.write_text(content, encoding="utf-8")
        return root

    return _make


def manifest(name: str | None = None, description: str = "", **extra) -> str:
    """Markdown body with a frontmatter header."""
    lines = ["---"]
    if name is not None:
        lines.append(f"name: {name}")
    if description:
        lines.append(f"description: {description}")
    for key, value in extra.items():
        lines.append(f"{key}: {value}")
    lines.extend(["---", "", "# Body", ""])
    return "\n".join(lines)


@pytest.fixture
def md():
    """The ``manifest`` helper as a fixture."""
    return manifest


@pytest.fixture
def deny_access(monkeypatch):
    """Make a pathlib method raise EACCES for one exact path.

    Usage: ``deny_access("is_dir", repo / "skills" / "locked")``.
    """

    def _deny(method: str, target: Path) -> None:
        original = getattr(Path, method)

        def guarded(self, *args, **kwargs):
            if self == target:
                raise PermissionError(errno.EACCES, "Permission denied", str(self))
            return original(self, *args, **kwargs)

        monkeypatch.setattr(Path, method, guarded)

    return _deny

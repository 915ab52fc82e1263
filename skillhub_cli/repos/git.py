"""Git collaborator - URL validation, shallow clone, fast-forward pull.

Git runs as a subprocess with the terminal's stdin/stdout/stderr so that
interactive authentication (SSH passphrases, credential prompts) works.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from urllib.parse import urlparse

from .errors import GitError
from .errors import InvalidURLError

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https", "ssh", "git", "file"})

# git@host:path/to/repo.git
SCP_LIKE_URL = re.compile(r"[\w-]+@[\w.-]+:[\w./-]+\.git")


def validate_url(url: str) -> None:
    """Check that a string is a safe git remote locator.

    Allows http(s), ssh, git, and file URLs plus SCP-like
    ``user@host:path.git``. Rejects empty strings, anything starting with
    ``-`` (argument injection), the ``ext::`` transport, and unknown or
    missing schemes. Control characters (including a trailing newline) are
    rejected anywhere in the string.

    Raises:
        InvalidURLError: The URL is not allowed
    """
    if not url:
        raise InvalidURLError(url, "git URL cannot be empty")

    if url.startswith("-"):
        raise InvalidURLError(url, f"git URL cannot start with '-': {url}")

    if url.startswith("ext::"):
        raise InvalidURLError(url, f"ext:: protocol is not allowed: {url}")

    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in url):
        raise InvalidURLError(url, f"control character in git URL: {url!r}")

    if SCP_LIKE_URL.fullmatch(url):
        return

    try:
        scheme = urlparse(url).scheme
    except ValueError as e:
        raise InvalidURLError(url, f"cannot parse git URL {url}: {e}") from e

    if not scheme:
        raise InvalidURLError(url, f"missing protocol scheme in git URL: {url}")
    if scheme not in ALLOWED_SCHEMES:
        raise InvalidURLError(url, f"unsupported protocol scheme {scheme!r} in git URL: {url}")


def is_url(url: str) -> bool:
    """True if ``url`` passes :func:`validate_url`."""
    try:
        validate_url(url)
    except InvalidURLError:
        return False
    return True


def clone(url: str, dest: Path, depth: int = 1) -> None:
    """Shallow-clone ``url`` into ``dest``.

    Raises:
        InvalidURLError: URL fails validation
        GitError: git is missing or exited non-zero
    """
    validate_url(url)
    _run_git(["git", "clone", f"--depth={depth}", url, str(dest)], action="git clone")


def pull(repo_path: Path) -> None:
    """Fast-forward-only pull inside ``repo_path``.

    Raises:
        GitError: git is missing or exited non-zero
    """
    _run_git(["git", "-C", str(repo_path), "pull", "--ff-only"], action="git pull")


def validate_remote(repo_path: Path) -> None:
    """Check that ``repo_path`` is a git working tree.

    Raises:
        GitError: No ``.git`` directory
    """
    git_dir = Path(repo_path) / ".git"
    if not git_dir.exists():
        raise GitError(f"not a git repository: {repo_path}")
    if not git_dir.is_dir():
        raise GitError(f".git is not a directory: {git_dir}")


def _run_git(cmd: list[str], action: str) -> None:
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        subprocess.run(cmd, check=True)
    except FileNotFoundError as e:
        raise GitError("git executable not found on PATH") from e
    except subprocess.CalledProcessError as e:
        raise GitError(f"{action} failed with exit code {e.returncode}") from e

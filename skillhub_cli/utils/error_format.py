"""Error rendering for CLI output.

Library errors carry their own messages. This module adds the recovery
hint a user needs for each repository error type, and keeps exception text
from being read as Rich markup.
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup

from ..repos.errors import InvalidNameError
from ..repos.errors import InvalidURLError
from ..repos.errors import NameCollisionError
from ..repos.errors import NoReposConfiguredError
from ..repos.errors import RepoNotFoundError

# Checked in order; the first isinstance match wins
RECOVERY_HINTS: list[tuple[type[Exception], str]] = [
    (NameCollisionError, "Use --name to choose a different name."),
    (InvalidNameError, "Use --name to set a valid name (e.g. my-repo)."),
    (InvalidURLError, "Use an https://, ssh://, git://, file:// or git@host:path.git URL."),
    (RepoNotFoundError, "Run 'skillhub repo list' to see configured repositories."),
    (NoReposConfiguredError, "Add one with 'skillhub repo add <git-url>'."),
]


def error_message(e: BaseException) -> str:
    """One non-empty line describing an error.

    Some exceptions stringify to nothing (a bare ``TimeoutError`` from a
    stalled subprocess, for one); those fall back to their type name.

    Examples:
        >>> error_message(RepoNotFoundError("skills"))
        "repository 'skills' not found"

        >>> error_message(TimeoutError())
        'TimeoutError (no details)'
    """
    text = str(e).strip()
    return text or f"{type(e).__name__} (no details)"


def error_with_hint(e: BaseException) -> str:
    """Error message followed by a recovery hint on its own line, when one applies."""
    message = error_message(e)
    for error_type, hint in RECOVERY_HINTS:
        if isinstance(e, error_type):
            return f"{message}\n{hint}"
    return message


def escape_markup(value: object) -> str:
    """Escape a value (path, URL, exception text) for Rich markup strings."""
    return _escape_markup(str(value))

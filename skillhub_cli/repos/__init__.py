"""
Repos module - lifecycle of configured git repository sources.

Public API:
- RepoManager: Add, list, get, update, remove repositories
- RepoEntry, CatalogConfig: Persisted config models
- load_config, save_config: Config file I/O (atomic writes)
- validate_repo_content, ValidationWarning: Advisory structural checks
- validate_name, derive_name_from_url: Repository naming rules
- Error hierarchy rooted at RepoError
"""

from .config import CatalogConfig
from .config import RepoEntry
from .config import load_config
from .config import save_config
from .errors import CacheCleanupFailedError
from .errors import CloneError
from .errors import ConfigError
from .errors import GitError
from .errors import InvalidNameError
from .errors import InvalidURLError
from .errors import NameCollisionError
from .errors import NoReposConfiguredError
from .errors import RepoError
from .errors import RepoNotFoundError
from .errors import RepoUpdateError
from .manager import RepoManager
from .manager import derive_name_from_url
from .manager import validate_name
from .validator import ValidationWarning
from .validator import validate_repo_content

__all__ = [
    "RepoManager",
    "RepoEntry",
    "CatalogConfig",
    "load_config",
    "save_config",
    "validate_repo_content",
    "ValidationWarning",
    "validate_name",
    "derive_name_from_url",
    "RepoError",
    "RepoNotFoundError",
    "InvalidURLError",
    "InvalidNameError",
    "NameCollisionError",
    "CacheCleanupFailedError",
    "CloneError",
    "RepoUpdateError",
    "ConfigError",
    "GitError",
    "NoReposConfiguredError",
]

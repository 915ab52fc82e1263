"""Fixtures for CLI command tests."""

import shutil
from unittest.mock import MagicMock
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from skillhub_cli.paths import get_config_path
from skillhub_cli.paths import get_repos_cache_dir
from skillhub_cli.repos import git as git_module
from skillhub_cli.repos.manager import RepoManager
from skillhub_cli.repos.manager import derive_name_from_url


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def remotes():
    """Map of repository name -> source tree that a fake clone copies from."""
    return {}


@pytest.fixture
def fake_git(remotes):
    git = MagicMock()
    git.validate_url.side_effect = git_module.validate_url

    def clone(url, dest, depth=1):
        source = remotes.get(derive_name_from_url(url))
        if source is None:
            (dest / ".git").mkdir(parents=True)
        else:
            shutil.copytree(source, dest)

    git.clone.side_effect = clone
    return git


@pytest.fixture
def manager(fake_git):
    """Real RepoManager over the isolated config/cache, with git faked out."""
    mgr = RepoManager(config_path=get_config_path(), cache_dir=get_repos_cache_dir(), git=fake_git)
    with (
        patch("skillhub_cli.commands.repo.create_repo_manager", return_value=mgr),
        patch("skillhub_cli.commands.search.create_repo_manager", return_value=mgr),
        patch("skillhub_cli.commands.validate.create_repo_manager", return_value=mgr),
    ):
        yield mgr

"""
Pytest plugin for gh-repo-create testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["gh_repo_create.testing.conftest"]

Or import the fixtures directly:

    from gh_repo_create.testing.fixtures import mock_client, repo_commands
"""

# Re-export all fixtures for pytest auto-discovery
from gh_repo_create.testing.fixtures import (
    credential_store,
    fake_git,
    git_runner,
    mock_client,
    repo_commands,
    sample_repositories,
    sample_repository,
    token_store,
)

__all__ = [
    "mock_client",
    "git_runner",
    "fake_git",
    "credential_store",
    "token_store",
    "repo_commands",
    "sample_repository",
    "sample_repositories",
]

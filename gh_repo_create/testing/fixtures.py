"""
Pytest fixtures for gh-repo-create testing.

Provides common fixtures for testing code built on RepoCommands.
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from gh_repo_create.commands import RepoCommands
from gh_repo_create.config import CredentialStore
from gh_repo_create.git import LocalGit
from gh_repo_create.testing.mock import FakeGitRunner, MockGitHubClient
from gh_repo_create.types.repos import RepositoryDescriptor


def create_mock_repository(
    name: str = "mock-repo",
    owner: str = "mock-user",
    description: str = "",
    is_private: bool = False,
) -> RepositoryDescriptor:
    """
    Create a RepositoryDescriptor as the listing endpoint would return it.

    Example:
        ```python
        repo = create_mock_repository(name="dotfiles", is_private=True)
        mock = MockGitHubClient(repositories=[repo])
        ```
    """
    return RepositoryDescriptor(
        name=name,
        description=description,
        is_private=is_private,
        html_url=f"https://github.com/{owner}/{name}",
    )


# ============================================================================
# Collaborator Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockGitHubClient, None, None]:
    """
    Provide a MockGitHubClient for testing.

    Example:
        ```python
        def test_my_feature(mock_client):
            mock_client.configure_create(response=False)
            result = my_function(mock_client)
            assert mock_client.was_called("create_repository")
        ```
    """
    client = MockGitHubClient(username="test-user")
    yield client
    client.reset()


@pytest.fixture
def git_runner() -> FakeGitRunner:
    """Provide a FakeGitRunner where every git command succeeds."""
    return FakeGitRunner()


@pytest.fixture
def fake_git(git_runner: FakeGitRunner) -> LocalGit:
    return LocalGit(git_runner)


@pytest.fixture
def credential_store(tmp_path: Path) -> CredentialStore:
    """Provide a CredentialStore in a temp dir with an empty environment."""
    return CredentialStore(path=tmp_path / "credentials.json", environ={})


@pytest.fixture
def token_store(credential_store: CredentialStore) -> CredentialStore:
    """Provide a CredentialStore that already holds a token."""
    credential_store.save("ghp_testtoken12345")
    return credential_store


@pytest.fixture
def repo_commands(
    token_store: CredentialStore,
    fake_git: LocalGit,
    mock_client: MockGitHubClient,
) -> RepoCommands:
    """
    Provide RepoCommands wired to the mock client and the fake git runner.

    Every client the commands build is ``mock_client``.
    """
    return RepoCommands(token_store, fake_git, client_factory=lambda token: mock_client)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_repository() -> RepositoryDescriptor:
    return RepositoryDescriptor(name="test-repo", description="A test repository")


@pytest.fixture
def sample_repositories() -> list[RepositoryDescriptor]:
    return [
        create_mock_repository("alpha", owner="test-user", description="First"),
        create_mock_repository("beta", owner="test-user", is_private=True),
    ]


__all__ = [
    "create_mock_repository",
    "mock_client",
    "git_runner",
    "fake_git",
    "credential_store",
    "token_store",
    "repo_commands",
    "sample_repository",
    "sample_repositories",
]

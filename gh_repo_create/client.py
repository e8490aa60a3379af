"""
gh-repo-create GitHub API client.

Provides the primary interface to the GitHub REST API.
"""

from typing import Any

from gh_repo_create.clients import ReposClient, UsersClient
from gh_repo_create.config import API_BASE_URL, API_TIMEOUT
from gh_repo_create.git import LocalGit
from gh_repo_create.logging import get_logger
from gh_repo_create.transport import HTTPTransport
from gh_repo_create.types.repos import RepositoryDescriptor

logger = get_logger()


class GitHubClient:
    """
    Client for the repository lifecycle endpoints of the GitHub API.

    The authenticated username is resolved lazily and cached for the lifetime
    of the instance. Build a new client to re-authenticate.

    Example:
        ```python
        from gh_repo_create import CredentialStore, GitHubClient

        client = GitHubClient(CredentialStore().load())
        if client.authenticate():
            for repo in client.list_repositories():
                print(repo.name, repo.visibility)
        client.close()
        ```
    """

    DEFAULT_BASE_URL = API_BASE_URL
    DEFAULT_TIMEOUT = API_TIMEOUT

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        git: LocalGit | None = None,
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: Bearer token
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 60.0)
            git: Git adapter used to read ``github.user`` when the API cannot
                provide a username (default: LocalGit())
        """
        self.base_url = base_url
        self.timeout = timeout
        self._git = git or LocalGit()
        self._username: str | None = None

        self._transport = HTTPTransport(base_url=base_url, token=token, timeout=timeout)

        self.users = UsersClient(self._transport)
        self.repos = ReposClient(self._transport)

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    def authenticate(self) -> bool:
        """
        Check the token against ``GET /user`` and cache the login.

        Returns:
            True only on HTTP 200 with a parseable body
        """
        user = self.users.get_authenticated()
        if user is None:
            return False
        self._username = user.login
        logger.info("Authenticated as %s", user.login or "<unknown>")
        return True

    def get_username(self) -> str:
        """
        Return the account login.

        Sources, in order: the cached value, ``GET /user``, the global git
        config key ``github.user``. Returns "" when all of them fail.
        """
        if self._username:
            return self._username

        user = self.users.get_authenticated()
        if user is not None and user.login:
            self._username = user.login
            return self._username

        # Not cached: the API is asked again on the next call
        fallback = self._git.get_github_user()
        if fallback:
            logger.info("Using github.user from git config: %s", fallback)
            return fallback

        return ""

    def create_repository(self, repo: RepositoryDescriptor) -> bool:
        return self.repos.create(repo)

    def repository_exists(self, name: str) -> bool:
        return self.repos.exists(name)

    def list_repositories(self) -> list[RepositoryDescriptor]:
        return self.repos.list()

    def delete_repository(self, name: str) -> bool:
        """Delete ``name`` from the authenticated account; no request if the owner is unknown."""
        if not name:
            return False
        owner = self.get_username()
        if not owner:
            logger.warning("Cannot delete %s: username could not be resolved", name)
            return False
        return self.repos.delete(owner, name)

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "GitHubClient":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()

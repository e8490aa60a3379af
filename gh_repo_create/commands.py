"""
Command layer for gh-repo-create.

Sequences the credential store, the GitHub API client and the local git
adapter to carry out the create / list / delete / push-only / check actions.
This is the only layer that raises the typed errors from
``gh_repo_create.exceptions``; the CLI and the REPL turn them into messages.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from gh_repo_create.client import GitHubClient
from gh_repo_create.config import DEFAULT_REMOTE, CredentialStore
from gh_repo_create.exceptions import (
    ApiError,
    AuthenticationFailedError,
    CredentialsMissingError,
    PushError,
    RepositoryStateError,
)
from gh_repo_create.git import LocalGit
from gh_repo_create.logging import get_logger
from gh_repo_create.types.repos import RepositoryDescriptor
from gh_repo_create.validation import validate_description, validate_repo_name

logger = get_logger()

ClientFactory = Callable[[str], GitHubClient]

TOKEN_HELP_URL = "https://github.com/settings/tokens"


@dataclass
class CreateResult:
    """Outcome of a successful create, with or without the push step."""

    repository: RepositoryDescriptor
    remote_action: str | None = None  # "added" or "updated"
    branch: str | None = None
    pushed: bool = False


@dataclass
class CheckResult:
    """One line of the ``--check`` report."""

    title: str
    status: str  # "pass", "fail", "warn" or "skip"
    message: str
    hints: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.status == "fail"


class RepoCommands:
    """
    Carries out user intents against GitHub and the local repository.

    Collaborators are injected so tests can swap in a mock client factory and
    a fake git runner.

    Example:
        ```python
        commands = RepoCommands(CredentialStore(), LocalGit())
        result = commands.create(".", RepositoryDescriptor(name="my-repo"))
        print(result.repository.ssh_url)
        ```
    """

    def __init__(
        self,
        credentials: CredentialStore,
        git: LocalGit | None = None,
        client_factory: ClientFactory | None = None,
        remote: str = DEFAULT_REMOTE,
    ) -> None:
        self.credentials = credentials
        self.git = git or LocalGit()
        self.client_factory = client_factory or self._default_client_factory
        self.remote = remote
        self._client: GitHubClient | None = None

    def _default_client_factory(self, token: str) -> GitHubClient:
        return GitHubClient(token, git=self.git)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def connect(self) -> GitHubClient:
        """
        Return an authenticated client, building one on first use.

        Raises:
            CredentialsMissingError: If no token is configured
            AuthenticationFailedError: If GitHub rejects the token
        """
        if self._client is not None:
            return self._client

        token = self.credentials.load()
        if token is None:
            raise CredentialsMissingError(
                f"No GitHub token found. Set {self.credentials.env_var} or save a token "
                f"to {self.credentials.path}"
            )

        client = self.client_factory(token)
        if not client.authenticate():
            client.close()
            raise AuthenticationFailedError(
                "Authentication failed. The token may have expired or been revoked."
            )

        self._client = client
        return client

    def reset_client(self) -> None:
        """Drop the cached client so the next call re-reads the token."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def close(self) -> None:
        self.reset_client()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def create(
        self,
        path: str | Path,
        repo: RepositoryDescriptor,
        push: bool = True,
    ) -> CreateResult:
        """
        Create ``repo`` on GitHub and, if ``push``, link and push ``path``.

        Raises:
            ValidationError: If the name or description is too long, or the name is empty
            RepositoryStateError: If ``path`` is not a git repository
            ApiError: If the name is taken or creation is refused
            PushError: If the repository was created but linking or pushing failed
        """
        validate_repo_name(repo.name, strict=False)
        validate_description(repo.description)

        if not self.git.is_git_repo(path):
            raise RepositoryStateError(f"{path} is not a git repository")

        client = self.connect()
        self.git.configure_ssh_for_github()

        if client.repository_exists(repo.name):
            raise ApiError(
                f"Repository '{repo.name}' already exists on your GitHub account."
            )

        logger.info("Creating repository %s (%s)", repo.name, repo.visibility)
        if not client.create_repository(repo):
            raise ApiError(f"Failed to create repository '{repo.name}'")

        if not push:
            return CreateResult(repository=repo)
        return self.link_and_push(path, repo)

    def link_and_push(self, path: str | Path, repo: RepositoryDescriptor) -> CreateResult:
        """
        Point the remote at the new repository's SSH URL and push the current branch.

        Raises:
            PushError: On any failure; the repository is attached to the error
        """
        client = self.connect()
        owner = client.get_username()
        if not owner:
            raise PushError(
                f"Repository '{repo.name}' was created, but the GitHub username "
                "could not be resolved to build its URL.",
                repository=repo,
            )
        linked = repo.with_owner(owner)

        if self.git.has_remote(path, self.remote):
            remote_action = "updated"
            ok = self.git.set_remote_url(path, self.remote, linked.ssh_url)
        else:
            remote_action = "added"
            ok = self.git.add_remote(path, self.remote, linked.ssh_url)
        if not ok:
            raise PushError(
                f"Repository '{repo.name}' was created, but the '{self.remote}' "
                f"remote could not be set to {linked.ssh_url}.",
                repository=linked,
            )

        branch = self.git.get_current_branch(path)
        if branch is None:
            raise PushError(
                f"Repository '{repo.name}' was created, but the current branch "
                "could not be determined; nothing was pushed.",
                repository=linked,
            )

        if not self.git.push(path, self.remote, branch):
            raise PushError(
                f"Repository '{repo.name}' was created, but pushing '{branch}' failed.",
                repository=linked,
            )

        return CreateResult(
            repository=linked,
            remote_action=remote_action,
            branch=branch,
            pushed=True,
        )

    def list_repositories(self) -> list[RepositoryDescriptor]:
        return self.connect().list_repositories()

    def delete(self, name: str) -> None:
        """
        Delete ``name`` from the authenticated account.

        Raises:
            ApiError: If GitHub does not confirm the deletion
        """
        client = self.connect()
        logger.info("Deleting repository %s", name)
        if not client.delete_repository(name):
            raise ApiError(f"Failed to delete repository '{name}'")

    def push_only(self, path: str | Path) -> str:
        """
        Push the current branch over SSH without touching the API.

        Returns:
            The branch that was pushed
        """
        if not self.git.is_git_repo(path):
            raise RepositoryStateError(f"{path} is not a git repository")
        if not self.git.has_remote(path, self.remote):
            raise RepositoryStateError(f"No '{self.remote}' remote configured")

        self.git.configure_ssh_for_github()

        branch = self.git.get_current_branch(path)
        if branch is None:
            raise RepositoryStateError("Could not determine the current branch")
        if not self.git.push(path, self.remote, branch):
            raise PushError(f"Pushing '{branch}' to '{self.remote}' failed")
        return branch

    def check(self, path: str | Path) -> list[CheckResult]:
        """Run the environment checks behind ``--check``; never raises."""
        results: list[CheckResult] = []

        client: GitHubClient | None = None
        token = self.credentials.load()
        if token is None:
            results.append(CheckResult(
                "GitHub API Access",
                "fail",
                "No GitHub token found",
                [
                    f"Set {self.credentials.env_var} or add a token to {self.credentials.path}",
                    f"See: {TOKEN_HELP_URL}",
                ],
            ))
        else:
            client = self.client_factory(token)
            if client.authenticate():
                results.append(CheckResult(
                    "GitHub API Access",
                    "pass",
                    f"Authenticated as: {client.get_username()}",
                ))
            else:
                client.close()
                client = None
                results.append(CheckResult(
                    "GitHub API Access",
                    "fail",
                    "Authentication failed - invalid token",
                    [
                        "Your token may have expired or been revoked",
                        f"Generate a new token at: {TOKEN_HELP_URL}",
                    ],
                ))

        if self.git.check_github_ssh():
            results.append(CheckResult("GitHub SSH Access", "pass", "SSH access to GitHub working"))
        else:
            results.append(CheckResult(
                "GitHub SSH Access",
                "fail",
                "SSH access not configured",
                [
                    "Add SSH key to GitHub: Settings > SSH and GPG keys",
                    "Run: ssh-add ~/.ssh/id_ed25519",
                ],
            ))

        if self.git.is_git_repo(path):
            results.append(CheckResult("Local Git Repository", "pass", f"{path} is a git repository"))
            remote_url = self.git.get_remote_url(path, self.remote)
            if remote_url is not None:
                results.append(CheckResult(
                    "Local Git Repository", "pass", f"Origin remote: {remote_url}"
                ))
            else:
                results.append(CheckResult(
                    "Local Git Repository", "warn", f"No '{self.remote}' remote configured"
                ))
        else:
            results.append(CheckResult(
                "Local Git Repository", "skip", f"{path} is not a git repository"
            ))

        if client is not None:
            repos = client.list_repositories()
            results.append(CheckResult(
                "Token Permissions",
                "pass",
                f"List repositories: OK ({len(repos)} repos)",
            ))
            client.close()

        return results

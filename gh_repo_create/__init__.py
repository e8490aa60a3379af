"""gh-repo-create - Create, list and delete GitHub repositories from the terminal."""

from gh_repo_create.client import GitHubClient
from gh_repo_create.commands import CheckResult, CreateResult, RepoCommands
from gh_repo_create.config import CredentialStore
from gh_repo_create.exceptions import (
    ApiError,
    AuthenticationFailedError,
    CredentialsMissingError,
    GhRepoError,
    PushError,
    RepositoryStateError,
    ValidationError,
)
from gh_repo_create.git import CommandResult, LocalGit, SubprocessRunner
from gh_repo_create.logging import configure_logging, get_logger
from gh_repo_create.transport import ApiResponse, HTTPTransport
from gh_repo_create.types import AuthenticatedUser, RepositoryDescriptor

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Main entry points
    "GitHubClient",
    "RepoCommands",
    "CreateResult",
    "CheckResult",
    # Credentials
    "CredentialStore",
    # Git
    "LocalGit",
    "CommandResult",
    "SubprocessRunner",
    # Types
    "RepositoryDescriptor",
    "AuthenticatedUser",
    # Exceptions
    "GhRepoError",
    "CredentialsMissingError",
    "AuthenticationFailedError",
    "ValidationError",
    "RepositoryStateError",
    "ApiError",
    "PushError",
    # Transport
    "HTTPTransport",
    "ApiResponse",
    # Logging
    "configure_logging",
    "get_logger",
]

"""gh-repo-create exception classes.

Component layers (credential store, git adapter, API client) report failure
through return values. These exceptions are raised by the command layer and
turned into messages and exit codes by the CLI and the REPL.
"""

from gh_repo_create.types.repos import RepositoryDescriptor


class GhRepoError(Exception):
    """Base exception for all gh-repo-create errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class CredentialsMissingError(GhRepoError):
    """Raised when no token is found in the environment or the config file."""

    def __init__(self, message: str) -> None:
        super().__init__("CREDENTIALS_MISSING", message)


class AuthenticationFailedError(GhRepoError):
    """Raised when the API rejects the configured token."""

    def __init__(self, message: str) -> None:
        super().__init__("AUTHENTICATION_FAILED", message)


class ValidationError(GhRepoError):
    """Raised when a repository name or description breaks the input rules."""

    def __init__(self, message: str) -> None:
        super().__init__("VALIDATION_ERROR", message)


class RepositoryStateError(GhRepoError):
    """Raised when the local path is not a git repository or lacks a remote."""

    def __init__(self, message: str) -> None:
        super().__init__("REPOSITORY_STATE", message)


class ApiError(GhRepoError):
    """Raised on an unexpected API status, including transport failures."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__("API_ERROR", message)
        self.status_code = status_code


class PushError(GhRepoError):
    """Raised when linking the remote or pushing failed.

    ``repository`` is set when the remote repository was created before the
    failure, so callers can tell the user it now exists.
    """

    def __init__(self, message: str, repository: RepositoryDescriptor | None = None) -> None:
        super().__init__("PUSH_FAILED", message)
        self.repository = repository

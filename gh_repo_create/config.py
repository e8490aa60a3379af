"""Configuration settings and the credential store for gh-repo-create."""

import json
import os
from collections.abc import Mapping
from pathlib import Path

from gh_repo_create.logging import get_logger

logger = get_logger()

# Credentials
TOKEN_ENV_VAR = "GH_TOKEN"
CONFIG_FILE_NAME = ".gh-repo-create.json"
CONFIG_PATH_ENV_VAR = "GH_REPO_CREATE_CONFIG"

# REPL history
HISTORY_FILE_NAME = ".gh-repo-create-history"
HISTORY_LENGTH = 100

# GitHub API
API_BASE_URL = os.getenv("GH_REPO_CREATE_API_URL", "https://api.github.com")
API_VERSION = "2022-11-28"
API_ACCEPT = "application/vnd.github+json"
API_REPOS_PER_PAGE = 100
API_TIMEOUT = 60.0  # seconds
USER_AGENT = "gh-repo-create/1.0.0"

# Repository input rules
MAX_REPO_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 350

# Git
DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "main"
GIT_CONFIG_USER_KEY = "github.user"
SSH_TIMEOUT = 30  # seconds


def default_config_path() -> Path:
    """Return the credential file path, honouring ``GH_REPO_CREATE_CONFIG``."""
    override = os.getenv(CONFIG_PATH_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / CONFIG_FILE_NAME


def default_history_path() -> Path:
    """Return the REPL history file path."""
    return Path.home() / HISTORY_FILE_NAME


class CredentialStore:
    """
    Reads and writes the single bearer token used by the tool.

    The environment variable wins over the file. Loading is a lookup, not a
    validation: anything unreadable is reported as "no token". Whether the
    token is accepted by GitHub is only known after ``GitHubClient.authenticate``.

    Example:
        ```python
        store = CredentialStore()
        if not store.has_token():
            store.save("ghp_...")
        token = store.load()
        ```
    """

    def __init__(
        self,
        path: str | Path | None = None,
        environ: Mapping[str, str] | None = None,
        env_var: str = TOKEN_ENV_VAR,
    ) -> None:
        """
        Initialize the credential store.

        Args:
            path: Credential file (default: ``~/.gh-repo-create.json``)
            environ: Environment mapping to read the token from (default: ``os.environ``)
            env_var: Name of the token-bearing environment variable
        """
        self.path = Path(path) if path is not None else default_config_path()
        self._environ = environ if environ is not None else os.environ
        self.env_var = env_var

    def load(self) -> str | None:
        """Return the active token, or None if no source provides one."""
        env_token = self._environ.get(self.env_var)
        if env_token is not None:
            logger.debug("Using token from $%s", self.env_var)
            return env_token

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.debug("Ignoring unreadable credential file %s: %s", self.path, e)
            return None

        if not isinstance(data, dict):
            return None
        token = data.get("token")
        return token if isinstance(token, str) else None

    def save(self, token: str) -> bool:
        """Write ``{"token": token}`` to the credential file, replacing it."""
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"token": token}, f, indent=2)
        except OSError as e:
            logger.warning("Could not write credential file %s: %s", self.path, e)
            return False
        logger.debug("Saved token to %s", self.path)
        return True

    def has_token(self) -> bool:
        return self.load() is not None

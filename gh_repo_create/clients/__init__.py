"""gh-repo-create GitHub resource clients."""

from gh_repo_create.clients.repos import ReposClient
from gh_repo_create.clients.users import UsersClient

__all__ = [
    "ReposClient",
    "UsersClient",
]

"""gh-repo-create type definitions.

This module exports all data model types used by the package.
"""

from gh_repo_create.types.repos import RepositoryDescriptor, build_ssh_url
from gh_repo_create.types.users import AuthenticatedUser

__all__ = [
    "RepositoryDescriptor",
    "AuthenticatedUser",
    "build_ssh_url",
]

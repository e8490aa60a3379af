"""Repository-related data models."""

from dataclasses import dataclass

GITHUB_SSH_HOST = "git@github.com"


def build_ssh_url(owner: str, name: str) -> str:
    """Build the SSH clone URL for ``owner/name``."""
    return f"{GITHUB_SSH_HOST}:{owner}/{name}.git"


@dataclass
class RepositoryDescriptor:
    """Repository information.

    ``html_url`` is only filled when the descriptor is read back from the API.
    ``ssh_url`` is never taken from the API; it is derived from the owner.
    """

    name: str
    description: str = ""
    is_private: bool = False
    html_url: str = ""
    ssh_url: str = ""

    @property
    def visibility(self) -> str:
        return "private" if self.is_private else "public"

    def with_owner(self, owner: str) -> "RepositoryDescriptor":
        """Return a copy whose ``ssh_url`` points at ``owner``'s account."""
        return RepositoryDescriptor(
            name=self.name,
            description=self.description,
            is_private=self.is_private,
            html_url=self.html_url,
            ssh_url=build_ssh_url(owner, self.name),
        )

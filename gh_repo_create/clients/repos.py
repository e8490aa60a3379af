"""Repositories resource client."""

import json
from typing import TYPE_CHECKING, Any

from gh_repo_create.config import API_REPOS_PER_PAGE
from gh_repo_create.logging import get_logger
from gh_repo_create.types.repos import RepositoryDescriptor

if TYPE_CHECKING:
    from gh_repo_create.transport import HTTPTransport

logger = get_logger()


def _parse_repository(data: dict[str, Any]) -> RepositoryDescriptor:
    """Parse one entry of a ``/user/repos`` listing."""
    return RepositoryDescriptor(
        name=data.get("name") or "",
        description=data.get("description") or "",
        is_private=bool(data.get("private", False)),
        html_url=data.get("html_url") or "",
    )


def _parse_page(body: str) -> list[dict[str, Any]] | None:
    """Return the repository objects of a page, or None if it does not parse."""
    try:
        data = json.loads(body)
    except ValueError:
        return None
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        return None
    return data


class ReposClient:
    """Client for repository-related operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the repos client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def create(self, repo: RepositoryDescriptor) -> bool:
        """
        Create a repository on the authenticated account.

        GitHub is asked to ``auto_init`` the repository. Name collisions are
        not checked here; see ``exists``.

        Returns:
            True only on HTTP 201
        """
        body: dict[str, Any] = {
            "name": repo.name,
            "description": repo.description,
            "private": repo.is_private,
            "auto_init": True,
        }
        response = self.transport.request("POST", "/user/repos", json=body)
        if response.status != 201:
            logger.info("Creating %s failed with status %d", repo.name, response.status)
            return False
        return True

    def exists(self, name: str) -> bool:
        """
        Check whether the account owns a repository called ``name``.

        Only the first page of results is inspected, so accounts with more
        than ``API_REPOS_PER_PAGE`` repositories can get false negatives.
        """
        response = self.transport.request(
            "GET", "/user/repos", params={"per_page": API_REPOS_PER_PAGE}
        )
        if response.status != 200:
            return False

        page = _parse_page(response.body)
        if page is None:
            return False
        return any(item.get("name") == name for item in page)

    def list(self) -> list[RepositoryDescriptor]:
        """
        List every repository of the account, following pagination links.

        Stops at the first page that is missing, non-200 or unparseable and
        returns what was collected up to that point.
        """
        repos: list[RepositoryDescriptor] = []
        response = self.transport.request(
            "GET", "/user/repos", params={"per_page": API_REPOS_PER_PAGE}
        )

        while True:
            if response.status != 200:
                if repos:
                    logger.warning(
                        "Stopped listing after %d repositories: status %d",
                        len(repos),
                        response.status,
                    )
                break

            page = _parse_page(response.body)
            if page is None:
                logger.warning("Stopped listing after %d repositories: bad page", len(repos))
                break
            repos.extend(_parse_repository(item) for item in page)

            if not response.next_url:
                break
            response = self.transport.request("GET", response.next_url)

        return repos

    def delete(self, owner: str, name: str) -> bool:
        """
        Delete ``owner/name``.

        Returns:
            True only on HTTP 204
        """
        response = self.transport.request("DELETE", f"/repos/{owner}/{name}")
        if response.status != 204:
            logger.info("Deleting %s/%s failed with status %d", owner, name, response.status)
            return False
        return True

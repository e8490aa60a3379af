"""Users resource client."""

import json
from typing import TYPE_CHECKING

from gh_repo_create.logging import get_logger
from gh_repo_create.types.users import AuthenticatedUser

if TYPE_CHECKING:
    from gh_repo_create.transport import HTTPTransport

logger = get_logger()


class UsersClient:
    """Client for user-related operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the users client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def get_authenticated(self) -> AuthenticatedUser | None:
        """
        Fetch the account that owns the token.

        Returns:
            AuthenticatedUser on HTTP 200 with a JSON object body, None otherwise
        """
        response = self.transport.request("GET", "/user")
        if response.status != 200:
            logger.debug("GET /user returned %d", response.status)
            return None

        try:
            data = json.loads(response.body)
        except ValueError:
            logger.debug("GET /user returned a body that is not JSON")
            return None

        if not isinstance(data, dict):
            return None

        return AuthenticatedUser(
            login=data.get("login") or "",
            name=data.get("name"),
            html_url=data.get("html_url") or "",
        )

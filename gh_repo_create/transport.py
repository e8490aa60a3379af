"""
HTTP Transport for gh-repo-create.

Handles authenticated HTTPS communication with the GitHub REST API. There is
no retry and no backoff: every call is a single request, and transport-level
failures are folded into a sentinel status so callers only ever compare
status codes.
"""

import time
from dataclasses import dataclass
from typing import Any

import httpx

from gh_repo_create.config import API_ACCEPT, API_TIMEOUT, API_VERSION, USER_AGENT
from gh_repo_create.logging import log_http_request, log_http_response

# Status reported when no HTTP response was received (DNS, connect, timeout).
# Real HTTP statuses are always positive.
TRANSPORT_ERROR_STATUS = -1


@dataclass
class ApiResponse:
    """Status, raw body and pagination link of one API call."""

    status: int
    body: str
    next_url: str | None = None

    @property
    def transport_failed(self) -> bool:
        return self.status == TRANSPORT_ERROR_STATUS


class HTTPTransport:
    """
    HTTP transport layer with bearer authentication.

    Handles:
    - Authorization, Accept and API-version headers on every request
    - Mapping of connection errors to ``TRANSPORT_ERROR_STATUS``
    - Extraction of the ``rel="next"`` pagination link
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = API_TIMEOUT,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: Bearer token sent with every request
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": API_ACCEPT,
                "X-GitHub-Api-Version": API_VERSION,
                "User-Agent": USER_AGENT,
            },
        )

    @property
    def headers(self) -> dict[str, str]:
        """Default headers sent with every request."""
        return dict(self._client.headers)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> ApiResponse:
        """
        Make a single request.

        Args:
            method: HTTP method
            path: API path (e.g., "/user/repos") or an absolute URL taken
                from a pagination link
            params: Query parameters
            json: Request body

        Returns:
            ApiResponse; ``status`` is ``TRANSPORT_ERROR_STATUS`` and ``body``
            describes the error when no response was received
        """
        log_http_request(method, path, headers=self._client.headers, body=json)
        started = time.monotonic()

        try:
            response = self._client.request(method, path, params=params, json=json)
        except httpx.RequestError as e:
            log_http_response(TRANSPORT_ERROR_STATUS, path)
            return ApiResponse(status=TRANSPORT_ERROR_STATUS, body=f"Network error: {e}")

        log_http_response(
            response.status_code, path, elapsed_ms=(time.monotonic() - started) * 1000
        )
        return ApiResponse(
            status=response.status_code,
            body=response.text,
            next_url=self._next_link(response),
        )

    @staticmethod
    def _next_link(response: httpx.Response) -> str | None:
        """Return the ``rel="next"`` URL from the ``Link`` header, if any."""
        next_link = response.links.get("next")
        if not next_link:
            return None
        return next_link.get("url") or None

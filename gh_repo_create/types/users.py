"""User-related data models."""

from dataclasses import dataclass


@dataclass
class AuthenticatedUser:
    """The account that owns the configured token."""

    login: str
    name: str | None = None
    html_url: str = ""

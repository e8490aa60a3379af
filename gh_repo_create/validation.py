"""Input rules for repository names and descriptions."""

import re

from gh_repo_create.config import MAX_DESCRIPTION_LENGTH, MAX_REPO_NAME_LENGTH
from gh_repo_create.exceptions import ValidationError

_REPO_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def is_valid_repo_name(name: str) -> bool:
    """Validate a repository name: 1-100 ASCII letters, digits, hyphens or underscores."""
    if not name or len(name) > MAX_REPO_NAME_LENGTH:
        return False
    return _REPO_NAME_PATTERN.fullmatch(name) is not None


def is_valid_description(description: str) -> bool:
    return len(description) <= MAX_DESCRIPTION_LENGTH


def validate_repo_name(name: str, strict: bool = True) -> str:
    """
    Return ``name`` or raise ValidationError with a message fit for the user.

    The length limit always applies. The character set is only enforced when
    ``strict``; names given on the command line go to GitHub as typed.
    """
    if not name:
        raise ValidationError("Repository name cannot be empty")
    if len(name) > MAX_REPO_NAME_LENGTH:
        raise ValidationError(
            f"Repository name too long ({len(name)}/{MAX_REPO_NAME_LENGTH})"
        )
    if strict and not is_valid_repo_name(name):
        raise ValidationError(
            "Invalid name. Use only letters, numbers, hyphens, and underscores."
        )
    return name


def validate_description(description: str) -> str:
    if not is_valid_description(description):
        raise ValidationError(
            f"Description too long ({len(description)}/{MAX_DESCRIPTION_LENGTH})"
        )
    return description

"""Shared fixtures, re-exported from gh_repo_create.testing."""

import logging
from collections.abc import Generator

import pytest

from gh_repo_create.logging import get_logger
from gh_repo_create.testing.fixtures import (  # noqa: F401
    credential_store,
    fake_git,
    git_runner,
    mock_client,
    repo_commands,
    sample_repositories,
    sample_repository,
    token_store,
)


@pytest.fixture(autouse=True)
def reset_package_logging() -> Generator[None, None, None]:
    """Undo configure_logging calls made by the CLI under test."""
    yield
    for name in (None, "http", "git"):
        logger = get_logger(name)
        logger.handlers = []
        logger.setLevel(logging.NOTSET)

"""gh-repo-create testing utilities.

Provides a mock GitHub client, a scripted git runner and fixtures for
testing code built on gh-repo-create.
"""

from gh_repo_create.testing.fixtures import create_mock_repository
from gh_repo_create.testing.mock import FakeGitRunner, MockCall, MockGitHubClient, MockResponse

__all__ = [
    # Mock client
    "MockGitHubClient",
    "MockCall",
    "MockResponse",
    # Git
    "FakeGitRunner",
    # Helper functions
    "create_mock_repository",
]

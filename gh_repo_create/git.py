"""
Git helper utilities for gh-repo-create.

Every operation shells out to the ``git`` executable through a
``CommandRunner`` and reports the outcome as a bool or an optional string.
Nothing here raises and nothing here talks to the GitHub API.
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from gh_repo_create.config import GIT_CONFIG_USER_KEY, SSH_TIMEOUT
from gh_repo_create.logging import log_git_command

GITHUB_HTTPS_BASE = "https://github.com/"
GITHUB_SSH_BASE = "git@github.com:"


@dataclass
class CommandResult:
    """Outcome of one external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Runs an argument vector and returns its result without raising."""

    def run(
        self,
        args: list[str],
        cwd: str | Path | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        ...


class SubprocessRunner:
    """CommandRunner backed by ``subprocess.run``."""

    def run(
        self,
        args: list[str],
        cwd: str | Path | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        try:
            completed = subprocess.run(
                args,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
            result = CommandResult(completed.returncode, completed.stdout, completed.stderr)
        except subprocess.TimeoutExpired as e:
            result = CommandResult(124, "", f"timed out after {e.timeout}s")
        except OSError as e:
            # Missing executable or unusable cwd
            result = CommandResult(127, "", str(e))

        log_git_command(args, str(cwd) if cwd is not None else None, result.returncode)
        return result


class LocalGit:
    """
    Answers repository-state questions and mutates remotes via ``git``.

    Example:
        ```python
        git = LocalGit()
        if git.is_git_repo("."):
            git.add_remote(".", "origin", "git@github.com:me/project.git")
            branch = git.get_current_branch(".")
            git.push(".", "origin", branch)
        ```
    """

    def __init__(self, runner: CommandRunner | None = None, executable: str = "git") -> None:
        """
        Initialize the adapter.

        Args:
            runner: Process runner (default: SubprocessRunner)
            executable: Name or path of the git executable
        """
        self.runner = runner or SubprocessRunner()
        self.executable = executable

    def _git(self, path: str | Path | None, *args: str) -> CommandResult:
        return self.runner.run([self.executable, *args], cwd=path)

    def is_git_repo(self, path: str | Path) -> bool:
        return self._git(path, "rev-parse", "--git-dir").ok

    def get_current_branch(self, path: str | Path) -> str | None:
        """Return the abbreviated branch name, or None when it cannot be determined."""
        result = self._git(path, "rev-parse", "--abbrev-ref", "HEAD")
        if not result.ok:
            return None
        branch = result.stdout.strip()
        return branch or None

    def has_remote(self, path: str | Path, name: str) -> bool:
        return self._git(path, "remote", "show", name).ok

    def get_remote_url(self, path: str | Path, name: str) -> str | None:
        result = self._git(path, "remote", "get-url", name)
        if not result.ok:
            return None
        return result.stdout.strip() or None

    def add_remote(self, path: str | Path, name: str, url: str) -> bool:
        return self._git(path, "remote", "add", name, url).ok

    def set_remote_url(self, path: str | Path, name: str, url: str) -> bool:
        return self._git(path, "remote", "set-url", name, url).ok

    def push(self, path: str | Path, remote: str, branch: str) -> bool:
        """
        Push ``branch`` to ``remote``, setting upstream.

        A freshly created repository is initialised by GitHub with its own
        commit, so the first push is usually rejected as non-fast-forward.
        A rejected push is retried exactly once with ``--force``.
        """
        if self._git(path, "push", "-u", remote, branch).ok:
            return True
        return self._git(path, "push", "-u", remote, branch, "--force").ok

    def configure_ssh_for_github(self) -> bool:
        """Rewrite HTTPS GitHub URLs to SSH in the user's global git config."""
        return self._git(
            None,
            "config",
            "--global",
            f"url.{GITHUB_SSH_BASE}.insteadOf",
            GITHUB_HTTPS_BASE,
        ).ok

    def get_global_config(self, key: str) -> str | None:
        result = self._git(None, "config", "--global", key)
        if not result.ok:
            return None
        return result.stdout.strip() or None

    def get_github_user(self) -> str | None:
        """Return the ``github.user`` key from the global git config."""
        return self.get_global_config(GIT_CONFIG_USER_KEY)

    def check_github_ssh(self) -> bool:
        """
        Probe SSH access to GitHub.

        ``ssh -T git@github.com`` exits 1 even on success, so the greeting
        text is checked instead of the exit status.
        """
        result = self.runner.run(
            ["ssh", "-T", "-o", "BatchMode=yes", GITHUB_SSH_BASE.rstrip(":")],
            timeout=SSH_TIMEOUT,
        )
        output = result.stdout + result.stderr
        return "successfully authenticated" in output

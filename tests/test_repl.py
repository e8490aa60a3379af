"""
Tests for the interactive REPL.

Input is scripted through ``input_fn``; running out of lines behaves like
Ctrl-D.

Feature: gh-repo-create
"""

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
import pytest

from gh_repo_create.commands import RepoCommands
from gh_repo_create.config import CredentialStore
from gh_repo_create.git import LocalGit
from gh_repo_create.repl import REPL, Completer
from gh_repo_create.testing import FakeGitRunner, MockGitHubClient, create_mock_repository


def scripted(*lines: str) -> Callable[[str], str]:
    remaining = iter(lines)

    def read(prompt: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return read


def make_repl(commands: RepoCommands, *lines: str, **kwargs: Any) -> REPL:
    read = scripted(*lines)
    kwargs.setdefault("readline_module", None)
    kwargs.setdefault("secret_fn", read)
    return REPL(commands, input_fn=read, **kwargs)


class FakeReadline:
    """Records the readline calls the REPL makes."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def __getattr__(self, name: str) -> Callable[..., None]:
        def record(*args: Any) -> None:
            self.calls.append((name, args))
        return record

    def called(self, name: str) -> list[tuple[Any, ...]]:
        return [args for call, args in self.calls if call == name]


@pytest.fixture
def on_main(git_runner: FakeGitRunner) -> FakeGitRunner:
    return git_runner.on("rev-parse", "--abbrev-ref", stdout="main\n")


# ============================================================================
# Loop and dispatch
# ============================================================================


def test_eof_ends_session_and_closes_client(
    repo_commands: RepoCommands, mock_client: MockGitHubClient
) -> None:
    repo_commands.connect()

    make_repl(repo_commands).run()

    assert mock_client.closed


def test_exit_command(repo_commands: RepoCommands, capsys: pytest.CaptureFixture[str]) -> None:
    repl = make_repl(repo_commands, "exit", "help")
    repl.run()

    out = capsys.readouterr().out
    assert "Goodbye!" in out
    assert "Available commands" not in out
    assert not repl.running


def test_quit_alias(repo_commands: RepoCommands) -> None:
    repl = make_repl(repo_commands)
    repl.running = True
    repl.run_command("quit")
    assert not repl.running


def test_help(repo_commands: RepoCommands, capsys: pytest.CaptureFixture[str]) -> None:
    make_repl(repo_commands).run_command("?")

    out = capsys.readouterr().out
    for name in ("create", "list", "delete", "ssh", "auth", "help", "exit"):
        assert name in out


def test_unknown_command(repo_commands: RepoCommands, capsys: pytest.CaptureFixture[str]) -> None:
    make_repl(repo_commands).run_command("frobnicate")
    assert "Unknown command: frobnicate" in capsys.readouterr().out


def test_blank_line_is_ignored(repo_commands: RepoCommands, capsys: pytest.CaptureFixture[str]) -> None:
    make_repl(repo_commands).run_command("   ")
    assert capsys.readouterr().out == ""


# ============================================================================
# Commands
# ============================================================================


def test_list(
    repo_commands: RepoCommands,
    mock_client: MockGitHubClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    mock_client.repositories.append(create_mock_repository("alpha", owner="test-user"))

    make_repl(repo_commands).run_command("l")

    out = capsys.readouterr().out
    assert "Authenticated as: test-user" in out
    assert "alpha [public]" in out


def test_create_flow(
    repo_commands: RepoCommands,
    mock_client: MockGitHubClient,
    on_main: FakeGitRunner,
    capsys: pytest.CaptureFixture[str],
) -> None:
    repl = make_repl(
        repo_commands,
        "",            # path: current directory
        "bad name!",   # rejected, asked again
        "my-repo",
        "A demo",
        "3",           # not a choice, asked again
        "2",           # private
        "y",           # create
        "y",           # push
    )
    repl.run_command("create")

    out = capsys.readouterr().out
    assert "Invalid name" in out
    assert "Visibility: Private" in out
    assert "Repository created successfully!" in out
    assert "Pushed 'main' successfully!" in out

    created = mock_client.get_calls("create_repository")[0].args[0]
    assert (created.name, created.description, created.is_private) == ("my-repo", "A demo", True)
    assert ["git", "push", "-u", "origin", "main"] in on_main.calls


def test_create_cancelled(
    repo_commands: RepoCommands,
    mock_client: MockGitHubClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    make_repl(repo_commands, ".", "my-repo", "", "1", "n").run_command("c")

    assert "Cancelled." in capsys.readouterr().out
    assert not mock_client.was_called("create_repository")


def test_create_without_push(
    repo_commands: RepoCommands,
    mock_client: MockGitHubClient,
    on_main: FakeGitRunner,
) -> None:
    make_repl(repo_commands, ".", "my-repo", "", "1", "y", "n").run_command("create")

    assert mock_client.was_called("create_repository")
    assert on_main.called_with("push") == 0


def test_create_outside_repository(
    repo_commands: RepoCommands,
    git_runner: FakeGitRunner,
    capsys: pytest.CaptureFixture[str],
) -> None:
    git_runner.on("rev-parse", "--git-dir", returncode=128)

    make_repl(repo_commands, "/tmp/plain").run_command("create")

    assert "/tmp/plain is not a git repository" in capsys.readouterr().out


def test_create_push_failure_reported_inline(
    repo_commands: RepoCommands,
    on_main: FakeGitRunner,
    capsys: pytest.CaptureFixture[str],
) -> None:
    on_main.on("push", returncode=1)

    make_repl(repo_commands, ".", "my-repo", "", "1", "y", "y").run_command("create")

    out = capsys.readouterr().out
    assert "Repository 'my-repo' exists on GitHub." in out
    assert "pushing 'main' failed" in out


def test_create_eof_mid_prompt(
    repo_commands: RepoCommands, mock_client: MockGitHubClient
) -> None:
    make_repl(repo_commands, ".", "my-repo").run_command("create")
    assert not mock_client.was_called("create_repository")


def test_delete_requires_exact_name(
    repo_commands: RepoCommands,
    mock_client: MockGitHubClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    mock_client.repositories.append(create_mock_repository("old"))

    make_repl(repo_commands, "old", "Old").run_command("delete")

    assert "Cancelled" in capsys.readouterr().out
    assert not mock_client.was_called("delete_repository")


def test_delete_confirmed(
    repo_commands: RepoCommands,
    mock_client: MockGitHubClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    mock_client.repositories.append(create_mock_repository("old"))

    make_repl(repo_commands, "old", "old").run_command("d")

    assert "Repository deleted successfully!" in capsys.readouterr().out
    assert not mock_client.repositories


def test_delete_failure_reported_inline(
    repo_commands: RepoCommands, capsys: pytest.CaptureFixture[str]
) -> None:
    repl = make_repl(repo_commands, "ghost", "ghost")
    repl.running = True
    repl.run_command("delete")

    assert "Error: Failed to delete repository 'ghost'" in capsys.readouterr().out
    assert repl.running


def test_ssh_push(
    repo_commands: RepoCommands,
    mock_client: MockGitHubClient,
    on_main: FakeGitRunner,
    capsys: pytest.CaptureFixture[str],
) -> None:
    make_repl(repo_commands, "").run_command("s")

    assert "Pushed 'main' successfully!" in capsys.readouterr().out
    assert not mock_client.was_called("authenticate")


def test_auth_prompt_when_token_missing(
    credential_store: CredentialStore,
    fake_git: LocalGit,
    mock_client: MockGitHubClient,
    capsys: pytest.CaptureFixture[str],
) -> None:
    commands = RepoCommands(credential_store, fake_git, client_factory=lambda token: mock_client)

    make_repl(commands, "ghp_newtoken98765").run_command("list")

    out = capsys.readouterr().out
    assert "No GitHub token found" in out
    assert "Token saved successfully!" in out
    assert "No repositories found." in out
    assert credential_store.load() == "ghp_newtoken98765"


def test_auth_abandoned(
    credential_store: CredentialStore,
    fake_git: LocalGit,
    mock_client: MockGitHubClient,
) -> None:
    commands = RepoCommands(credential_store, fake_git, client_factory=lambda token: mock_client)

    make_repl(commands, "").run_command("list")

    assert credential_store.load() is None
    assert not mock_client.was_called("list_repositories")


def test_auth_command_replaces_token(
    repo_commands: RepoCommands,
    token_store: CredentialStore,
    mock_client: MockGitHubClient,
) -> None:
    repo_commands.connect()

    make_repl(repo_commands, "ghp_rotated00000").run_command("auth")

    assert token_store.load() == "ghp_rotated00000"
    assert mock_client.closed


# ============================================================================
# History and completion
# ============================================================================


def test_history_loaded_and_truncated(repo_commands: RepoCommands, tmp_path: Path) -> None:
    history = tmp_path / "history"
    history.write_text("list\n")
    readline = FakeReadline()

    make_repl(repo_commands, "help", readline_module=readline, history_path=history).run()

    assert readline.called("read_history_file") == [(str(history),)]
    assert readline.called("set_history_length") == [(100,)]
    assert readline.called("write_history_file") == [(str(history),)]
    assert readline.called("parse_and_bind") == [("tab: complete",)]


def test_missing_history_file_is_not_read(repo_commands: RepoCommands, tmp_path: Path) -> None:
    readline = FakeReadline()

    make_repl(
        repo_commands, readline_module=readline, history_path=tmp_path / "none"
    ).run()

    assert readline.called("read_history_file") == []
    assert readline.called("write_history_file") == [(str(tmp_path / "none"),)]


def test_only_command_lines_enter_history(
    credential_store: CredentialStore,
    fake_git: LocalGit,
    mock_client: MockGitHubClient,
    tmp_path: Path,
) -> None:
    commands = RepoCommands(credential_store, fake_git, client_factory=lambda token: mock_client)
    readline = FakeReadline()
    token = "ghp_SECRETTOKEN1234567890abcdef"

    make_repl(
        commands,
        "auth",
        "delete",
        "victim",       # repository to delete
        "not-victim",   # confirmation mismatch
        " help ",
        readline_module=readline,
        secret_fn=lambda prompt: token,
        history_path=tmp_path / "history",
    ).run()

    assert credential_store.load() == token
    assert readline.called("set_auto_history") == [(False,)]
    assert readline.called("add_history") == [("auth",), ("delete",), ("help",)]
    assert all(token not in repr(args) for _, args in readline.calls)


def test_token_prompt_cancelled(
    credential_store: CredentialStore, fake_git: LocalGit, mock_client: MockGitHubClient
) -> None:
    commands = RepoCommands(credential_store, fake_git, client_factory=lambda token: mock_client)

    def abort(prompt: str) -> str:
        raise click.Abort()

    assert not make_repl(commands, secret_fn=abort).cmd_auth()
    assert credential_store.load() is None


def test_completes_commands_at_line_start() -> None:
    assert Completer.candidates("cr", "") == ["create"]
    assert Completer.candidates("e", "  ") == ["exit"]
    assert "delete" in Completer.candidates("", "")


def test_completes_paths_after_command(tmp_path: Path) -> None:
    (tmp_path / "project").mkdir()
    (tmp_path / "profile.txt").write_text("")
    (tmp_path / "other").mkdir()

    matches = Completer.candidates(str(tmp_path / "pro"), "create ")

    assert matches == [
        str(tmp_path / "profile.txt"),
        str(tmp_path / "project") + os.sep,
    ]


def test_complete_state_protocol() -> None:
    completer = Completer()
    assert completer.complete("li", 0) == "list"
    assert completer.complete("li", 1) is None

"""
Interactive mode for gh-repo-create.

A readline-driven prompt with persistent history and tab completion of
command names and filesystem paths. Every command reports failures inline
and returns to the prompt.
"""

import glob
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from gh_repo_create import __version__
from gh_repo_create.commands import RepoCommands
from gh_repo_create.config import HISTORY_LENGTH, MAX_DESCRIPTION_LENGTH, default_history_path
from gh_repo_create.exceptions import (
    AuthenticationFailedError,
    CredentialsMissingError,
    GhRepoError,
    PushError,
    ValidationError,
)
from gh_repo_create.logging import get_logger
from gh_repo_create.output import echo_create_result, echo_repositories
from gh_repo_create.types.repos import RepositoryDescriptor
from gh_repo_create.validation import validate_description, validate_repo_name

try:
    import readline as _readline
except ImportError:  # Windows without pyreadline
    _readline = None

logger = get_logger()

PROMPT = "gh-repo> "


def _read_secret(text: str) -> str:
    """Read a line without echoing it. Bypasses readline, so nothing enters history."""
    return click.prompt(text, hide_input=True, default="", show_default=False)

# name -> (aliases, help text)
COMMANDS: dict[str, tuple[tuple[str, ...], str]] = {
    "create": (("c",), "Create a new GitHub repository"),
    "list": (("l",), "List your GitHub repositories"),
    "delete": (("d",), "Delete a GitHub repository"),
    "ssh": (("s",), "Push an existing repository over SSH"),
    "auth": ((), "Manage authentication"),
    "help": (("?",), "Show this help message"),
    "exit": (("quit",), "Exit the REPL"),
}


def _resolve_command(word: str) -> str | None:
    for name, (aliases, _) in COMMANDS.items():
        if word == name or word in aliases:
            return name
    return None


class Completer:
    """readline completer: command names first, then paths."""

    def __init__(self, readline_module: Any = None) -> None:
        self._readline = readline_module
        self._matches: list[str] = []

    @staticmethod
    def candidates(text: str, line_before: str) -> list[str]:
        """Return completions for ``text`` given what precedes it on the line."""
        if not line_before.strip():
            words = [name for name in COMMANDS] + [
                alias for aliases, _ in COMMANDS.values() for alias in aliases
            ]
            return sorted(w for w in words if w.startswith(text))

        pattern = os.path.expanduser(text) + "*"
        matches = []
        for match in sorted(glob.glob(pattern)):
            if os.path.isdir(match):
                match += os.sep
            if text.startswith("~"):
                match = match.replace(os.path.expanduser("~"), "~", 1)
            matches.append(match)
        return matches

    def complete(self, text: str, state: int) -> str | None:
        if state == 0:
            line_before = ""
            if self._readline is not None:
                line_before = self._readline.get_line_buffer()[: self._readline.get_begidx()]
            self._matches = self.candidates(text, line_before)
        if state < len(self._matches):
            return self._matches[state]
        return None


class REPL:
    """
    Interactive session bound to one RepoCommands instance.

    Example:
        ```python
        REPL(RepoCommands(CredentialStore(), LocalGit())).run()
        ```
    """

    def __init__(
        self,
        commands: RepoCommands,
        input_fn: Callable[[str], str] = input,
        secret_fn: Callable[[str], str] = _read_secret,
        readline_module: Any = _readline,
        history_path: str | Path | None = None,
        history_length: int = HISTORY_LENGTH,
    ) -> None:
        """
        Initialize the REPL.

        Args:
            commands: Command layer to dispatch to
            input_fn: Line reader (default: ``input``, which uses readline when loaded)
            secret_fn: Reader for the token; must not echo or record the line
            readline_module: readline module for history and completion, or None
            history_path: History file (default: ``~/.gh-repo-create-history``)
            history_length: Number of history entries kept on exit
        """
        self.commands = commands
        self.input_fn = input_fn
        self.secret_fn = secret_fn
        self.readline = readline_module
        self.history_path = Path(history_path) if history_path is not None else default_history_path()
        self.history_length = history_length
        self.running = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def run(self) -> None:
        self._setup_readline()
        self.print_banner()

        self.running = True
        try:
            while self.running:
                try:
                    line = self.input_fn(PROMPT)
                except EOFError:
                    click.echo()
                    break
                except KeyboardInterrupt:
                    click.echo()
                    continue
                self._remember(line)
                self.run_command(line)
        finally:
            self._save_history()
            self.commands.close()

    def _setup_readline(self) -> None:
        if self.readline is None:
            return
        if self.history_path.exists():
            try:
                self.readline.read_history_file(str(self.history_path))
            except OSError as e:
                logger.debug("Could not read history %s: %s", self.history_path, e)
        # Sub-prompt answers (names, tokens) must not be recorded
        self.readline.set_auto_history(False)
        self.readline.set_completer(Completer(self.readline).complete)
        self.readline.set_completer_delims(" \t\n")
        self.readline.parse_and_bind("tab: complete")

    def _remember(self, line: str) -> None:
        if self.readline is not None and line.strip():
            self.readline.add_history(line.strip())

    def _save_history(self) -> None:
        if self.readline is None:
            return
        self.readline.set_history_length(self.history_length)
        try:
            self.readline.write_history_file(str(self.history_path))
        except OSError as e:
            logger.debug("Could not write history %s: %s", self.history_path, e)

    def _prompt(self, text: str) -> str | None:
        """Read one stripped line; None on EOF."""
        try:
            return self.input_fn(text).strip()
        except EOFError:
            click.echo()
            return None

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def run_command(self, line: str) -> None:
        cmd = line.strip()
        if not cmd:
            return

        name = _resolve_command(cmd)
        handlers = {
            "create": self.cmd_create,
            "list": self.cmd_list,
            "delete": self.cmd_delete,
            "ssh": self.cmd_ssh,
            "auth": self.cmd_auth,
            "help": self.print_help,
            "exit": self.cmd_exit,
        }
        if name is None:
            click.secho(f"Unknown command: {cmd}", fg="red")
            click.echo("Type 'help' for available commands")
            return

        try:
            handlers[name]()
        except PushError as e:
            if e.repository is not None:
                click.secho(f"Repository '{e.repository.name}' exists on GitHub.", fg="yellow")
            click.secho(e.message, fg="red")
        except GhRepoError as e:
            click.secho(f"Error: {e.message}", fg="red")
        except KeyboardInterrupt:
            click.echo()
            click.echo("Cancelled.")

    def print_banner(self) -> None:
        click.secho(f"  gh-repo-create v{__version__}", bold=True, nl=False)
        click.secho(" - GitHub Repository Creator", fg="bright_black")
        click.secho("  Type 'help' for available commands", fg="bright_black")
        click.echo()

    def print_help(self) -> None:
        click.secho("Available commands:", bold=True)
        for name, (aliases, text) in COMMANDS.items():
            label = name + (f" ({', '.join(aliases)})" if aliases else "")
            click.echo(f"  {click.style(label.ljust(14), fg='green')} - {text}")

    def cmd_exit(self) -> None:
        self.running = False
        click.echo("Goodbye!")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def ensure_auth(self) -> bool:
        """Connect, walking the user through ``auth`` once if needed."""
        try:
            client = self.commands.connect()
        except CredentialsMissingError:
            click.secho("No GitHub token found. Please authenticate first.", fg="yellow")
        except AuthenticationFailedError:
            click.secho("Authentication failed. Please check your token and try again.", fg="red")
        else:
            click.secho(f"Authenticated as: {client.get_username()}", fg="green")
            return True

        if not self.cmd_auth():
            return False
        client = self.commands.connect()
        click.secho(f"Authenticated as: {client.get_username()}", fg="green")
        return True

    def cmd_auth(self) -> bool:
        """Prompt for a token and save it; return True when one was saved."""
        click.echo()
        click.echo("To create a GitHub Personal Access Token:")
        click.echo("  1. Go to https://github.com/settings/tokens")
        click.echo("  2. Click 'Generate new token (classic)'")
        click.echo("  3. Select scopes: 'repo' and 'delete_repo'")
        click.echo("  4. Copy the token and paste below")
        click.echo()

        try:
            token = self.secret_fn("Enter your GitHub token").strip()
        except (EOFError, click.Abort):
            click.echo()
            return False
        if not token:
            return False

        if not self.commands.credentials.save(token):
            click.secho("Failed to save token.", fg="red")
            return False

        click.secho("Token saved successfully!", fg="green")
        self.commands.reset_client()
        return True

    def _ask_path(self) -> str | None:
        click.echo()
        click.echo("Enter the path to your local git repository:")
        click.secho("(press Enter to use current directory)", fg="bright_black")
        path = self._prompt("Path: ")
        if path is None:
            return None
        return os.path.expanduser(path) if path else "."

    def _ask_name(self) -> str | None:
        while True:
            name = self._prompt("Repository name: ")
            if name is None:
                return None
            try:
                return validate_repo_name(name)
            except ValidationError as e:
                click.secho(e.message, fg="red")

    def _ask_description(self) -> str | None:
        while True:
            click.echo(f"Description (max {MAX_DESCRIPTION_LENGTH} chars): ", nl=False)
            click.secho("(press Enter to skip)", fg="bright_black")
            description = self._prompt("> ")
            if description is None:
                return None
            try:
                return validate_description(description)
            except ValidationError as e:
                click.secho(e.message, fg="red")

    def _ask_private(self) -> bool | None:
        click.echo()
        click.echo("Visibility:")
        click.echo("  1. Public")
        click.echo("  2. Private")
        while True:
            choice = self._prompt("Choose (1/2): ")
            if choice is None:
                return None
            if choice == "1":
                return False
            if choice == "2":
                return True

    def _confirm(self, question: str) -> bool:
        answer = self._prompt(f"{question} (y/n): ")
        return answer in ("y", "Y")

    def cmd_create(self) -> None:
        if not self.ensure_auth():
            return

        path = self._ask_path()
        if path is None:
            return
        if not self.commands.git.is_git_repo(path):
            click.secho(f"Error: {path} is not a git repository", fg="red")
            return

        click.echo()
        click.secho("Repository Creation", fg="blue", bold=True)
        click.echo("-" * 40)

        name = self._ask_name()
        if name is None:
            return
        description = self._ask_description()
        if description is None:
            return
        is_private = self._ask_private()
        if is_private is None:
            return

        repo = RepositoryDescriptor(name=name, description=description, is_private=is_private)

        click.echo()
        click.secho("Summary:", bold=True)
        click.echo(f"  Name: {repo.name}")
        click.echo(f"  Description: {repo.description or '(none)'}")
        click.echo(f"  Visibility: {repo.visibility.capitalize()}")
        click.echo()

        if not self._confirm("Create repository?"):
            click.echo("Cancelled.")
            return

        click.secho("Creating repository...", fg="yellow")
        self.commands.create(path, repo, push=False)
        click.secho("Repository created successfully!", fg="green")

        if self._confirm("Push to GitHub?"):
            echo_create_result(self.commands.link_and_push(path, repo))

    def cmd_list(self) -> None:
        if not self.ensure_auth():
            return
        echo_repositories(self.commands.list_repositories())

    def cmd_delete(self) -> None:
        if not self.ensure_auth():
            return

        name = self._prompt("Repository to delete: ")
        if not name:
            return

        click.secho(
            f"This permanently deletes '{name}' and cannot be undone.", fg="yellow", bold=True
        )
        confirmation = self._prompt("Type the repository name to confirm: ")
        if confirmation != name:
            click.echo("Name did not match. Cancelled.")
            return

        self.commands.delete(name)
        click.secho("Repository deleted successfully!", fg="green")

    def cmd_ssh(self) -> None:
        path = self._ask_path()
        if path is None:
            return
        branch = self.commands.push_only(path)
        click.secho(f"Pushed '{branch}' successfully!", fg="green")

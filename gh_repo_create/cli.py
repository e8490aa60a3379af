"""Command line interface for gh-repo-create."""

import logging
import sys

import click
from click.core import ParameterSource

from gh_repo_create.commands import RepoCommands
from gh_repo_create.config import MAX_DESCRIPTION_LENGTH, CredentialStore
from gh_repo_create.exceptions import GhRepoError, PushError
from gh_repo_create.git import LocalGit
from gh_repo_create.logging import configure_logging, get_logger, mask_token
from gh_repo_create.output import (
    echo_check_results,
    echo_create_result,
    echo_error,
    echo_repositories,
    echo_success,
)
from gh_repo_create.types.repos import RepositoryDescriptor

logger = get_logger()

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
DEFAULT_LOG_LEVEL = "WARNING"


def setup_logging(log_level: str = DEFAULT_LOG_LEVEL, debug: bool = False) -> None:
    """Send package logs to stderr so stdout only carries command output."""
    level = logging.DEBUG if debug else getattr(logging, log_level)
    configure_logging(level=level, handler=logging.StreamHandler(sys.stderr))


def build_commands() -> RepoCommands:
    return RepoCommands(CredentialStore(), LocalGit())


def _no_arguments_given(ctx: click.Context) -> bool:
    return not any(
        ctx.get_parameter_source(param.name) == ParameterSource.COMMANDLINE
        for param in ctx.command.params
        if param.name is not None
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option('--path', '-p', default='.', show_default=True, help='Path to local git repository')
@click.option('--name', '-n', default='', help='Repository name')
@click.option('--description', '-d', default='', help='Repository description')
@click.option('--public/--private', 'public', default=True, help='Repository visibility (default: public)')
@click.option('--list', '-l', 'list_repos', is_flag=True, help='List all your GitHub repositories')
@click.option('--delete', '-D', 'delete_name', default='', metavar='NAME', help='Delete a repository by name')
@click.option('--ssh-only', is_flag=True, help='Skip GitHub API, just push via SSH')
@click.option('--check', 'run_check', is_flag=True, help='Check token, SSH access and the local repository')
@click.option('--debug', is_flag=True, help='Enable debug output')
@click.option(
    '--log-level',
    type=click.Choice(LOG_LEVELS),
    default=DEFAULT_LOG_LEVEL,
    help=f'Logging level (default: {DEFAULT_LOG_LEVEL})'
)
@click.pass_context
def main(ctx: click.Context, path: str, name: str, description: str, public: bool,
         list_repos: bool, delete_name: str, ssh_only: bool, run_check: bool,
         debug: bool, log_level: str):
    """
    gh-repo-create - Create GitHub repositories from the command line

    Run without arguments to enter interactive REPL mode.

    Example usage:

        gh-repo-create --path ./my-project --name my-repo --public

        gh-repo-create -p . -n new-repo -d "My project" --private

        gh-repo-create --list

        gh-repo-create --delete my-old-repo

        gh-repo-create --ssh-only -p .
    """
    setup_logging(log_level, debug)

    commands = ctx.obj if isinstance(ctx.obj, RepoCommands) else build_commands()

    if _no_arguments_given(ctx):
        from gh_repo_create.repl import REPL

        REPL(commands).run()
        return

    if debug:
        click.echo("[DEBUG] Debug mode enabled", err=True)
        click.echo(f"[DEBUG] Token: {mask_token(commands.credentials.load() or '')}", err=True)

    try:
        if run_check:
            if not echo_check_results(commands.check(path)):
                sys.exit(1)
            return

        if ssh_only:
            branch = commands.push_only(path)
            echo_success(f"Pushed '{branch}' successfully!")
            return

        if list_repos:
            echo_repositories(commands.list_repositories())
            return

        if delete_name:
            click.echo(f"Deleting repository '{delete_name}'...")
            commands.delete(delete_name)
            echo_success("Repository deleted successfully!")
            return

        if not name:
            echo_error("Repository name is required")
            click.echo(ctx.get_help(), err=True)
            sys.exit(1)

        if len(description) > MAX_DESCRIPTION_LENGTH:
            echo_error(f"Description too long (max {MAX_DESCRIPTION_LENGTH} characters)")
            sys.exit(1)

        repo = RepositoryDescriptor(name=name, description=description, is_private=not public)
        click.echo(f"Creating repository '{name}'...")
        result = commands.create(path, repo)
        echo_success("Repository created successfully!")
        echo_create_result(result)

    except PushError as e:
        if e.repository is not None:
            echo_success(f"Repository '{e.repository.name}' exists on GitHub.")
        echo_error(e.message)
        sys.exit(1)
    except GhRepoError as e:
        echo_error(e.message)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    finally:
        commands.close()


if __name__ == '__main__':
    main()

"""Terminal rendering shared by the CLI and the REPL."""

import click

from gh_repo_create.commands import CheckResult, CreateResult
from gh_repo_create.types.repos import RepositoryDescriptor

RULE_WIDTH = 60

_CHECK_COLORS = {
    "pass": "green",
    "fail": "red",
    "warn": "yellow",
    "skip": "yellow",
}


def echo_error(message: str) -> None:
    """Print a one-line error to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    click.secho(message, fg="green")


def echo_repositories(repos: list[RepositoryDescriptor]) -> None:
    """Print a repository listing with visibility, description and URL."""
    if not repos:
        click.echo("No repositories found.")
        return

    click.secho("Your Repositories:", bold=True)
    click.echo("-" * RULE_WIDTH)
    for repo in repos:
        click.echo(f"{repo.name} [{repo.visibility}]")
        if repo.description:
            click.echo(f"  {repo.description}")
        click.secho(f"  {repo.html_url}", fg="bright_black")
        click.echo()
    click.echo(f"Total: {len(repos)} repository(ies)")


def echo_create_result(result: CreateResult) -> None:
    if result.remote_action is not None:
        click.echo(f"{result.remote_action.capitalize()} 'origin' remote: {result.repository.ssh_url}")
    if result.pushed:
        echo_success(f"Pushed '{result.branch}' successfully!")


def echo_check_results(results: list[CheckResult]) -> bool:
    """Print the ``--check`` report; return True when nothing failed."""
    click.echo()
    click.secho("System Check", bold=True)
    click.echo("-" * 40)

    section = None
    number = 0
    for result in results:
        if result.title != section:
            section = result.title
            number += 1
            click.echo()
            click.secho(f"{number}. {section}", bold=True)
        tag = click.style(f"   [{result.status.upper()}] ", fg=_CHECK_COLORS[result.status])
        click.echo(f"{tag}{result.message}")
        for hint in result.hints:
            click.secho(f"   -> {hint}", fg="bright_black")

    click.echo()
    click.echo("-" * 40)
    all_passed = not any(result.failed for result in results)
    if all_passed:
        click.secho("All checks passed! You have full CRUD access.", fg="green", bold=True)
    else:
        click.secho("Some checks failed. See errors above.", fg="red", bold=True)
    return all_passed

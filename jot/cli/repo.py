"""Repository lookup shared by the CLI commands."""

import click

from jot.core.repository import Repository
from jot.operations.controller import Controller
from jot.cli.output import error


def find_controller() -> Controller:
    """
    Controller for the repository containing the current directory.

    Aborts the command when there is none.
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a jot repository"))
        raise click.Abort()
    return Controller(repo)

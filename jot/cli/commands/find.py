"""Find command - look up commits by message."""

import click

from jot.core.errors import JotError
from jot.cli.output import error
from jot.cli.repo import find_controller


@click.command('find')
@click.argument('message')
def find_cmd(message):
    """
    Print the hash of every commit with exactly this message.
    
    Searches the history of all branches.
    
    Examples:
        jot find "initial commit"
    """
    controller = find_controller()
    
    try:
        hashes = controller.find(message)
    except JotError as e:
        click.echo(error(f"Failed to read history: {e}"))
        raise click.Abort()
    
    if not hashes:
        click.echo(error("Found no commit with that message"))
        return
    
    for commit_hash in hashes:
        click.echo(commit_hash)

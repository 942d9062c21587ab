"""Commit command - create a commit from staged changes."""

import click

from jot.core.errors import UserError, JotError
from jot.cli.output import success, error, info
from jot.cli.repo import find_controller


@click.command('commit')
@click.argument('message_arg', metavar='[MESSAGE]', required=False)
@click.option('-m', '--message', help='Commit message')
def commit_cmd(message_arg, message):
    """
    Record changes to the repository.
    
    Creates a commit from the staged changes. The new commit tracks
    everything its parent tracked, plus staged additions, minus staged
    removals. The staging area is emptied afterwards.
    
    Examples:
        jot commit -m "Add feature"
        jot commit "Fix typo"
    """
    controller = find_controller()
    message = message if message is not None else (message_arg or '')
    
    try:
        commit = controller.commit(message)
    except UserError as e:
        click.echo(error(str(e)))
        return
    except (JotError, OSError) as e:
        click.echo(error(f"Failed to create commit: {e}"))
        raise click.Abort()
    
    click.echo(success(f"Committed as {commit.hash}"))
    click.echo(info(f"Parent: {commit.parent[:7]}"))
    click.echo(info(f"Files: {len(commit.tracked)}"))

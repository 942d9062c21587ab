"""Log commands - show commit history."""

import click

from jot.core.errors import JotError
from jot.cli.output import error, format_commit, info
from jot.cli.repo import find_controller


@click.command('log')
@click.option('-n', '--max-count', type=int, help='Limit number of commits')
def log_cmd(max_count):
    """
    Show commit history.
    
    Lists the current commit and its ancestors back to the initial
    commit, most recent first.
    
    Examples:
        jot log
        jot log -n 5
    """
    controller = find_controller()
    
    try:
        history = controller.log()
    except JotError as e:
        click.echo(error(f"Failed to read history: {e}"))
        raise click.Abort()
    
    if max_count is not None:
        history = history[:max_count]
    
    for commit in history:
        click.echo(format_commit(commit))


@click.command('global-log')
@click.option('--repeat-shared', is_flag=True,
              help='List commits shared by several branches once per branch')
def global_log_cmd(repeat_shared):
    """
    Show the history of every branch.
    
    Branches are listed in name order. By default a commit reachable
    from several branches is listed only under the first of them.
    
    Examples:
        jot global-log
        jot global-log --repeat-shared
    """
    controller = find_controller()
    
    try:
        histories = controller.global_log(dedupe=not repeat_shared)
    except JotError as e:
        click.echo(error(f"Failed to read history: {e}"))
        raise click.Abort()
    
    for branch, commits in histories:
        if not commits:
            continue
        click.echo(info(f"branch {branch}"))
        for commit in commits:
            click.echo(format_commit(commit))

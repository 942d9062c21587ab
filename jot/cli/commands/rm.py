"""Rm command - unstage files or stage their removal."""

import click
from pathlib import Path

from jot.core.errors import UserError, JotError
from jot.cli.output import success, error, info
from jot.cli.repo import find_controller


@click.command('rm')
@click.argument('paths', nargs=-1, required=True)
def rm_cmd(paths):
    """
    Remove files from the staging area or from tracking.
    
    A staged file is unstaged. A file tracked by the current commit is
    also deleted from the working directory and staged for removal, so
    the next commit no longer tracks it.
    
    Examples:
        jot rm old.txt
    """
    controller = find_controller()
    
    for path in paths:
        resolved_path = Path(path)
        if not resolved_path.is_absolute():
            resolved_path = Path.cwd() / resolved_path
        
        try:
            result = controller.rm(resolved_path)
        except UserError as e:
            click.echo(error(str(e)))
            continue
        except (JotError, OSError) as e:
            click.echo(error(f"Failed to remove {path}: {e}"))
            raise click.Abort()
        
        if result.staged_removal:
            click.echo(success(f"Staged removal of {result.path}"))
            if result.deleted_file:
                click.echo(info(f"  deleted {result.path} from the working directory"))
        elif result.unstaged:
            click.echo(success(f"Unstaged {result.path}"))

"""Add command - stage files for commit."""

import click
from pathlib import Path

from jot.core.errors import UserError, JotError
from jot.cli.output import success, error, info
from jot.cli.repo import find_controller


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.
    
    Stage files for the next commit. Modified files must be added
    again to stage the new changes. Files that already match the
    current commit are left alone.
    
    Examples:
        jot add file.txt
        jot add notes.md src/main.c
    """
    controller = find_controller()
    
    added_files = []
    unchanged_files = []
    failed_files = []
    
    for path in paths:
        resolved_path = Path(path)
        if not resolved_path.is_absolute():
            resolved_path = Path.cwd() / resolved_path
        
        try:
            blob_hash = controller.add(resolved_path)
        except UserError as e:
            failed_files.append(str(e))
            continue
        except (JotError, OSError) as e:
            click.echo(error(f"Failed to add {path}: {e}"))
            raise click.Abort()
        
        if blob_hash is None:
            unchanged_files.append(path)
        else:
            added_files.append((path, blob_hash))
    
    if added_files:
        click.echo(success(f"Added {len(added_files)} file(s) to staging area"))
        for path, blob_hash in added_files:
            click.echo(info(f"  {path} ({blob_hash[:7]})"))
    
    for path in unchanged_files:
        click.echo(info(f"{path} already matches the current commit"))
    
    for message in failed_files:
        click.echo(error(message))

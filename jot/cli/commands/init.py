"""Initialize a new Jot repository."""

import click
from pathlib import Path

from jot.core.errors import UserError, JotError
from jot.operations.controller import Controller
from jot.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
@click.option('-b', '--initial-branch', help='Name of the initial branch')
def init_cmd(path, initial_branch):
    """
    Initialize a new Jot repository.
    
    Creates a .jot directory and records the root commit
    ("initial commit"), which is identical in every repository.
    
    Examples:
        jot init                    # Initialize in current directory
        jot init my-project         # Initialize in my-project directory
        jot init -b trunk           # Use "trunk" as the first branch
    """
    repo_path = Path(path).resolve()
    
    try:
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))
        
        controller = Controller.at(repo_path)
        root = controller.init(initial_branch)
    except UserError as e:
        click.echo(error(str(e)))
        return
    except JotError as e:
        click.echo(error(f"Failed to initialize repository: {e}"))
        raise click.Abort()
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()
    except OSError as e:
        click.echo(error(f"Failed to initialize repository: {e}"))
        raise click.Abort()
    
    branch = controller.repo.refs.get_current_branch()
    click.echo(success(f"Initialized empty Jot repository in {controller.repo.jot_dir}"))
    click.echo(info(f"On branch {branch} at {root.hash[:7]} ({root.message})"))

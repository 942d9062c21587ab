"""Config command - manage repository configuration."""

import click

from jot.core.config import get_config, split_key
from jot.core.repository import Repository
from jot.cli.output import success, error, info


def _load_config(is_global):
    """Config for the current repository, or global-only config."""
    if is_global:
        return get_config()

    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a jot repository (use --global for global config)"))
        raise click.Abort()
    return get_config(repo)


def _split(key):
    try:
        return split_key(key)
    except ValueError as e:
        click.echo(error(str(e)))
        raise click.Abort()


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        jot config set core.compression 9
        jot config set --global init.defaultBranch trunk
    """
    section, option = _split(key)
    _load_config(is_global).set(section, option, value, global_config=is_global)

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('get')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Get global config only')
def config_get(key, is_global):
    """
    Get a config value.

    Environment variables (JOT_<SECTION>_<KEY>) take precedence over
    repository config, which takes precedence over global config.

    Examples:
        jot config get core.compression
    """
    section, option = _split(key)
    value = _load_config(is_global).get(section, option)

    if value is None:
        click.echo(error(f"Config key not found: {key}"))
        raise click.Abort()
    click.echo(value)


@config_cmd.command('unset')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Unset global config')
def config_unset(key, is_global):
    """Remove a config value."""
    section, option = _split(key)

    if _load_config(is_global).unset(section, option, global_config=is_global):
        click.echo(success(f"Unset {key}"))
    else:
        click.echo(error(f"Config key not found: {key}"))


@config_cmd.command('list')
@click.option('--global', 'is_global', is_flag=True, help='List global config only')
def config_list(is_global):
    """List all explicitly set config values."""
    values = _load_config(is_global).list_all()

    if not values:
        click.echo(info("No configuration set"))
        return

    for key, value in values.items():
        click.echo(f"{key}={value}")

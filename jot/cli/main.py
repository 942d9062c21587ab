"""Main CLI entry point for Jot."""

import logging

import click
from colorama import init

from jot import __version__
from jot.cli.output import BANNER
from jot.cli.commands import (init_cmd, add_cmd, commit_cmd, rm_cmd, log_cmd,
                              global_log_cmd, find_cmd, config_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class JotGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=JotGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Show debug logging')
def cli(verbose):
    """Jot - a minimal content-addressed version control engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(rm_cmd)
cli.add_command(log_cmd)
cli.add_command(global_log_cmd)
cli.add_command(find_cmd)
cli.add_command(config_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()

"""CLI commands for Jot."""

from jot.cli.commands.init import init_cmd
from jot.cli.commands.add import add_cmd
from jot.cli.commands.commit import commit_cmd
from jot.cli.commands.rm import rm_cmd
from jot.cli.commands.log import log_cmd, global_log_cmd
from jot.cli.commands.find import find_cmd
from jot.cli.commands.config import config_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'rm_cmd', 'log_cmd',
           'global_log_cmd', 'find_cmd', 'config_cmd']

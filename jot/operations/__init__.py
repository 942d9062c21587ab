"""Operations module for high-level Jot operations.

This module contains the logic behind each user command:
init, add, commit, rm, log, global-log and find.
"""

from jot.operations.controller import Controller, RemoveResult

__all__ = [
    'Controller', 'RemoveResult',
]

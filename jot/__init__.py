"""Jot - a minimal content-addressed version control engine."""

__version__ = '0.1.0'

from jot.core.repository import Repository
from jot.core.objects import JotObject, Blob, Commit
from jot.operations.controller import Controller

__all__ = [
    'Repository',
    'JotObject',
    'Blob',
    'Commit',
    'Controller',
]

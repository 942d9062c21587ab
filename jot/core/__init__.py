"""Core functionality for Jot.

This module contains the core data structures:
- Jot objects (Blob, Commit)
- Object store
- Commit graph
- Index/staging area
- Reference management
- Configuration management
- Hashing utilities

For the user-level operations (add, commit, rm, log...), see jot.operations
"""

from jot.core.objects import JotObject, Blob, Commit
from jot.core.repository import Repository
from jot.core.hash import hash_object
from jot.core.index import Index, StagingEntry
from jot.core.refs import RefManager
from jot.core.graph import CommitGraph
from jot.core.store import ObjectStore
from jot.core.config import Config, get_config

__all__ = [
    'JotObject',
    'Blob',
    'Commit',
    'Repository',
    'Index',
    'StagingEntry',
    'RefManager',
    'CommitGraph',
    'ObjectStore',
    'Config',
    'get_config',
    'hash_object',
]

"""Utilities module for common helper functions.

This module contains:
- Filesystem utilities (atomic replace-style writes)
"""

from jot.utils.fs import atomic_write

__all__ = [
    'atomic_write',
]

"""Content identifiers for Jot."""

import hashlib
from typing import Optional


def hash_object(data: bytes, obj_type: Optional[str] = None) -> str:
    """
    Compute the SHA-1 content identifier of data.

    With obj_type, data is hashed as stored: behind a
    ``<type> <size>\\0`` header.

    Args:
        data: Bytes to hash
        obj_type: Object type name ('blob', 'commit') or None for raw bytes

    Returns:
        40-character hex string
    """
    digest = hashlib.sha1()
    if obj_type is not None:
        digest.update(f"{obj_type} {len(data)}\0".encode())
    digest.update(data)
    return digest.hexdigest()

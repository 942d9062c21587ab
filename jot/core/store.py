"""Content-addressed object store for Jot."""

import logging
import zlib
from pathlib import Path
from typing import Iterator

from jot.core.errors import ObjectNotFound, CorruptObjectError
from jot.utils.fs import atomic_write

logger = logging.getLogger(__name__)


class ObjectStore:
    """
    Append-only key-value store keyed by content identifier.
    
    Objects are stored zlib-compressed in subdirectories named by the
    first 2 characters of the id, with the remaining 38 characters as
    the filename. There is no update or delete: an id, once written,
    keeps its bytes for the lifetime of the repository.
    """
    
    def __init__(self, objects_dir: Path, compression: int = -1):
        """
        Initialize object store.
        
        Args:
            objects_dir: Root directory of the object database
            compression: zlib compression level (-1 for zlib default)
        """
        self.objects_dir = Path(objects_dir)
        self.compression = compression
    
    def object_path(self, obj_hash: str) -> Path:
        """
        Get filesystem path for an object.
        
        Example: ab/cdef0123456789... for hash abcdef0123456789...
        """
        return self.objects_dir / obj_hash[:2] / obj_hash[2:]
    
    def put(self, obj_hash: str, data: bytes) -> bool:
        """
        Store data under obj_hash unless an object with that id exists.
        
        Callers guarantee obj_hash is the id of data, so an existing object
        already holds these exact bytes and the write is skipped.
        
        Args:
            obj_hash: Content identifier
            data: Uncompressed object bytes
            
        Returns:
            bool: True if written, False if the object was already present
        """
        path = self.object_path(obj_hash)
        if path.exists():
            logger.debug("Object %s already stored, skipping", obj_hash[:7])
            return False
        
        atomic_write(path, zlib.compress(data, self.compression))
        logger.debug("Stored object %s (%d bytes)", obj_hash[:7], len(data))
        return True
    
    def get(self, obj_hash: str) -> bytes:
        """
        Read the bytes stored under obj_hash.
        
        Raises:
            ObjectNotFound: If no object exists under obj_hash
            CorruptObjectError: If the stored bytes cannot be decompressed
        """
        path = self.object_path(obj_hash)
        if len(obj_hash) < 3 or not path.is_file():
            raise ObjectNotFound(obj_hash)
        
        try:
            return zlib.decompress(path.read_bytes())
        except zlib.error as e:
            raise CorruptObjectError(f"Object {obj_hash} is corrupt: {e}") from e
    
    def exists(self, obj_hash: str) -> bool:
        """Check if an object exists under obj_hash."""
        return len(obj_hash) > 2 and self.object_path(obj_hash).is_file()
    
    def __iter__(self) -> Iterator[str]:
        """Yield ids of every stored object, sorted."""
        if not self.objects_dir.exists():
            return
        for fan_dir in sorted(self.objects_dir.iterdir()):
            if not fan_dir.is_dir() or len(fan_dir.name) != 2:
                continue
            for obj_file in sorted(fan_dir.iterdir()):
                # Skip temp files from interrupted writes
                if obj_file.name.startswith('.'):
                    continue
                yield fan_dir.name + obj_file.name
    
    def count(self) -> int:
        """Number of stored objects."""
        return sum(1 for _ in self)
    
    def __repr__(self) -> str:
        return f"ObjectStore(path={self.objects_dir})"

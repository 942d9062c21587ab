"""Index (staging area) implementation."""

import hashlib
import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Union

from .errors import CorruptIndexError
from jot.utils.fs import atomic_write

logger = logging.getLogger(__name__)

SIGNATURE = b'JIDX'
VERSION = 1
HEADER_SIZE = 12
CHECKSUM_SIZE = 20

KIND_ADD = 'add'
KIND_REMOVE = 'remove'

_KIND_CODES = {KIND_ADD: 1, KIND_REMOVE: 2}
_CODE_KINDS = {code: kind for kind, code in _KIND_CODES.items()}


@dataclass(frozen=True)
class StagingEntry:
    """
    A pending change to one path.

    Additions carry the hash of the blob to record in the next commit;
    removals carry no hash and mean the path must be absent from it.
    """
    path: str
    kind: str
    blob_hash: Optional[str] = None

    @property
    def is_addition(self) -> bool:
        return self.kind == KIND_ADD

    @property
    def is_removal(self) -> bool:
        return self.kind == KIND_REMOVE

    def __repr__(self) -> str:
        """String representation."""
        if self.is_removal:
            return f"StagingEntry(remove {self.path})"
        return f"StagingEntry(add {self.blob_hash[:7]} {self.path})"


class Index:
    """
    Jot index (staging area) implementation.

    The index maps tracked paths to the changes pending for the next
    commit. It is loaded whole, changed in memory, and saved whole;
    nothing else in a repository is mutable apart from references.
    """

    def __init__(self):
        """Initialize empty index."""
        self.entries: Dict[str, StagingEntry] = {}
        self.version: int = VERSION

    def stage_addition(self, path: str, blob_hash: str) -> None:
        """
        Stage path to be recorded with blob_hash in the next commit.

        Replaces any earlier entry for path, including a removal.
        """
        self.entries[path] = StagingEntry(path, KIND_ADD, blob_hash)

    def stage_removal(self, path: str) -> None:
        """Stage path to be dropped from the next commit."""
        self.entries[path] = StagingEntry(path, KIND_REMOVE)

    def unstage(self, path: str) -> bool:
        """
        Drop any pending change for path.

        Returns:
            bool: True if an entry was removed
        """
        return self.entries.pop(path, None) is not None

    def get_entry(self, path: str) -> Optional[StagingEntry]:
        """Get entry by path."""
        return self.entries.get(path)

    def additions(self) -> List[StagingEntry]:
        """Staged additions sorted by path."""
        return [self.entries[p] for p in sorted(self.entries) if self.entries[p].is_addition]

    def removals(self) -> List[StagingEntry]:
        """Staged removals sorted by path."""
        return [self.entries[p] for p in sorted(self.entries) if self.entries[p].is_removal]

    def is_empty(self) -> bool:
        return not self.entries

    def clear(self) -> None:
        """Clear all entries from index."""
        self.entries.clear()

    def serialize(self) -> bytes:
        """
        Encode index in Jot binary format.

        Format:
        - Header: 'JIDX' + version (4 bytes) + entry count (4 bytes)
        - Entries: sorted by path, each kind (1 byte) + blob hash (20 bytes)
          + NUL-terminated path, padded to 8-byte alignment
        - Checksum: SHA-1 of everything above
        """
        content = bytearray()

        content.extend(SIGNATURE)
        content.extend(struct.pack('>I', self.version))
        content.extend(struct.pack('>I', len(self.entries)))

        for path in sorted(self.entries.keys()):
            entry = self.entries[path]
            hash_bytes = bytes.fromhex(entry.blob_hash) if entry.blob_hash else b'\x00' * 20

            entry_data = struct.pack('>B20s', _KIND_CODES[entry.kind], hash_bytes)
            path_bytes = entry.path.encode()

            content.extend(entry_data)
            content.extend(path_bytes)
            content.extend(b'\x00')

            entry_len = len(entry_data) + len(path_bytes) + 1
            padlen = (8 - (entry_len % 8)) % 8
            content.extend(b'\x00' * padlen)

        content.extend(hashlib.sha1(content).digest())
        return bytes(content)

    @classmethod
    def deserialize(cls, data: bytes) -> 'Index':
        """
        Decode index from Jot binary format.

        Raises:
            CorruptIndexError: If the data fails any structural check
        """
        if len(data) < HEADER_SIZE + CHECKSUM_SIZE:
            raise CorruptIndexError("Index file is truncated")

        content = data[:-CHECKSUM_SIZE]
        checksum = data[-CHECKSUM_SIZE:]
        if hashlib.sha1(content).digest() != checksum:
            raise CorruptIndexError("Index checksum mismatch")

        signature = content[0:4]
        if signature != SIGNATURE:
            raise CorruptIndexError(f"Invalid index signature: {signature!r}")

        index = cls()
        index.version = struct.unpack('>I', content[4:8])[0]
        if index.version != VERSION:
            raise CorruptIndexError(f"Unsupported index version: {index.version}")

        entry_count = struct.unpack('>I', content[8:12])[0]
        offset = HEADER_SIZE

        try:
            for _ in range(entry_count):
                code, hash_bytes = struct.unpack('>B20s', content[offset:offset + 21])
                offset += 21

                path_end = content.index(b'\x00', offset)
                path = content[offset:path_end].decode()
                offset = path_end + 1

                entry_len = 21 + len(path.encode()) + 1
                offset += (8 - (entry_len % 8)) % 8

                kind = _CODE_KINDS[code]
                if kind == KIND_ADD:
                    index.stage_addition(path, hash_bytes.hex())
                else:
                    index.stage_removal(path)
        except (struct.error, ValueError, KeyError) as e:
            raise CorruptIndexError(f"Malformed index entry: {e}") from e

        return index

    @classmethod
    def load(cls, index_path: Union[str, Path]) -> 'Index':
        """
        Read index from disk.

        A missing file means nothing is staged.

        Args:
            index_path: Path to index file
        """
        index_path = Path(index_path)
        if not index_path.exists():
            return cls()

        index = cls.deserialize(index_path.read_bytes())
        logger.debug("Loaded index with %d entries", len(index))
        return index

    def save(self, index_path: Union[str, Path]) -> None:
        """
        Write index to disk, replacing the previous file.

        Args:
            index_path: Path to index file
        """
        atomic_write(index_path, self.serialize())
        logger.debug("Saved index with %d entries", len(self))

    def __len__(self) -> int:
        """Number of entries in index."""
        return len(self.entries)

    def __contains__(self, path: str) -> bool:
        return path in self.entries

    def __repr__(self) -> str:
        """String representation."""
        return f"Index(entries={len(self.entries)})"

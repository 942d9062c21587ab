"""Jot objects: blobs and commits."""

import time
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

from .errors import EmptyMessage, CorruptObjectError
from .hash import hash_object

ROOT_MESSAGE = 'initial commit'
ROOT_TIMESTAMP = 0
ROOT_TIMEZONE = '+0000'


class JotObject(ABC):
    """Base class for all Jot objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to bytes.

        Returns:
            bytes: Serialized object data
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object from bytes.

        Args:
            data: Serialized object data
        """
        pass

    @property
    def type(self) -> str:
        """
        Return object type name.

        Returns:
            str: Object type (blob, commit)
        """
        return self.__class__.__name__.lower()

    def encode(self) -> bytes:
        """
        Encode object for storage.

        Format: <type> <size>\\0<content>
        """
        data = self.serialize()
        header = f"{self.type} {len(data)}\0".encode()
        return header + data

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        The hash covers the header as well as the content, so a blob and a
        commit with identical payloads never share an id.

        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            self._hash = hash_object(self.serialize(), self.type)
        return self._hash

    @property
    def hash(self) -> str:
        """
        Get object hash.

        Returns:
            str: 40-character SHA-1 hash
        """
        return self.compute_hash()


class Blob(JotObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    @classmethod
    def from_file(cls, filepath: str) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        """String representation of blob."""
        size = len(self.data)
        return f"Blob(hash={self.hash[:7]}, size={size})"


def local_timezone(timestamp: int) -> str:
    """Return the local UTC offset at timestamp as +HHMM."""
    return time.strftime('%z', time.localtime(timestamp)) or '+0000'


class Commit(JotObject):
    """
    Represents an immutable snapshot of the tracked files.

    A commit captures:
    - Parent commit id (None for the root)
    - Timestamp and timezone
    - Full mapping of tracked path to blob hash
    - Commit message

    The mapping is a complete snapshot, not a delta against the parent,
    so reading what a commit tracks never requires walking history.
    """

    def __init__(self):
        """Initialize empty commit."""
        super().__init__()
        self.parent: Optional[str] = None
        self.timestamp: int = 0
        self.timezone: str = '+0000'
        self.tracked: Dict[str, str] = {}
        self.message: str = ''

    def serialize(self) -> bytes:
        """
        Serialize commit to Jot format.

        Format:
        parent <parent-hash>      (omitted for the root commit)
        date <timestamp> <timezone>
        file <blob-hash> <path>   (zero or more, sorted by path)

        <commit message>

        Returns:
            bytes: Serialized commit data
        """
        lines = []

        if self.parent:
            lines.append(f'parent {self.parent}')

        lines.append(f'date {self.timestamp} {self.timezone}')

        for path in sorted(self.tracked):
            lines.append(f'file {self.tracked[path]} {path}')

        lines.append('')
        lines.append(self.message)

        return '\n'.join(lines).encode()

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize commit from Jot format.

        Args:
            data: Serialized commit data

        Raises:
            CorruptObjectError: If data is not a well-formed commit
        """
        try:
            content = data.decode()
        except UnicodeDecodeError as e:
            raise CorruptObjectError(f"Commit is not valid UTF-8: {e}") from e

        lines = content.split('\n')
        self.parent = None
        self.tracked = {}
        has_date = False

        message_start = None
        for i, line in enumerate(lines):
            if not line:
                message_start = i + 1
                break

            if line.startswith('parent '):
                self.parent = line[7:]

            elif line.startswith('date '):
                parts = line[5:].split(' ')
                if len(parts) != 2 or not parts[0].lstrip('-').isdigit():
                    raise CorruptObjectError(f"Invalid commit date: {line}")
                self.timestamp = int(parts[0])
                self.timezone = parts[1]
                has_date = True

            elif line.startswith('file '):
                parts = line[5:].split(' ', 1)
                if len(parts) != 2 or len(parts[0]) != 40:
                    raise CorruptObjectError(f"Invalid commit file entry: {line}")
                self.tracked[parts[1]] = parts[0]

            else:
                raise CorruptObjectError(f"Unknown commit header: {line}")

        if message_start is None or not has_date:
            raise CorruptObjectError("Commit is missing its header or message")

        self.message = '\n'.join(lines[message_start:])
        self._hash = None

    @classmethod
    def root(cls) -> 'Commit':
        """
        Create the root commit.

        Every field is fixed, so the root commit has the same hash in
        every repository.
        """
        commit = cls()
        commit.message = ROOT_MESSAGE
        commit.timestamp = ROOT_TIMESTAMP
        commit.timezone = ROOT_TIMEZONE
        return commit

    @classmethod
    def create(
        cls,
        parent: 'Commit',
        message: str,
        staged: Mapping,
        timestamp: Optional[int] = None,
        timezone: Optional[str] = None
    ) -> 'Commit':
        """
        Create a child commit of parent with staged changes applied.

        The child starts from a copy of the parent's tracked files; staged
        additions insert or overwrite a path, staged removals delete it.

        Args:
            parent: Parent commit
            message: Commit message
            staged: Mapping of path to StagingEntry
            timestamp: Unix timestamp (defaults to current time)
            timezone: Timezone offset (defaults to the local offset)

        Returns:
            Commit: New commit object

        Raises:
            EmptyMessage: If message is empty
        """
        if not message:
            raise EmptyMessage()

        tracked = dict(parent.tracked)
        for path, entry in staged.items():
            if entry.is_removal:
                tracked.pop(path, None)
            else:
                tracked[path] = entry.blob_hash

        if timestamp is None:
            timestamp = int(time.time())

        commit = cls()
        commit.parent = parent.hash
        commit.tracked = tracked
        commit.message = message
        commit.timestamp = timestamp
        commit.timezone = timezone or local_timezone(timestamp)

        return commit

    def __repr__(self) -> str:
        """String representation."""
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"

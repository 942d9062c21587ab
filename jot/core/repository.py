"""Repository management for Jot."""

import logging
from pathlib import Path
from typing import Optional

from .errors import RepositoryExists, CorruptObjectError, ConfigError
from .hash import hash_object
from .objects import JotObject, Blob, Commit
from .store import ObjectStore

logger = logging.getLogger(__name__)

OBJECT_TYPES = {
    'blob': Blob,
    'commit': Commit,
}


class Repository:
    """
    Represents a Jot repository.

    A repository manages the .jot directory structure and provides
    methods for reading and writing typed objects.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.jot_dir = self.work_tree / '.jot'
        self.objects_dir = self.jot_dir / 'objects'
        self.refs_dir = self.jot_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.jot_dir / 'HEAD'
        self.index_file = self.jot_dir / 'index'
        self.config_file = self.jot_dir / 'config'

        # Lazily constructed collaborators
        self._ref_manager = None
        self._commit_graph = None
        self._object_store = None
        self._config = None

    @property
    def config(self):
        """Get Config instance."""
        if self._config is None:
            from .config import get_config
            self._config = get_config(self)
        return self._config

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def graph(self):
        """Get CommitGraph instance."""
        if self._commit_graph is None:
            from .graph import CommitGraph
            self._commit_graph = CommitGraph(self)
        return self._commit_graph

    @property
    def store(self) -> ObjectStore:
        """Get ObjectStore instance."""
        if self._object_store is None:
            self._object_store = ObjectStore(self.objects_dir, self._compression_level())
        return self._object_store

    def _compression_level(self) -> int:
        """
        Read core.compression.

        Raises:
            ConfigError: If the value is not an integer zlib level (-1 to 9)
        """
        try:
            level = self.config.get_int('core', 'compression', -1)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        if not -1 <= level <= 9:
            raise ConfigError(f"Config core.compression must be between -1 and 9, got {level}")
        return level

    def init(self, default_branch: Optional[str] = None) -> Commit:
        """
        Initialize a new repository.

        Creates the .jot directory structure:
        .jot/
        ├── objects/       # Object database
        ├── refs/
        │   └── heads/     # Branch references
        ├── HEAD           # Current branch
        └── config         # Repository configuration

        then stores the root commit and points the default branch at it.

        Returns:
            Commit: The root commit

        Raises:
            RepositoryExists: If repository already exists
        """
        if self.jot_dir.exists():
            raise RepositoryExists(self.jot_dir)

        # Bad config must fail before .jot exists
        self._compression_level()

        self.jot_dir.mkdir()
        self.objects_dir.mkdir()
        self.refs_dir.mkdir()
        self.heads_dir.mkdir()

        self.config_file.write_text('[core]\n\trepositoryformatversion = 0\n')
        self._config = None

        branch = default_branch or self.config.get('init', 'defaultBranch', 'main')

        root = Commit.root()
        self.write_object(root)
        self.refs.write_ref(f'refs/heads/{branch}', root.hash)
        self.refs.set_head_branch(branch)

        logger.debug("Initialized repository at %s on branch %s", self.jot_dir, branch)
        return root

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a .jot directory
        or reaches the filesystem root.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / '.jot').is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    def object_path(self, obj_hash: str) -> Path:
        """Get filesystem path for an object."""
        return self.store.object_path(obj_hash)

    def write_object(self, obj: JotObject) -> str:
        """
        Write object to repository.

        Args:
            obj: Jot object to write

        Returns:
            str: SHA-1 hash of the object
        """
        obj_hash = obj.hash
        self.store.put(obj_hash, obj.encode())
        return obj_hash

    def read_object(self, obj_hash: str) -> JotObject:
        """
        Read object from repository.

        Args:
            obj_hash: 40-character SHA-1 hash

        Returns:
            JotObject: Deserialized object (Blob or Commit)

        Raises:
            ObjectNotFound: If object not found
            CorruptObjectError: If the object fails header, size or hash checks
        """
        content = self.store.get(obj_hash)

        if hash_object(content) != obj_hash:
            raise CorruptObjectError(f"Object {obj_hash} does not match its hash")

        try:
            null_idx = content.index(b'\0')
            header = content[:null_idx].decode()
            obj_type, size_str = header.split(' ', 1)
            size = int(size_str)
        except (ValueError, UnicodeDecodeError):
            raise CorruptObjectError(f"Invalid header for object {obj_hash}")

        data = content[null_idx + 1:]
        if len(data) != size:
            raise CorruptObjectError(f"Object size mismatch: expected {size}, got {len(data)}")

        if obj_type not in OBJECT_TYPES:
            raise CorruptObjectError(f"Unknown object type: {obj_type}")

        obj = OBJECT_TYPES[obj_type]()
        obj.deserialize(data)
        return obj

    def object_exists(self, obj_hash: str) -> bool:
        """Check if object exists in repository."""
        return self.store.exists(obj_hash)

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self.work_tree})"

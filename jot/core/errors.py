"""Exception hierarchy for Jot.

UserError subclasses are expected conditions that the CLI reports and
moves on from. Everything else under JotError means the repository is
in a state the engine cannot work with.
"""


class JotError(Exception):
    """Base class for all Jot errors."""


class UserError(JotError):
    """An expected, user-facing condition. State is left untouched."""


class RepositoryExists(UserError):
    def __init__(self, path):
        super().__init__(f"A jot repository already exists at {path}")
        self.path = path


class NotARepository(UserError):
    def __init__(self, path):
        super().__init__(f"Not a jot repository: {path}")
        self.path = path


class FileNotFound(UserError):
    def __init__(self, path):
        super().__init__(f"File does not exist: {path}")
        self.path = path


class OutsideRepository(UserError):
    def __init__(self, path):
        super().__init__(f"Path is outside the repository: {path}")
        self.path = path


class InvalidPath(UserError):
    def __init__(self, path):
        super().__init__(f"Cannot track a path containing a line break: {str(path)!r}")
        self.path = path


class NothingToCommit(UserError):
    def __init__(self):
        super().__init__("No changes added to the commit")


class EmptyMessage(UserError):
    def __init__(self):
        super().__init__("Please enter a commit message")


class NotTracked(UserError):
    def __init__(self, path):
        super().__init__(f"No reason to remove the file: {path}")
        self.path = path


class ObjectNotFound(JotError):
    """No object (or no commit) exists under the requested id."""

    def __init__(self, obj_hash: str, reason: str = 'not found'):
        super().__init__(f"Object {obj_hash} {reason}")
        self.hash = obj_hash


class RefNotFound(JotError):
    def __init__(self, ref_name: str):
        super().__init__(f"Reference {ref_name} not found")
        self.ref_name = ref_name


class CorruptObjectError(JotError):
    """Stored object bytes failed decompression, header or hash checks."""


class CorruptIndexError(JotError):
    """The staging area file could not be parsed."""


class ConfigError(JotError):
    """A configuration value the engine cannot use."""

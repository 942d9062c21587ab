"""Commit graph: building, resolving and walking commits."""

import logging
from typing import Iterator, Mapping, Optional

from jot.core.errors import ObjectNotFound, CorruptObjectError
from jot.core.objects import Commit

logger = logging.getLogger(__name__)


class CommitGraph:
    """
    The immutable history of a repository.

    Commits link to their parent by hash only. A parent is looked up in
    the object store when a walk reaches it, so no commit holds a live
    reference to another.
    """

    def __init__(self, repo):
        self.repo = repo

    def create(
        self,
        parent: Commit,
        message: str,
        staged: Mapping,
        timestamp: Optional[int] = None
    ) -> Commit:
        """
        Build a child of parent from staged changes and persist it.

        Raises:
            EmptyMessage: If message is empty
        """
        commit = Commit.create(parent, message, staged, timestamp=timestamp)
        self.repo.write_object(commit)
        logger.debug("Created commit %s with parent %s", commit.hash[:7], parent.hash[:7])
        return commit

    def resolve(self, commit_hash: str) -> Commit:
        """
        Load a commit by hash.

        Raises:
            ObjectNotFound: If nothing is stored under commit_hash, or what
                is stored there is not a valid commit
        """
        try:
            obj = self.repo.read_object(commit_hash)
        except CorruptObjectError as e:
            raise ObjectNotFound(commit_hash, f"is not a valid commit: {e}") from e

        if not isinstance(obj, Commit):
            raise ObjectNotFound(commit_hash, f"is a {obj.type}, not a commit")
        return obj

    def ancestors(self, commit: Commit) -> Iterator[Commit]:
        """
        Walk parent links from commit back to the root, inclusive.

        Parents are resolved lazily, one per step.
        """
        current = commit
        while True:
            yield current
            if current.parent is None:
                return
            current = self.resolve(current.parent)

    def history(self, commit_hash: str) -> Iterator[Commit]:
        """Ancestors of the commit stored under commit_hash."""
        return self.ancestors(self.resolve(commit_hash))

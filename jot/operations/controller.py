"""Repository controller: the operations a user runs against a repository."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from jot.core.errors import (
    FileNotFound, OutsideRepository, InvalidPath, NothingToCommit, EmptyMessage,
    NotTracked,
)
from jot.core.index import Index, StagingEntry
from jot.core.objects import Blob, Commit
from jot.core.repository import Repository

logger = logging.getLogger(__name__)


@dataclass
class RemoveResult:
    """What rm did to a path."""
    path: str
    unstaged: bool = False          # A pending change was dropped
    staged_removal: bool = False    # The path will be absent from the next commit
    deleted_file: bool = False      # The working copy was deleted


class Controller:
    """
    Runs init, add, commit, rm, log, global-log and find on a repository.

    The staging area is loaded at the start of each operation that needs
    it and saved before the operation returns. Expected failures raise a
    UserError before anything is written.
    """

    def __init__(self, repo: Repository):
        self.repo = repo

    @classmethod
    def at(cls, path: Union[str, Path] = '.') -> 'Controller':
        """Controller for the repository rooted at path."""
        return cls(Repository(str(path)))

    def load_index(self) -> Index:
        return Index.load(self.repo.index_file)

    def head_commit(self) -> Commit:
        """The commit HEAD's branch points at."""
        return self.repo.graph.resolve(self.repo.refs.resolve_head())

    def relative_path(self, path: Union[str, Path]) -> str:
        """
        Normalize path to a repository-relative POSIX path.

        Relative paths are taken relative to the work tree. Only the parent
        directory is resolved, so a symlink names itself, not its target.

        Raises:
            OutsideRepository: If path is outside the work tree or inside .jot
        """
        full_path = Path(path)
        if not full_path.is_absolute():
            full_path = self.repo.work_tree / full_path
        full_path = Path(os.path.normpath(full_path))
        full_path = full_path.parent.resolve() / full_path.name

        try:
            rel_path = full_path.relative_to(self.repo.work_tree)
        except ValueError:
            raise OutsideRepository(path)

        if not rel_path.parts or rel_path.parts[0] == '.jot':
            raise OutsideRepository(path)
        return rel_path.as_posix()

    def init(self, default_branch: Optional[str] = None) -> Commit:
        """
        Create the repository and its root commit.

        Raises:
            RepositoryExists: If a repository already exists here
        """
        root = self.repo.init(default_branch)
        logger.info("Initialized empty repository in %s", self.repo.jot_dir)
        return root

    def add(self, path: Union[str, Path]) -> Optional[str]:
        """
        Stage the current contents of path.

        If the file already matches the current commit, nothing is written
        and any pending entry for the path is left as it is.

        Returns:
            Blob hash that was staged, or None if the file already matches
            the current commit and nothing was staged

        Raises:
            FileNotFound: If path is not an existing regular file
            OutsideRepository: If path is outside the work tree
            InvalidPath: If path contains a line break
        """
        rel_path = self.relative_path(path)
        if '\n' in rel_path or '\r' in rel_path:
            raise InvalidPath(path)

        file_path = self.repo.work_tree / rel_path
        if not file_path.is_file():
            raise FileNotFound(path)

        blob = Blob.from_file(str(file_path))
        if self.head_commit().tracked.get(rel_path) == blob.hash:
            logger.debug("%s unchanged since last commit", rel_path)
            return None

        index = self.load_index()
        self.repo.write_object(blob)
        index.stage_addition(rel_path, blob.hash)
        index.save(self.repo.index_file)
        logger.debug("Staged %s as %s", rel_path, blob.hash[:7])
        return blob.hash

    def commit(self, message: str, timestamp: Optional[int] = None) -> Commit:
        """
        Record the staged changes as a child of the current commit.

        Raises:
            NothingToCommit: If nothing is staged
            EmptyMessage: If message is empty
        """
        index = self.load_index()
        if index.is_empty():
            raise NothingToCommit()
        if not message:
            raise EmptyMessage()

        parent = self.head_commit()
        commit = self.repo.graph.create(parent, message, index.entries, timestamp=timestamp)
        self.repo.refs.update_head(commit.hash)

        index.clear()
        index.save(self.repo.index_file)
        logger.info("Committed %s (%d files tracked)", commit.hash[:7], len(commit.tracked))
        return commit

    def rm(self, path: Union[str, Path]) -> RemoveResult:
        """
        Unstage path and, if the current commit tracks it, stage its removal
        and delete the working copy.

        Raises:
            NotTracked: If path is neither staged nor tracked
        """
        rel_path = self.relative_path(path)
        index = self.load_index()
        tracked = rel_path in self.head_commit().tracked

        if rel_path not in index and not tracked:
            raise NotTracked(path)

        result = RemoveResult(path=rel_path)
        result.unstaged = index.unstage(rel_path)

        if tracked:
            file_path = self.repo.work_tree / rel_path
            if file_path.is_file():
                file_path.unlink()
                result.deleted_file = True
            index.stage_removal(rel_path)
            result.staged_removal = True

        index.save(self.repo.index_file)
        logger.debug("Removed %s: %s", rel_path, result)
        return result

    def log(self) -> List[Commit]:
        """History of the current commit, newest first."""
        return list(self.repo.graph.history(self.repo.refs.resolve_head()))

    def global_log(self, dedupe: bool = True) -> List[Tuple[str, List[Commit]]]:
        """
        History of every branch, in branch-name order.

        Args:
            dedupe: Skip commits already listed under an earlier branch.
                With dedupe=False ancestors shared by several branches are
                listed once per branch.

        Returns:
            List of (branch_name, commits) pairs
        """
        seen = set()
        result = []

        for branch, head in self.repo.refs.list_branches():
            commits = []
            for commit in self.repo.graph.history(head):
                if dedupe and commit.hash in seen:
                    # Everything older was listed along with this commit
                    break
                seen.add(commit.hash)
                commits.append(commit)
            result.append((branch, commits))

        return result

    def find(self, message: str) -> List[str]:
        """
        Hashes of every commit on any branch whose message is exactly message.

        Each hash is reported once, in the order first reached.
        """
        found = []
        for _, commits in self.global_log(dedupe=True):
            found.extend(c.hash for c in commits if c.message == message)
        return found

    def tracked_files(self) -> Dict[str, str]:
        """Path to blob hash mapping of the current commit."""
        return dict(self.head_commit().tracked)

    def staged_entries(self) -> List[StagingEntry]:
        """Pending changes sorted by path."""
        index = self.load_index()
        return [index.entries[p] for p in sorted(index.entries)]

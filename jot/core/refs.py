"""Reference management for Jot."""

import logging
from typing import List, Tuple

from jot.core.errors import RefNotFound
from jot.utils.fs import atomic_write

logger = logging.getLogger(__name__)

HEADS_PREFIX = 'refs/heads/'


class RefManager:
    """
    Manages Jot references (branch heads and HEAD).

    HEAD is a symbolic reference naming the active branch
    (``ref: refs/heads/main``); each branch file holds a commit hash.
    Committing advances whichever branch HEAD names.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.jot_dir = repo.jot_dir
        self.refs_dir = self.jot_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.jot_dir / 'HEAD'

    def _ref_path(self, ref_name: str):
        if ref_name.startswith('refs/'):
            return self.jot_dir / ref_name
        return self.heads_dir / ref_name

    def read_ref(self, ref_name: str) -> str:
        """
        Read a reference and return its commit hash.

        Args:
            ref_name: Reference name (e.g., 'refs/heads/main', 'HEAD', 'main')

        Returns:
            Commit hash

        Raises:
            RefNotFound: If the reference does not exist
        """
        if ref_name == 'HEAD':
            return self.resolve_head()

        ref_path = self._ref_path(ref_name)
        if not ref_path.is_file():
            raise RefNotFound(ref_name)

        content = ref_path.read_text().strip()
        if content.startswith('ref: '):
            return self.read_ref(content[5:])
        return content

    def write_ref(self, ref_name: str, commit_hash: str) -> None:
        """
        Point a reference at a commit, creating it if needed.

        Args:
            ref_name: Reference name (e.g., 'refs/heads/main' or 'main')
            commit_hash: Commit hash to point to
        """
        atomic_write(self._ref_path(ref_name), (commit_hash + '\n').encode())
        logger.debug("Updated %s to %s", ref_name, commit_hash[:7])

    def set_head_branch(self, branch_name: str) -> None:
        """Make HEAD a symbolic reference to branch_name."""
        atomic_write(self.head_file, f'ref: {HEADS_PREFIX}{branch_name}\n'.encode())

    def get_head_target(self) -> str:
        """
        Get the reference HEAD names.

        Raises:
            RefNotFound: If HEAD is missing or not symbolic
        """
        if not self.head_file.is_file():
            raise RefNotFound('HEAD')

        content = self.head_file.read_text().strip()
        if not content.startswith('ref: '):
            raise RefNotFound('HEAD')
        return content[5:]

    def get_current_branch(self) -> str:
        """Get the current branch name."""
        target = self.get_head_target()
        if target.startswith(HEADS_PREFIX):
            return target[len(HEADS_PREFIX):]
        return target

    def resolve_head(self) -> str:
        """
        Resolve HEAD to a commit hash.

        Raises:
            RefNotFound: If HEAD or the branch it names does not exist
        """
        return self.read_ref(self.get_head_target())

    def update_head(self, commit_hash: str) -> None:
        """Advance the branch HEAD names to commit_hash."""
        self.write_ref(self.get_head_target(), commit_hash)

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_hash) tuples sorted by name
        """
        if not self.heads_dir.exists():
            return []

        branches = []
        for branch_file in self.heads_dir.rglob('*'):
            if branch_file.is_file() and not branch_file.name.startswith('.'):
                branch_name = branch_file.relative_to(self.heads_dir).as_posix()
                commit_hash = branch_file.read_text().strip()
                branches.append((branch_name, commit_hash))

        return sorted(branches, key=lambda x: x[0])

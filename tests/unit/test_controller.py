"""Repository controller tests."""

import pytest
from jot.core.errors import (
    RepositoryExists, FileNotFound, OutsideRepository, InvalidPath,
    NothingToCommit, EmptyMessage, NotTracked,
)
from jot.core.objects import Blob, Commit


def _snapshot(repo):
    """Everything a failed operation must leave untouched."""
    index = repo.index_file.read_bytes() if repo.index_file.exists() else None
    return list(repo.store), repo.refs.list_branches(), index


class TestInit:

    def test_init_creates_root_commit(self, controller):
        """Test a fresh repository holds only the root commit."""
        history = controller.log()
        assert len(history) == 1
        assert history[0].hash == Commit.root().hash
        assert history[0].message == 'initial commit'

    def test_init_twice_fails(self, controller):
        """Test re-initializing is refused without touching state."""
        before = _snapshot(controller.repo)
        with pytest.raises(RepositoryExists):
            controller.init()
        assert _snapshot(controller.repo) == before


class TestAdd:

    def test_add_stages_and_stores_blob(self, controller, make_file):
        """Test add writes the blob and stages the path."""
        make_file('a.txt', 'hello')
        blob_hash = controller.add('a.txt')

        assert blob_hash == Blob(b'hello').hash
        assert controller.repo.object_exists(blob_hash)
        entries = controller.staged_entries()
        assert [(e.path, e.blob_hash) for e in entries] == [('a.txt', blob_hash)]

    def test_add_missing_file(self, controller):
        """Test adding a file that does not exist."""
        before = _snapshot(controller.repo)
        with pytest.raises(FileNotFound):
            controller.add('missing.txt')
        assert _snapshot(controller.repo) == before

    def test_add_directory_is_not_a_file(self, controller):
        """Test directories are rejected."""
        (controller.repo.work_tree / 'dir').mkdir()
        with pytest.raises(FileNotFound):
            controller.add('dir')

    def test_add_outside_repository(self, controller, tmp_path):
        """Test files outside the work tree are rejected."""
        outside = tmp_path / 'outside.txt'
        outside.write_text('x')
        with pytest.raises(OutsideRepository):
            controller.add(outside)

    def test_add_inside_jot_dir(self, controller):
        """Test repository internals cannot be staged."""
        with pytest.raises(OutsideRepository):
            controller.add('.jot/HEAD')

    def test_add_nested_path_is_posix(self, controller, make_file):
        """Test nested paths are stored relative to the work tree."""
        path = make_file('src/pkg/mod.py', 'x = 1\n')
        controller.add(path)
        assert [e.path for e in controller.staged_entries()] == ['src/pkg/mod.py']

    def test_add_unchanged_is_noop(self, controller, make_file):
        """Test re-adding committed content stages and stores nothing."""
        make_file('a.txt', 'hello')
        controller.add('a.txt')
        controller.commit('first')

        before = _snapshot(controller.repo)
        assert controller.add('a.txt') is None
        assert _snapshot(controller.repo) == before
        assert controller.staged_entries() == []

    def test_add_twice_one_entry_one_blob(self, controller, make_file):
        """Test adding the same content twice yields one entry and one blob."""
        make_file('a.txt', 'hello')
        objects_before = controller.repo.store.count()

        first = controller.add('a.txt')
        second = controller.add('a.txt')

        assert first == second
        assert len(controller.staged_entries()) == 1
        assert controller.repo.store.count() == objects_before + 1

    def test_add_modified_file_restages(self, controller, make_file):
        """Test adding changed content replaces the staged hash."""
        make_file('a.txt', 'v1')
        controller.add('a.txt')
        make_file('a.txt', 'v2')
        controller.add('a.txt')

        entries = controller.staged_entries()
        assert len(entries) == 1
        assert entries[0].blob_hash == Blob(b'v2').hash

    def test_add_unchanged_keeps_pending_removal(self, controller, make_file):
        """Test re-adding a removed file with its committed content leaves the removal staged."""
        make_file('a.txt', 'hello')
        controller.add('a.txt')
        controller.commit('first')
        controller.rm('a.txt')

        make_file('a.txt', 'hello')
        before = _snapshot(controller.repo)
        assert controller.add('a.txt') is None
        assert _snapshot(controller.repo) == before
        entries = controller.staged_entries()
        assert len(entries) == 1 and entries[0].is_removal

    def test_add_reverted_file_keeps_staged_change(self, controller, make_file):
        """Test reverting to committed content and re-adding leaves the staging area alone."""
        make_file('a.txt', 'v1')
        controller.add('a.txt')
        controller.commit('first')
        make_file('a.txt', 'v2')
        controller.add('a.txt')

        make_file('a.txt', 'v1')
        before = _snapshot(controller.repo)
        assert controller.add('a.txt') is None
        assert _snapshot(controller.repo) == before
        assert [e.blob_hash for e in controller.staged_entries()] == [Blob(b'v2').hash]

    def test_add_symlink_stages_link_path(self, controller, make_file):
        """Test a symlink is staged under its own name, not its target's."""
        make_file('a.txt', 'hello')
        (controller.repo.work_tree / 'link.txt').symlink_to('a.txt')

        controller.add('link.txt')
        assert [e.path for e in controller.staged_entries()] == ['link.txt']

    def test_add_path_with_newline(self, controller, make_file):
        """Test a file name containing a line break is refused before anything is written."""
        make_file('a\nb.txt', 'x')
        before = _snapshot(controller.repo)
        with pytest.raises(InvalidPath):
            controller.add('a\nb.txt')
        assert _snapshot(controller.repo) == before
        assert len(controller.log()) == 1


class TestCommit:

    def test_commit_overlays_additions(self, controller, make_file):
        """Test the child tracks the parent's files plus staged additions."""
        make_file('a.txt', 'hello')
        controller.add('a.txt')
        first = controller.commit('first')

        make_file('b.txt', 'world')
        controller.add('b.txt')
        second = controller.commit('second')

        assert second.parent == first.hash
        assert second.tracked == {
            'a.txt': Blob(b'hello').hash,
            'b.txt': Blob(b'world').hash,
        }
        assert controller.staged_entries() == []
        assert controller.repo.refs.resolve_head() == second.hash

    def test_commit_nothing_staged(self, controller):
        """Test committing with an empty staging area."""
        before = _snapshot(controller.repo)
        with pytest.raises(NothingToCommit):
            controller.commit('message')
        assert _snapshot(controller.repo) == before

    def test_commit_empty_message(self, controller, make_file):
        """Test an empty message leaves refs, objects and index untouched."""
        make_file('a.txt', 'hello')
        controller.add('a.txt')

        before = _snapshot(controller.repo)
        with pytest.raises(EmptyMessage):
            controller.commit('')
        assert _snapshot(controller.repo) == before

    def test_commit_whitespace_message(self, controller, make_file):
        """Test only the empty string counts as an empty message."""
        make_file('a.txt', 'hello')
        controller.add('a.txt')

        commit = controller.commit('   ')
        assert controller.repo.graph.resolve(commit.hash).message == '   '

    def test_commit_checks_staging_before_message(self, controller):
        """Test an empty index is reported even when the message is empty too."""
        with pytest.raises(NothingToCommit):
            controller.commit('')

    def test_commit_is_persisted(self, controller, make_file):
        """Test the commit reads back identically from the store."""
        make_file('a.txt', 'hello')
        controller.add('a.txt')
        commit = controller.commit('first', timestamp=1234)

        stored = controller.repo.graph.resolve(commit.hash)
        assert stored.timestamp == 1234
        assert stored.tracked == commit.tracked
        assert stored.message == 'first'

    def test_commit_survives_new_controller(self, controller, make_file):
        """Test staged state persists across separate invocations."""
        from jot.operations.controller import Controller
        make_file('a.txt', 'hello')
        controller.add('a.txt')

        fresh = Controller.at(controller.repo.work_tree)
        commit = fresh.commit('first')
        assert 'a.txt' in commit.tracked


class TestRm:

    def test_rm_untracked_unstaged(self, controller, make_file):
        """Test rm of an unknown path fails without side effects."""
        make_file('loose.txt', 'x')
        before = _snapshot(controller.repo)
        with pytest.raises(NotTracked):
            controller.rm('loose.txt')
        assert _snapshot(controller.repo) == before
        assert (controller.repo.work_tree / 'loose.txt').exists()

    def test_rm_staged_only(self, controller, make_file):
        """Test rm of a staged, untracked file just unstages it."""
        path = make_file('new.txt', 'x')
        controller.add('new.txt')

        result = controller.rm('new.txt')
        assert result.unstaged
        assert not result.staged_removal
        assert path.exists()
        assert controller.staged_entries() == []

    def test_rm_tracked(self, controller, make_file):
        """Test rm of a tracked file deletes it and drops it from the next commit."""
        path = make_file('a.txt', 'hello')
        make_file('b.txt', 'keep')
        controller.add('a.txt')
        controller.add('b.txt')
        controller.commit('first')

        result = controller.rm('a.txt')
        assert result.staged_removal
        assert result.deleted_file
        assert not path.exists()

        commit = controller.commit('remove a')
        assert commit.tracked == {'b.txt': Blob(b'keep').hash}

    def test_rm_tracked_already_deleted(self, controller, make_file):
        """Test rm of a tracked file missing from disk still stages removal."""
        path = make_file('a.txt', 'hello')
        controller.add('a.txt')
        controller.commit('first')
        path.unlink()

        result = controller.rm('a.txt')
        assert result.staged_removal
        assert not result.deleted_file

    def test_rm_tracked_and_modified(self, controller, make_file):
        """Test rm replaces a staged modification with a removal."""
        make_file('a.txt', 'v1')
        controller.add('a.txt')
        controller.commit('first')
        make_file('a.txt', 'v2')
        controller.add('a.txt')

        result = controller.rm('a.txt')
        assert result.unstaged and result.staged_removal
        entries = controller.staged_entries()
        assert len(entries) == 1 and entries[0].is_removal

    def test_rm_untracked_symlink_spares_target(self, controller, make_file):
        """Test rm of an untracked symlink to a tracked file leaves the target alone."""
        target = make_file('a.txt', 'hello')
        controller.add('a.txt')
        controller.commit('first')
        (controller.repo.work_tree / 'link.txt').symlink_to('a.txt')

        with pytest.raises(NotTracked):
            controller.rm('link.txt')
        assert target.read_text() == 'hello'
        assert controller.staged_entries() == []

    def test_rm_tracked_symlink_deletes_link_only(self, controller, make_file):
        """Test rm of a tracked symlink removes the link, not the file it points to."""
        target = make_file('a.txt', 'hello')
        link = controller.repo.work_tree / 'link.txt'
        link.symlink_to('a.txt')
        controller.add('a.txt')
        controller.add('link.txt')
        controller.commit('first')

        result = controller.rm('link.txt')
        assert result.path == 'link.txt'
        assert result.deleted_file
        assert not link.is_symlink()
        assert target.read_text() == 'hello'
        assert [(e.path, e.is_removal) for e in controller.staged_entries()] == [('link.txt', True)]


class TestHistory:

    def test_log_after_first_commit(self, controller, make_file):
        """Test init, add, commit gives a two-entry log, newest first."""
        make_file('a.txt', 'hello')
        controller.add('a.txt')
        controller.commit('first')

        assert [c.message for c in controller.log()] == ['first', 'initial commit']

    def _branching(self, controller, make_file):
        """main: root <- first <- second; dev: root <- first <- side."""
        make_file('a.txt', '1')
        controller.add('a.txt')
        first = controller.commit('first', timestamp=1)

        make_file('a.txt', '2')
        controller.add('a.txt')
        second = controller.commit('second', timestamp=2)

        side = controller.repo.graph.create(first, 'side', {}, timestamp=3)
        controller.repo.refs.write_ref('refs/heads/dev', side.hash)
        return first, second, side

    def test_global_log_dedupes_shared_history(self, controller, make_file):
        """Test shared ancestors are listed only under the first branch."""
        self._branching(controller, make_file)

        listing = [(b, [c.message for c in commits]) for b, commits in controller.global_log()]
        assert listing == [
            ('dev', ['side', 'first', 'initial commit']),
            ('main', ['second']),
        ]

    def test_global_log_repeat_shared(self, controller, make_file):
        """Test dedupe=False lists shared ancestors once per branch."""
        self._branching(controller, make_file)

        listing = [(b, [c.message for c in commits])
                   for b, commits in controller.global_log(dedupe=False)]
        assert listing == [
            ('dev', ['side', 'first', 'initial commit']),
            ('main', ['second', 'first', 'initial commit']),
        ]

    def test_find_across_branches_once(self, controller, make_file):
        """Test find reports shared commits once."""
        first, _, _ = self._branching(controller, make_file)
        assert controller.find('first') == [first.hash]
        assert controller.find('initial commit') == [Commit.root().hash]

    def test_find_repeated_message(self, controller, make_file):
        """Test every distinct commit with the message is reported."""
        make_file('a.txt', '1')
        controller.add('a.txt')
        one = controller.commit('same', timestamp=1)
        make_file('a.txt', '2')
        controller.add('a.txt')
        two = controller.commit('same', timestamp=2)

        assert controller.find('same') == [two.hash, one.hash]

    def test_find_nothing(self, controller):
        """Test no match is an empty result, not an error."""
        assert controller.find('no such message') == []
        assert controller.find('initial') == []

    def test_tracked_files(self, controller, make_file):
        """Test tracked_files mirrors the head commit."""
        make_file('a.txt', 'hello')
        controller.add('a.txt')
        controller.commit('first')
        tracked = controller.tracked_files()
        tracked['b.txt'] = 'x'
        assert controller.tracked_files() == {'a.txt': Blob(b'hello').hash}

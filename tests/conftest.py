"""Shared pytest fixtures for Jot tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from jot.core.config import Config
from jot.core.objects import Blob
from jot.operations.controller import Controller


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep the user's ~/.jotconfig and JOT_* variables out of tests."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.jotconfig')
    for var in ('JOT_CORE_COMPRESSION', 'JOT_INIT_DEFAULTBRANCH'):
        monkeypatch.delenv(var, raising=False)
    return home / '.jotconfig'


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def controller(temp_dir):
    """Controller for an initialized repository."""
    controller = Controller.at(temp_dir)
    controller.init()
    return controller


@pytest.fixture
def repo(controller):
    """Create an initialized repository."""
    return controller.repo


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")


def write_file(repo, name, content):
    """Write content to a file in the work tree and return its path."""
    path = repo.work_tree / name
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        path.write_text(content)
    else:
        path.write_bytes(content)
    return path


@pytest.fixture
def repo_with_commits(controller):
    """Repository with two commits on top of the root."""
    repo = controller.repo

    write_file(repo, 'file1.txt', 'Hello, World!')
    controller.add('file1.txt')
    controller.commit('First commit', timestamp=1_700_000_000)

    write_file(repo, 'file2.txt', 'Second file')
    controller.add('file2.txt')
    controller.commit('Second commit', timestamp=1_700_000_100)

    return repo


@pytest.fixture
def in_repo(repo, monkeypatch):
    """Run with the repository's work tree as the current directory."""
    monkeypatch.chdir(repo.work_tree)
    return repo


@pytest.fixture
def make_file(repo):
    """Factory writing files into the work tree."""
    def _make(name, content):
        return write_file(repo, name, content)
    return _make

# Shared pytest fixtures for Gitlet tests

import os
import shutil
import tempfile
import zlib

import pytest

from gitlet.commands import add, branch, commit, init
from gitlet.utils import objects, repository


def write_file(repo_root, rel_path, content):
    # Writes a working file (str or bytes), creating parent directories
    full_path = os.path.join(repo_root, *rel_path.split('/'))
    os.makedirs(os.path.dirname(full_path), exist_ok=True)
    if isinstance(content, str):
        content = content.encode()
    with open(full_path, 'wb') as f:
        f.write(content)
    return full_path


def read_file(repo_root, rel_path):
    with open(os.path.join(repo_root, *rel_path.split('/')), 'rb') as f:
        return f.read()


def exists(repo_root, rel_path):
    return os.path.exists(os.path.join(repo_root, *rel_path.split('/')))


def commit_files(repo_root, files, message, timestamp=None):
    # Writes, stages and commits {path: content}; returns the commit hash
    for rel_path, content in files.items():
        write_file(repo_root, rel_path, content)
        add.stage_add(repo_root, rel_path)
    return commit.create_commit(repo_root, message, timestamp)


@pytest.fixture
def temp_dir():
    # Creates a temporary directory that is cleaned up after the test
    # Also saves/restores cwd to prevent issues when tests change directories
    original_dir = os.getcwd()
    tmp = os.path.realpath(tempfile.mkdtemp())
    yield tmp
    os.chdir(original_dir)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def temp_repo(temp_dir):
    # Creates an initialized Gitlet repository in a temporary directory
    original_dir = os.getcwd()
    os.chdir(temp_dir)
    init.init_repository(temp_dir)

    yield temp_dir

    os.chdir(original_dir)


@pytest.fixture
def repo_with_commit(temp_repo):
    # Creates a repo with one committed file on main
    commit_hash = commit_files(temp_repo, {'README.md': '# Test Project\n'}, 'Add readme', timestamp=1000)
    return temp_repo, commit_hash


@pytest.fixture
def repo_with_branches(repo_with_commit):
    # Creates a repo with main and a feature branch at the same commit
    repo_root, first_commit = repo_with_commit
    branch.create_branch(repo_root, 'feature')
    assert repository.get_branch_commit(repo_root, 'feature') == first_commit
    return repo_root, first_commit


# Mock args object for command functions
class MockArgs:
    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)


def corrupt_object(repo_root, sha1):
    # Overwrites a stored object with bytes that no longer hash to its key
    path = objects.object_path(repo_root, sha1)
    os.chmod(path, 0o644)
    with open(path, 'wb') as f:
        f.write(zlib.compress(b'blob 7\0garbage'))

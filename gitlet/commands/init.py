# The command: gitlet init
# What it does: Initializes a new repository by creating the hidden `.gitlet` directory and its internal structure, then records the initial commit
# How it does: It creates the `objects` and `refs/heads` subdirectories and the config file, writes the initial commit ("initial commit", dated at the
# Unix epoch, no parents, no files) and points the default branch and HEAD at it. Every repository therefore starts from the same root commit
# What data structure it uses: Tree (the file system directory structure is a tree). It also lays the foundation for a Hash Table (the object database) and a Directed Acyclic Graph (the commit history)

import os
import sys

from gitlet.utils import config, index, lock, objects, repository
from gitlet.utils.errors import AlreadyInitialized, GitletError
from gitlet.utils.fileio import gitlet_path


def init_repository(path='.', initial_branch=None): # Returns the hash of the initial commit
    repo_root = os.path.abspath(path)
    if os.path.exists(gitlet_path(repo_root)):
        raise AlreadyInitialized()

    branch_name = initial_branch or config.DEFAULT_BRANCH
    repository.validate_branch_name(branch_name)

    os.makedirs(gitlet_path(repo_root, 'objects'))
    os.makedirs(gitlet_path(repo_root, 'refs', 'heads'))
    config.write_config(repo_root, 'core.defaultbranch', branch_name)

    with lock.repo_lock(repo_root):
        root_hash = objects.write_commit(repo_root, objects.initial_commit())
        repository.set_branch_commit(repo_root, branch_name, root_hash)
        repository.set_head_branch(repo_root, branch_name)
        index.clear_index(repo_root)
    return root_hash


def run(args):
    try:
        init_repository(os.getcwd(), getattr(args, 'initial_branch', None))
    except GitletError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    print(f"Initialized empty Gitlet repository in {gitlet_path(os.getcwd())}/")

# The command: gitlet add <file>...
# What it does: Takes a snapshot of files from the working directory and stages them for the next commit by updating the index
# How it does: Under the repository lock it reads the index into a StagingArea, applies the staging rules for each file against the HEAD commit
# (unchanged files are never staged, a pending removal is cancelled) and writes the index back once, so a failing file stages nothing
# What data structure it uses: Hash Table / Dictionary (to manage the index in memory), List (to hold the list of files to add), and performs a Tree Traversal (when expanding `.`)

import os
import sys

from gitlet.utils import index, lock, objects, repository, workdir
from gitlet.utils.errors import GitletError, NotInitialized
from gitlet.utils.fileio import to_repo_path


def stage_files(repo_root, rel_paths): # Returns {path: staged blob hash or None when unchanged from HEAD}
    with lock.repo_lock(repo_root):
        head_files = objects.get_commit_files(repo_root, repository.get_head_commit(repo_root))
        staging = index.read_index(repo_root)
        staged = {}
        for rel_path in rel_paths:
            staged[rel_path] = index.stage_add(repo_root, staging, head_files, rel_path)
        index.write_index(repo_root, staging)
    return staged


def stage_add(repo_root, rel_path):
    return stage_files(repo_root, [rel_path])[rel_path]


def run(args):
    repo_root = repository.find_repo_root()
    if not repo_root:
        print(NotInitialized.message, file=sys.stderr)
        sys.exit(1)

    try:
        staged = stage_files(repo_root, _expand_files(args.files, repo_root))
    except GitletError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    for rel_path, blob_hash in staged.items():
        if blob_hash:
            print(f"Added '{rel_path}' to the index.")


def _expand_files(file_args, repo_root):
    """
    Expands file arguments like '.' into every non-ignored working file.
    """
    if '.' in file_args or './' in file_args:
        return workdir.list_working_files(repo_root)
    return [to_repo_path(repo_root, f) for f in file_args]

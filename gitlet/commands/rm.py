# The command: gitlet rm <file>
# What it does: Stages a tracked file for removal (deleting it from the working directory), or unstages a file that was only staged for addition
# How it does: Reads the index, applies `index.stage_remove` against the HEAD commit's tracked files and writes the index back under the repository lock
# What data structure it uses: Set (the removal section of the index) and Dictionary (the addition section)

import sys

from gitlet.utils import index, lock, objects, repository
from gitlet.utils.errors import GitletError, NotInitialized
from gitlet.utils.fileio import to_repo_path


def stage_remove(repo_root, rel_path): # True when the file was tracked and is now staged for removal
    with lock.repo_lock(repo_root):
        head_files = objects.get_commit_files(repo_root, repository.get_head_commit(repo_root))
        staging = index.read_index(repo_root)
        removed = index.stage_remove(repo_root, staging, head_files, rel_path)
        index.write_index(repo_root, staging)
    return removed


def run(args):
    repo_root = repository.find_repo_root()
    if not repo_root:
        print(NotInitialized.message, file=sys.stderr)
        sys.exit(1)

    try:
        for file_path in args.files:
            stage_remove(repo_root, to_repo_path(repo_root, file_path))
    except GitletError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

# The command: gitlet commit -m "<message>"
# What it does: Creates a permanent, uniquely identified snapshot (a commit object) of the currently staged changes.
# How it does: It starts from the HEAD commit's tracked files, applies the staged additions and removals, and hashes the result together with the
# message, timestamp and parent into a new commit object. Only after the commit is stored and the current branch moved is the index cleared,
# so a failure leaves the previous state untouched
# What data structure it uses: Directed Acyclic Graph (DAG) (as each commit links to its parents, forming the history graph), Hash Table / Dictionary (the tracked files and the underlying object store)

import sys

from gitlet.utils import index, lock, objects, repository
from gitlet.utils.errors import GitletError, NotInitialized


def create_commit(repo_root, message, timestamp=None): # Creates a commit object from the index and updates the current branch
    with lock.repo_lock(repo_root):
        parent_commit = repository.get_head_commit(repo_root)
        parents = [parent_commit] if parent_commit else []
        head_files = objects.get_commit_files(repo_root, parent_commit)
        staging = index.read_index(repo_root)

        new_commit = index.build_commit(head_files, staging, message, parents, timestamp)
        commit_hash = objects.write_commit(repo_root, new_commit)
        repository.update_head(repo_root, commit_hash)
        index.clear_index(repo_root)
    return commit_hash


def run(args):
    repo_root = repository.find_repo_root()
    if not repo_root:
        print(NotInitialized.message, file=sys.stderr)
        sys.exit(1)

    try:
        commit_hash = create_commit(repo_root, args.message)
    except GitletError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    current_branch = repository.get_current_branch(repo_root) or 'detached HEAD'
    print(f"[{current_branch} {commit_hash[:7]}] {args.message.splitlines()[0]}")

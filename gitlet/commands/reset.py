# The command: gitlet reset <commit>
# What it does: Moves the current branch to an arbitrary commit and makes the working directory match it, then clears the index
# How it does: The commit id may be a unique hash prefix. Like a branch checkout, it first refuses if an untracked working file would be overwritten,
# then writes the target's files, deletes the files only the current commit tracks and moves the branch pointer
# What data structure it uses: Dictionary ({path: blob hash} snapshots)

import sys

from gitlet.utils import index, lock, objects, repository, workdir
from gitlet.utils.errors import GitletError, NotInitialized


def reset(repo_root, commit_id): # Returns the full hash the branch now points at
    with lock.repo_lock(repo_root):
        source = objects.ObjectSource.local(repo_root)
        target_hash = source.resolve(commit_id)
        current_files = objects.get_commit_files(repo_root, repository.get_head_commit(repo_root))
        target_files = source.read_commit(target_hash).tracked
        staging = index.read_index(repo_root)

        workdir.check_untracked(repo_root, target_files, current_files, staging.addition)
        workdir.replay_commit(repo_root, source, target_files, current_files)
        repository.update_head(repo_root, target_hash)
        index.clear_index(repo_root)
    return target_hash


def run(args): #Executes the reset command
    repo_root = repository.find_repo_root()
    if not repo_root:
        print(NotInitialized.message, file=sys.stderr)
        sys.exit(1)

    try:
        target_hash = reset(repo_root, args.commit)
    except GitletError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    print(f"HEAD is now at {target_hash[:7]}")

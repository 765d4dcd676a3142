# The command: gitlet checkout <branch-name> | gitlet checkout [<commit>] --file <file>
# What it does: Switches branches (rewriting the working directory to the target branch's snapshot) OR restores one file from HEAD or from a given commit
# How it does:
#   - Branch: validates the branch, refuses if an untracked working file would be overwritten, then writes every file the target commit tracks,
#     deletes the files only the current commit tracks, points HEAD at the branch and clears the index.
#   - File: resolves the commit (unique hash prefixes are accepted), reads the file's blob and overwrites the working copy. The index is not touched.
# What data structure it uses: Dictionary ({path: blob hash} snapshots), Hash Table (object store lookup)

import sys

from gitlet.utils import index, lock, objects, repository, workdir
from gitlet.utils.errors import AlreadyOnBranch, FileNotInCommit, GitletError, NoSuchBranch, NotInitialized
from gitlet.utils.fileio import to_repo_path


def switch_branch(repo_root, branch_name):
    with lock.repo_lock(repo_root):
        if not repository.branch_exists(repo_root, branch_name):
            raise NoSuchBranch()
        if branch_name == repository.get_current_branch(repo_root):
            raise AlreadyOnBranch()

        source = objects.ObjectSource.local(repo_root)
        current_files = objects.get_commit_files(repo_root, repository.get_head_commit(repo_root))
        target_files = source.read_commit(repository.get_branch_commit(repo_root, branch_name)).tracked
        staging = index.read_index(repo_root)

        workdir.check_untracked(repo_root, target_files, current_files, staging.addition)
        workdir.replay_commit(repo_root, source, target_files, current_files)
        repository.set_head_branch(repo_root, branch_name)
        index.clear_index(repo_root)


def checkout_file_from_commit(repo_root, commit_id, rel_path):
    with lock.repo_lock(repo_root):
        source = objects.ObjectSource.local(repo_root)
        commit_hash = source.resolve(commit_id)
        tracked = source.read_commit(commit_hash).tracked
        if rel_path not in tracked:
            raise FileNotInCommit()
        workdir.write_working_file(repo_root, rel_path, source.get(tracked[rel_path]))
    return commit_hash


def checkout_file(repo_root, rel_path):
    return checkout_file_from_commit(repo_root, repository.get_head_commit(repo_root), rel_path)


def run(args):
    repo_root = repository.find_repo_root()
    if not repo_root:
        print(NotInitialized.message, file=sys.stderr)
        sys.exit(1)

    try:
        if args.file:
            rel_path = to_repo_path(repo_root, args.file)
            if args.target:
                checkout_file_from_commit(repo_root, args.target, rel_path)
            else:
                checkout_file(repo_root, rel_path)
            print(f"Restored '{rel_path}'")
        elif args.target:
            switch_branch(repo_root, args.target)
            print(f"Switched to branch '{args.target}'")
        else:
            print("error: nothing to check out; give a branch name or --file", file=sys.stderr)
            sys.exit(1)
    except GitletError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

# The command: gitlet branch [<branch-name>] / gitlet rm-branch <branch-name>
# What it does: Creates a new branch pointer to the current commit, lists all existing branches when no name is given, or deletes a branch pointer
# How it does: To create a branch, it gets the current HEAD commit hash and writes it to a new file named `<branch-name>` inside `.gitlet/refs/heads`.
# To list branches, it reads all the filenames in that directory and prints them, marking the current one with an asterisk. Removing a branch deletes
# only its pointer file; the active branch can never be removed
# What data structure it uses: Map / Dictionary (conceptually, the `refs/heads` directory maps branch names to commit hashes), List (to hold branch names for sorting and display)

import sys

from gitlet.utils import lock, repository
from gitlet.utils.errors import GitletError, NotInitialized


def create_branch(repo_root, branch_name): # Returns the commit the new branch points at
    with lock.repo_lock(repo_root):
        head_commit_hash = repository.get_head_commit(repo_root)
        repository.create_branch(repo_root, branch_name, head_commit_hash)
    return head_commit_hash


def remove_branch(repo_root, branch_name):
    with lock.repo_lock(repo_root):
        repository.delete_branch(repo_root, branch_name)


def branches(repo_root):
    return repository.get_all_branches(repo_root)


def run(args):
#With no arguments, lists all branches.
#With an argument, creates a new branch.

    repo_root = repository.find_repo_root()
    if not repo_root:
        print(NotInitialized.message, file=sys.stderr)
        sys.exit(1)

    if args.name:
        # Create a new branch
        try:
            head_commit_hash = create_branch(repo_root, args.name)
        except GitletError as e:
            print(e, file=sys.stderr)
            sys.exit(1)
        print(f"Branch '{args.name}' created at commit {head_commit_hash[:7]}")
    else:
        # List all branches
        current_branch = repository.get_current_branch(repo_root)
        for branch in branches(repo_root):
            if branch == current_branch:
                print(f"* {branch}")
            else:
                print(f"  {branch}")


def run_remove(args):
    repo_root = repository.find_repo_root()
    if not repo_root:
        print(NotInitialized.message, file=sys.stderr)
        sys.exit(1)

    try:
        remove_branch(repo_root, args.name)
    except GitletError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    print(f"Deleted branch {args.name}")

# What it does: Provides high-level functions for interacting with the repository structure, like finding the repo root and managing branch pointers
# How it does: It reads/writes to files like `HEAD` and those in `refs/heads` to manage the repository's current state and branch locations. `find_repo_root` walks up the directory tree to locate the `.gitlet` directory.
# Every pointer update goes through `atomic_write`, so a crash never leaves a torn ref
# What data structure it uses: Uses recursion (specifically, linear recursion) to find the repo root. Conceptually, it manages pointers (the `HEAD` file and branch files), which are fundamental components of data structures like Graphs and Linked Lists

import logging
import os

from .errors import (
    BranchAlreadyExists, CannotRemoveCurrentBranch, InvalidBranchName, NoSuchBranch, NotInitialized,
)
from .fileio import GITLET_DIR, atomic_write, gitlet_path, read_text

logger = logging.getLogger(__name__)

HEAD_FILE = 'HEAD'
HEAD_REF_PREFIX = 'ref: refs/heads/'


def find_repo_root(path='.'): # Recursively searches for the .gitlet directory to find the repository root
    path = os.path.abspath(path)
    gitlet_dir = os.path.join(path, GITLET_DIR)
    if os.path.isdir(gitlet_dir):
        return path
    parent_path = os.path.dirname(path)
    if parent_path == path:
        return None
    return find_repo_root(parent_path)


def require_repo_root(path='.'): # Like find_repo_root, but fails with NotInitialized outside a repository
    repo_root = find_repo_root(path)
    if not repo_root:
        raise NotInitialized()
    return repo_root


def heads_dir(repo_root):
    return gitlet_path(repo_root, 'refs', 'heads')


def branch_path(repo_root, branch_name):
    return os.path.join(heads_dir(repo_root), branch_name)


def validate_branch_name(branch_name): # Branch names become file names under refs/heads, so path syntax is refused
    if (not branch_name or branch_name.startswith('.') or '/' in branch_name
            or '\\' in branch_name or branch_name != branch_name.strip()):
        raise InvalidBranchName()


def get_head_commit(repo_root): # Retrieves the commit hash that HEAD points to, or None if it points nowhere
    head_content = read_text(gitlet_path(repo_root, HEAD_FILE))
    if not head_content:
        return None
    if head_content.startswith(HEAD_REF_PREFIX):
        return get_branch_commit(repo_root, head_content[len(HEAD_REF_PREFIX):])
    return head_content


def get_current_branch(repo_root): # Retrieves the name of the current branch HEAD points to, or None if in detached HEAD state
    head_content = read_text(gitlet_path(repo_root, HEAD_FILE), default='')
    if head_content.startswith(HEAD_REF_PREFIX):
        return head_content[len(HEAD_REF_PREFIX):]
    return None


def set_head_branch(repo_root, branch_name): # Makes HEAD a symbolic reference to `branch_name`
    atomic_write(gitlet_path(repo_root, HEAD_FILE), f"{HEAD_REF_PREFIX}{branch_name}\n")
    logger.debug("HEAD -> %s", branch_name)


def get_all_branches(repo_root): # Lists all branch names by reading the refs/heads directory
    branches_dir = heads_dir(repo_root)
    if not os.path.isdir(branches_dir):
        return []
    return sorted(name for name in os.listdir(branches_dir)
                  if not name.startswith('.') and os.path.isfile(os.path.join(branches_dir, name)))


def branch_exists(repo_root, branch_name):
    return bool(branch_name) and branch_name in get_all_branches(repo_root)


def create_branch(repo_root, branch_name, commit_hash): # Creates a new branch pointing to the given commit hash
    validate_branch_name(branch_name)
    if branch_exists(repo_root, branch_name):
        raise BranchAlreadyExists()
    set_branch_commit(repo_root, branch_name, commit_hash)


def get_branch_commit(repo_root, branch_name): # Retrieves the commit hash that a given branch points to, or None if the branch doesn't exist
    if not branch_exists(repo_root, branch_name):
        return None
    return read_text(branch_path(repo_root, branch_name)) or None


def set_branch_commit(repo_root, branch_name, commit_hash): # Moves (or creates) a branch pointer
    atomic_write(branch_path(repo_root, branch_name), f"{commit_hash}\n")
    logger.debug("Branch %s -> %s", branch_name, commit_hash)


def delete_branch(repo_root, branch_name): # Deletes only the pointer; the commits it pointed at stay in the store
    if not branch_exists(repo_root, branch_name):
        raise NoSuchBranch("A branch with that name does not exist.")
    if branch_name == get_current_branch(repo_root):
        raise CannotRemoveCurrentBranch()
    os.remove(branch_path(repo_root, branch_name))
    logger.debug("Deleted branch %s", branch_name)


def update_head(repo_root, commit_hash): # Advances whatever HEAD points at: the current branch, or HEAD itself when detached
    current_branch = get_current_branch(repo_root)
    if current_branch:
        set_branch_commit(repo_root, current_branch, commit_hash)
    else:
        atomic_write(gitlet_path(repo_root, HEAD_FILE), f"{commit_hash}\n")
        logger.debug("Detached HEAD -> %s", commit_hash)


def get_head_status(repo_root): # Returns a user-friendly string describing HEAD state
    current_branch = get_current_branch(repo_root)
    if current_branch:
        return f"On branch {current_branch}"
    else:
        head_commit = get_head_commit(repo_root)
        if head_commit:
            return f"HEAD detached at {head_commit[:7]}"
        else:
            return "HEAD detached (no commits yet)"

# The command: gitlet merge <branch-name>
# What it does: Performs a three-way merge of the given branch into the current branch, using their split point as the common ancestor
# How it does: It checks the preconditions (clean index, existing branch, not the current branch) under the repository lock and hands the two tips to
# the merge engine, which either reports the branch as already merged, fast-forwards, or records a two-parent merge commit (possibly with conflict markers)
# What data structure it uses: DAG (for finding the split point), Dictionaries (for the three snapshots)

import sys

from gitlet.utils import index, lock, merge as merge_engine, objects, repository
from gitlet.utils.errors import CannotMergeSelf, GitletError, NoSuchBranch, NotInitialized, UncommittedChanges


def merge_branch(repo_root, branch_name, timestamp=None): # Returns a MergeResult; `result.conflicted` tells the caller about conflicts
    with lock.repo_lock(repo_root):
        if not index.read_index(repo_root).is_empty():
            raise UncommittedChanges()
        if not repository.branch_exists(repo_root, branch_name):
            raise NoSuchBranch("A branch with that name does not exist.")
        current_branch = repository.get_current_branch(repo_root)
        if branch_name == current_branch:
            raise CannotMergeSelf()

        ours = repository.get_head_commit(repo_root)
        theirs = repository.get_branch_commit(repo_root, branch_name)
        # A detached HEAD is named by its short hash
        message = f"Merged {branch_name} into {current_branch or ours[:7]}."
        return merge_engine.merge_commits(repo_root, objects.ObjectSource.local(repo_root),
                                          ours, theirs, message, timestamp)


def run(args):
    repo_root = repository.find_repo_root()
    if not repo_root:
        print(NotInitialized.message, file=sys.stderr)
        sys.exit(1)

    try:
        result = merge_branch(repo_root, args.branch)
    except GitletError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    if result.status == merge_engine.UP_TO_DATE:
        print("Given branch is an ancestor of the current branch.")
    elif result.status == merge_engine.FAST_FORWARD:
        print("Current branch fast-forwarded.")
    else:
        for rel_path in result.conflicts:
            print(f"CONFLICT (content): Merge conflict in {rel_path}")
        merge_commit = objects.read_commit(repo_root, result.commit)
        print(f"{result.commit[:7]} {merge_commit.message}")
        if result.conflicted:
            print("Encountered a merge conflict.")

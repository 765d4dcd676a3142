# What it does: Performs a three-way merge between the current commit ("ours"), another branch's commit ("theirs") and their split point
# How it does: The split point comes from the commit graph. If theirs is already an ancestor nothing happens; if ours is the split point the
# branch fast-forwards. Otherwise every path tracked by any of the three snapshots is classified by comparing blob hashes, the plan is checked
# against untracked files, and only then are files written, conflicts marked and a two-parent commit recorded
# What data structure it uses: DAG (for finding the split point), Dictionaries ({path: blob hash} snapshots) and Sets (the union of all paths)

import logging

from . import repository
from .errors import NoCommonAncestor
from .index import StagingArea, apply_staging, clear_index
from .objects import Commit, now
from .workdir import check_untracked, delete_working_file, replay_commit, write_working_file

logger = logging.getLogger(__name__)

CONFLICT_START = b'<<<<<<< HEAD\n'
CONFLICT_SEPARATOR = b'=======\n'
CONFLICT_END = b'>>>>>>>\n'

# Per-path actions
KEEP = 'keep'
TAKE_THEIRS = 'take-theirs'
REMOVE = 'remove'
CONFLICT = 'conflict'

# Merge outcomes
UP_TO_DATE = 'up-to-date'
FAST_FORWARD = 'fast-forward'
MERGED = 'merged'
CONFLICTED = 'conflicted'


def classify(split_hash, ours_hash, theirs_hash):
    """
    Decides what happens to one path given its blob hash (None when absent)
    in the split point, ours and theirs.

    Same on both sides (including deleted in both, or added identically):
    keep. Only theirs changed it: take theirs, which is a removal when
    theirs deleted it. Only ours changed it: keep. Both changed it in
    different ways, a modification against a deletion included: conflict.
    """
    if ours_hash == theirs_hash:
        return KEEP
    if ours_hash == split_hash:
        return REMOVE if theirs_hash is None else TAKE_THEIRS
    if theirs_hash == split_hash:
        return KEEP
    return CONFLICT


class MergePlan:

    def __init__(self):
        self.checkout = {}   # path -> theirs' blob hash
        self.remove = []
        self.conflicts = {}  # path -> (ours' blob hash or None, theirs' blob hash or None)

    def __repr__(self):
        return (f"MergePlan(checkout={sorted(self.checkout)}, remove={self.remove}, "
                f"conflicts={sorted(self.conflicts)})")

    def incoming(self): # Paths the merge will write into the working directory
        paths = dict.fromkeys(self.checkout)
        paths.update(dict.fromkeys(self.conflicts))
        return paths


def plan_merge(split_files, our_files, their_files):
    plan = MergePlan()
    all_paths = set(split_files) | set(our_files) | set(their_files)
    for path in sorted(all_paths):
        split_hash = split_files.get(path)
        ours_hash = our_files.get(path)
        theirs_hash = their_files.get(path)
        action = classify(split_hash, ours_hash, theirs_hash)
        logger.debug("merge %s: split=%s ours=%s theirs=%s -> %s", path,
                     split_hash and split_hash[:7], ours_hash and ours_hash[:7],
                     theirs_hash and theirs_hash[:7], action)
        if action == TAKE_THEIRS:
            plan.checkout[path] = theirs_hash
        elif action == REMOVE:
            plan.remove.append(path)
        elif action == CONFLICT:
            plan.conflicts[path] = (ours_hash, theirs_hash)
    return plan


def conflict_content(ours, theirs): # A missing side contributes empty content
    return CONFLICT_START + (ours or b'') + CONFLICT_SEPARATOR + (theirs or b'') + CONFLICT_END


class MergeResult:

    def __init__(self, status, commit, split, conflicts=()):
        self.status = status
        self.commit = commit
        self.split = split
        self.conflicts = sorted(conflicts)

    def __repr__(self):
        return f"MergeResult({self.status}, commit={self.commit[:7]}, conflicts={self.conflicts})"

    @property
    def conflicted(self):
        return self.status == CONFLICTED


def merge_commits(repo_root, source, ours, theirs, message, timestamp=None):
    """
    Merges commit `theirs` into the current HEAD commit `ours`.

    The caller holds the repository lock and has checked that the staging
    area is empty. Nothing is written until the untracked-file guard has
    passed; a conflicted merge still records its commit.
    """
    split = source.find_split_point(ours, theirs)
    if split is None:
        raise NoCommonAncestor()

    if split == theirs:
        logger.info("%s is already contained in %s", theirs[:7], ours[:7])
        return MergeResult(UP_TO_DATE, ours, split)

    our_files = source.read_commit(ours).tracked
    their_files = source.read_commit(theirs).tracked

    if split == ours:
        check_untracked(repo_root, their_files, our_files)
        replay_commit(repo_root, source, their_files, our_files)
        repository.update_head(repo_root, theirs)
        clear_index(repo_root)
        logger.info("Fast-forwarded %s to %s", ours[:7], theirs[:7])
        return MergeResult(FAST_FORWARD, theirs, split)

    split_files = source.read_commit(split).tracked
    plan = plan_merge(split_files, our_files, their_files)
    check_untracked(repo_root, plan.incoming(), our_files)

    # All blob reads happen before the first working-tree write
    contents = {path: source.get(blob_hash) for path, blob_hash in plan.checkout.items()}
    for path, (ours_hash, theirs_hash) in plan.conflicts.items():
        contents[path] = conflict_content(ours_hash and source.get(ours_hash),
                                          theirs_hash and source.get(theirs_hash))

    staging = StagingArea()
    for path, blob_hash in plan.checkout.items():
        staging.addition[path] = blob_hash
    for path in plan.conflicts:
        staging.addition[path] = source.put(contents[path])
    staging.removal.update(plan.remove)

    for path in sorted(contents):
        write_working_file(repo_root, path, contents[path])
    for path in plan.remove:
        delete_working_file(repo_root, path)

    merge_commit = Commit(message, now() if timestamp is None else timestamp,
                          [ours, theirs], apply_staging(our_files, staging))
    merge_hash = source.write_commit(merge_commit)
    repository.update_head(repo_root, merge_hash)
    clear_index(repo_root)

    status = CONFLICTED if plan.conflicts else MERGED
    logger.info("Merged %s into %s as %s (%s)", theirs[:7], ours[:7], merge_hash[:7], status)
    return MergeResult(status, merge_hash, split, plan.conflicts)

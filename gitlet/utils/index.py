# What it does: Provides centralized read/write operations for the .gitlet/index file (the staging area) and the rules that mutate it
# How it does: The index holds two sections: files staged for addition (`<hash> <path>` lines) and files staged for removal (`- <path>` lines).
# `stage_add` / `stage_remove` apply the staging rules against the HEAD commit's tracked files, `build_commit` folds the staged changes into a new snapshot
# What data structure it uses: Dictionary (addition: path -> blob hash) and Set (removal paths)

import logging
import os

from .errors import EmptyMessage, FileDoesNotExist, NoReasonToRemove, NothingToCommit
from .fileio import atomic_write, gitlet_path, validate_repo_path, working_path
from .objects import Commit, hash_object, now

logger = logging.getLogger(__name__)

REMOVAL_MARK = '-'


class StagingArea:

    def __init__(self, addition=None, removal=None):
        self.addition = dict(addition or {})
        self.removal = set(removal or ())

    def __repr__(self):
        return f"StagingArea(addition={self.addition!r}, removal={sorted(self.removal)!r})"

    def __eq__(self, other):
        if not isinstance(other, StagingArea):
            return NotImplemented
        return self.addition == other.addition and self.removal == other.removal

    def is_empty(self):
        return not self.addition and not self.removal

    def clear(self):
        self.addition.clear()
        self.removal.clear()


def index_path(repo_root):
    return gitlet_path(repo_root, 'index')


def read_index(repo_root):
    """
    Reads the index file and returns a StagingArea.
    A missing index is an empty staging area.
    """
    staging = StagingArea()
    path = index_path(repo_root)
    if not os.path.exists(path):
        return staging
    with open(path, 'r') as f:
        for line in f:
            line = line.rstrip('\n')
            if not line:
                continue
            marker, _, rel_path = line.partition(' ')
            if marker == REMOVAL_MARK:
                staging.removal.add(rel_path)
            else:
                staging.addition[rel_path] = marker
    return staging


def write_index(repo_root, staging):
    lines = [f"{staging.addition[path]} {path}\n" for path in sorted(staging.addition)]
    lines += [f"{REMOVAL_MARK} {path}\n" for path in sorted(staging.removal)]
    atomic_write(index_path(repo_root), ''.join(lines))


def clear_index(repo_root):
    write_index(repo_root, StagingArea())


def stage_add(repo_root, staging, head_files, rel_path):
    """
    Stages the working copy of `rel_path` for addition.

    A file whose content equals HEAD's tracked version is never staged (a
    stale addition entry for it is dropped). Adding a file clears any pending
    removal mark. Returns the staged blob hash, or None when nothing was staged.
    """
    validate_repo_path(rel_path)
    full_path = working_path(repo_root, rel_path)
    if not os.path.isfile(full_path):
        raise FileDoesNotExist()
    with open(full_path, 'rb') as f:
        content = f.read()

    blob_hash = hash_object(repo_root, content, 'blob', write=False)
    staging.removal.discard(rel_path)

    if head_files.get(rel_path) == blob_hash:
        if staging.addition.pop(rel_path, None):
            logger.debug("%s matches HEAD; dropped stale addition", rel_path)
        return None

    hash_object(repo_root, content, 'blob')
    staging.addition[rel_path] = blob_hash
    logger.debug("Staged %s as %s", rel_path, blob_hash)
    return blob_hash


def stage_remove(repo_root, staging, head_files, rel_path):
    """
    Stages `rel_path` for removal.

    A file tracked by HEAD is marked for removal and deleted from the working
    directory. A file that is only staged for addition is unstaged and left
    on disk. Anything else fails with NoReasonToRemove.
    """
    if rel_path in head_files:
        staging.addition.pop(rel_path, None)
        staging.removal.add(rel_path)
        full_path = working_path(repo_root, rel_path)
        if os.path.isfile(full_path):
            os.remove(full_path)
        logger.debug("Staged %s for removal", rel_path)
        return True
    if rel_path in staging.addition:
        del staging.addition[rel_path]
        logger.debug("Unstaged %s", rel_path)
        return False
    raise NoReasonToRemove()


def apply_staging(head_files, staging): # Starting from HEAD's tracked files: overwrite-or-insert every addition, drop every removal
    tracked = dict(head_files)
    tracked.update(staging.addition)
    for rel_path in staging.removal:
        tracked.pop(rel_path, None)
    return tracked


def build_commit(head_files, staging, message, parents, timestamp=None):
    if staging.is_empty():
        raise NothingToCommit()
    if not message or not message.strip():
        raise EmptyMessage()
    return Commit(message, now() if timestamp is None else timestamp, parents,
                  apply_staging(head_files, staging))

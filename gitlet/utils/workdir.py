# What it does: Reads, writes and deletes files in the working directory on behalf of checkout, reset and merge
# How it does: Before anything is written, `check_untracked` compares every file a target snapshot would write against what is on disk;
# an untracked file holding different content aborts the whole operation. `replay_commit` then writes the target's files and deletes
# the files only the current snapshot tracked
# What data structure it uses: Dictionaries ({path: blob hash} snapshots) and a Tree Traversal (os.walk) of the working directory

import logging
import os

from . import ignore
from .errors import UntrackedFileInTheWay
from .fileio import GITLET_DIR, working_path
from .objects import hash_object

logger = logging.getLogger(__name__)


def list_working_files(repo_root, ignore_patterns=None): # Every file below the root, as sorted `/`-separated paths, skipping `.gitlet`
    if ignore_patterns is None:
        ignore_patterns = ignore.get_ignored_patterns(repo_root)
    found = []
    for root, dirs, files in os.walk(repo_root):
        dirs[:] = [d for d in dirs if d != GITLET_DIR]
        for name in files:
            rel_path = os.path.relpath(os.path.join(root, name), repo_root).replace(os.sep, '/')
            if not ignore.is_ignored(rel_path, ignore_patterns):
                found.append(rel_path)
    return sorted(found)


def read_working_file(repo_root, rel_path): # Returns the file's bytes, or None if it is not a regular file
    full_path = working_path(repo_root, rel_path)
    if not os.path.isfile(full_path):
        return None
    with open(full_path, 'rb') as f:
        return f.read()


def working_file_hash(repo_root, rel_path): # Blob hash the working copy would get, without storing it
    content = read_working_file(repo_root, rel_path)
    if content is None:
        return None
    return hash_object(repo_root, content, 'blob', write=False)


def working_state(repo_root, ignore_patterns=None): # {path: blob hash} for the whole working directory
    return {rel_path: working_file_hash(repo_root, rel_path)
            for rel_path in list_working_files(repo_root, ignore_patterns)}


def write_working_file(repo_root, rel_path, content):
    full_path = working_path(repo_root, rel_path)
    dir_name = os.path.dirname(full_path)
    if dir_name and not os.path.exists(dir_name):
        os.makedirs(dir_name, exist_ok=True)
    with open(full_path, 'wb') as f:
        f.write(content)


def delete_working_file(repo_root, rel_path):
    full_path = working_path(repo_root, rel_path)
    if os.path.isfile(full_path):
        os.remove(full_path)
        return True
    return False


def find_untracked_in_the_way(repo_root, incoming, current_files, staged=()):
    """
    Returns the paths in `incoming` ({path: blob hash or None}) that exist on
    disk, are neither tracked by the current commit nor staged, and would be
    overwritten. A None hash means "any content is in the way"; otherwise a
    working file already holding that exact blob is harmless.
    """
    in_the_way = []
    for rel_path, blob_hash in incoming.items():
        if rel_path in current_files or rel_path in staged:
            continue
        on_disk = working_file_hash(repo_root, rel_path)
        if on_disk is None:
            continue
        if blob_hash is None or on_disk != blob_hash:
            in_the_way.append(rel_path)
    return sorted(in_the_way)


def check_untracked(repo_root, incoming, current_files, staged=()): # Raises before any mutation if an untracked file would be clobbered
    in_the_way = find_untracked_in_the_way(repo_root, incoming, current_files, staged)
    if in_the_way:
        logger.info("Untracked files in the way: %s", ", ".join(in_the_way))
        raise UntrackedFileInTheWay(in_the_way)


def replay_commit(repo_root, source, target_files, current_files):
    """
    Makes the working directory match `target_files`: writes every file the
    target tracks (restoring content from `source`) and deletes every file the
    current snapshot tracks that the target does not. Callers run
    `check_untracked` first. Every blob is read before anything is written,
    so an unreadable object fails the replay with the working tree unchanged.
    """
    contents = {rel_path: source.get(blob_hash)
                for rel_path, blob_hash in target_files.items()
                if working_file_hash(repo_root, rel_path) != blob_hash}
    for rel_path in sorted(contents):
        write_working_file(repo_root, rel_path, contents[rel_path])
    for rel_path in sorted(set(current_files) - set(target_files)):
        delete_working_file(repo_root, rel_path)
    logger.debug("Replayed %d files into %s", len(target_files), repo_root)

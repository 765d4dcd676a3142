# What it does: Low-level helpers shared by every module that persists repository state inside `.gitlet`
# How it does: `atomic_write` writes to a temporary file in the target directory, fsyncs it and renames it over the destination,
# so a crash mid-write leaves either the old file or the new one, never a torn mix
# What data structure it uses: None beyond paths (the `.gitlet` directory is itself a Tree)

import logging
import os
import tempfile

from .errors import InvalidPath

logger = logging.getLogger(__name__)

GITLET_DIR = '.gitlet'


def gitlet_path(repo_root, *parts): # Joins path parts below the repository's `.gitlet` directory
    return os.path.join(repo_root, GITLET_DIR, *parts)


def validate_repo_path(rel_path):
    """
    Refuses paths that cannot be tracked: empty or absolute paths, paths that
    leave the repository or point into `.gitlet`, and line breaks (the index
    and commit records are line based).
    """
    parts = (rel_path or '').split('/')
    if (not rel_path or rel_path.startswith('/') or '\n' in rel_path or '\r' in rel_path
            or '..' in parts or parts[0] in ('.', GITLET_DIR)):
        raise InvalidPath()
    return rel_path


def to_repo_path(repo_root, file_path): # Normalises a filesystem path into the `/`-separated form stored in commits
    rel_path = os.path.relpath(os.path.abspath(file_path), repo_root)
    return validate_repo_path(rel_path.replace(os.sep, '/'))


def working_path(repo_root, rel_path): # Inverse of to_repo_path
    return os.path.join(repo_root, *rel_path.split('/'))


def atomic_write(path, data):
    """
    Atomically replaces `path` with `data` (bytes or str).
    Parent directories are created as needed.
    """
    if isinstance(data, str):
        data = data.encode()
    dir_name = os.path.dirname(path) or '.'
    os.makedirs(dir_name, exist_ok=True)

    tmp_fd, tmp_path = tempfile.mkstemp(dir=dir_name, prefix='.tmp_', suffix='.part')
    try:
        with os.fdopen(tmp_fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
    logger.debug("Wrote %s (%d bytes)", path, len(data))


def read_text(path, default=None): # Returns the stripped file content, or `default` when the file is absent
    if not os.path.exists(path):
        return default
    with open(path, 'r') as f:
        return f.read().strip()

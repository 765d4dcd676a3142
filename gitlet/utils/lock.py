# What it does: Serialises every mutating repository operation behind one exclusive advisory lock
# How it does: Opens `.gitlet/lock` and holds `fcntl.flock(LOCK_EX)` on it for the duration of a `with` block;
# the lock is released when the block exits, whether it returned or raised
# What data structure it uses: None (a single lock file acts as a mutex)

import contextlib
import fcntl
import logging

from .fileio import gitlet_path

logger = logging.getLogger(__name__)

LOCK_FILE = 'lock'


@contextlib.contextmanager
def repo_lock(repo_root):
    """
    Holds the repository's exclusive lock while the body runs.
    Blocks if another process holds it.
    """
    lock_path = gitlet_path(repo_root, LOCK_FILE)
    with open(lock_path, 'a') as lock_f:
        fcntl.flock(lock_f.fileno(), fcntl.LOCK_EX)
        logger.debug("Acquired repository lock %s", lock_path)
        try:
            yield
        finally:
            fcntl.flock(lock_f.fileno(), fcntl.LOCK_UN)
            logger.debug("Released repository lock %s", lock_path)

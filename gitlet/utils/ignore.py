# What it does: Implements the `.gitletignore` functionality used when listing working files for `add .` and `status`
# How it does: Each non-comment line is a glob. A pattern with a leading `/` only matches from the repository root, a trailing `/` only matches
# directories (any file below them); anything else matches the whole path or any single path component
# What data structure it uses: Set (to store the ignore patterns for efficient, near O(1) average time complexity lookups)

import os
from fnmatch import fnmatch

from .fileio import GITLET_DIR

IGNORE_FILE = '.gitletignore'
BUILTIN_PATTERNS = frozenset({GITLET_DIR, '*.pyc', '__pycache__/'})


def get_ignored_patterns(repo_root):
    ignore_file = os.path.join(repo_root, IGNORE_FILE)
    patterns = set(BUILTIN_PATTERNS)

    if os.path.exists(ignore_file):
        with open(ignore_file, 'r') as f:
            patterns.update(line.strip() for line in f
                            if line.strip() and not line.lstrip().startswith('#'))
    return patterns


def _matches(path, pattern):
    parts = path.split('/')
    if pattern.endswith('/'):
        # Directory pattern: some parent directory of the file must match
        pattern = pattern.rstrip('/')
        directories = parts[:-1]
        if pattern.startswith('/'):
            return bool(directories) and fnmatch(directories[0], pattern[1:])
        return any(fnmatch(part, pattern) for part in directories)
    if pattern.startswith('/'):
        return fnmatch(path, pattern[1:]) or fnmatch(parts[0], pattern[1:])
    return fnmatch(path, pattern) or any(fnmatch(part, pattern) for part in parts)


def is_ignored(path, ignore_patterns): # Returns True if the `/`-separated path matches any ignore pattern
    return any(_matches(path, pattern) for pattern in ignore_patterns)

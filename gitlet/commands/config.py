# The command: gitlet config <key> <value>
# What it does: Sets a `section.option` key in `.gitlet/config`, e.g. `core.verifyobjects false`

import sys

from gitlet.utils import config, lock, repository
from gitlet.utils.errors import NotInitialized


def run(args):
    repo_root = repository.find_repo_root()
    if not repo_root:
        print(NotInitialized.message, file=sys.stderr)
        sys.exit(1)

    try:
        with lock.repo_lock(repo_root):
            config.write_config(repo_root, args.key, args.value)
    except ValueError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

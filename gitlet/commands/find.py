# The command: gitlet find <message>
# What it does: Prints the hash of every commit whose message is exactly the given text
# How it does: Enumerates every commit object in the store and compares messages
# What data structure it uses: List (the matching hashes)

import sys

from gitlet.utils import objects, repository
from gitlet.utils.errors import GitletError, NotInitialized

NO_MATCH_MESSAGE = "Found no commit with that message."


def find(repo_root, message):
    return [sha1 for sha1, commit in objects.iter_commits(repo_root) if commit.message == message]


def run(args):
    repo_root = repository.find_repo_root()
    if not repo_root:
        print(NotInitialized.message, file=sys.stderr)
        sys.exit(1)

    try:
        matches = find(repo_root, args.message)
    except GitletError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    if not matches:
        print(NO_MATCH_MESSAGE, file=sys.stderr)
        sys.exit(1)
    for sha1 in matches:
        print(sha1)

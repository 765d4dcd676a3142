# The command: gitlet log / gitlet global-log
# What it does: `log` displays the history starting at HEAD and following first parents; `global-log` displays every commit ever made, in no particular order
# How it does: `log` reads the HEAD commit, records a summary, then moves to its first parent until the root commit is reached. `global-log` enumerates
# every commit object in the store. Both return CommitSummary records; `run` renders them
# What data structure it uses: It performs a Graph Traversal (a linear walk up the first-parent chain) on the Directed Acyclic Graph (DAG) formed by the commits

import sys
from collections import namedtuple
from datetime import datetime, timezone

from gitlet.utils import objects, repository
from gitlet.utils.errors import GitletError, NotInitialized

CommitSummary = namedtuple('CommitSummary', ['sha1', 'message', 'timestamp', 'parents'])

DATE_FORMAT = '%a %b %d %H:%M:%S %Y %z'


def _summary(sha1, commit):
    return CommitSummary(sha1, commit.message, commit.timestamp, commit.parents)


def log(repo_root):
    summaries = []
    commit_hash = repository.get_head_commit(repo_root)
    while commit_hash:
        commit = objects.read_commit(repo_root, commit_hash)
        summaries.append(_summary(commit_hash, commit))
        commit_hash = commit.first_parent
    return summaries


def global_log(repo_root):
    return [_summary(sha1, commit) for sha1, commit in objects.iter_commits(repo_root)]


def format_date(timestamp): # Local time, e.g. "Thu Jan 01 00:00:00 1970 +0000"
    return datetime.fromtimestamp(timestamp, timezone.utc).astimezone().strftime(DATE_FORMAT)


def format_summary(summary):
    lines = ['===', f'commit {summary.sha1}']
    if len(summary.parents) > 1:
        lines.append('Merge: ' + ' '.join(parent[:7] for parent in summary.parents[:2]))
    lines.append(f'Date: {format_date(summary.timestamp)}')
    lines.append(summary.message)
    lines.append('')
    return '\n'.join(lines)


def _print_summaries(fetch):
    repo_root = repository.find_repo_root()
    if not repo_root: # Check if inside a gitlet repository
        print(NotInitialized.message, file=sys.stderr)
        sys.exit(1)

    try:
        summaries = fetch(repo_root)
    except GitletError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    for summary in summaries:
        print(format_summary(summary))


def run(args):
    _print_summaries(log)


def run_global(args):
    _print_summaries(global_log)

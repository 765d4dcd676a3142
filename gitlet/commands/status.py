# The command: gitlet status
# What it does: Reports the branches, the staged additions and removals, the working files changed or deleted since they were last tracked or staged,
# and the working files gitlet does not know about
# How it does: It computes the snapshot the next commit would record (HEAD's files with the index applied) and compares every path in it with the
# working directory. Working files outside that snapshot are untracked
# What data structure it uses: Dictionaries ({path: hash} states) and Sets (for path membership)

import sys
from collections import namedtuple

from gitlet.utils import ignore, index, objects, repository, workdir
from gitlet.utils.errors import GitletError, NotInitialized

StatusReport = namedtuple('StatusReport', ['branch', 'branches', 'staged', 'removed', 'modified', 'untracked'])


def status(repo_root):
    head_files = objects.get_commit_files(repo_root, repository.get_head_commit(repo_root))
    staging = index.read_index(repo_root)
    expected = index.apply_staging(head_files, staging)

    modified = []
    for rel_path in sorted(expected):
        on_disk = workdir.working_file_hash(repo_root, rel_path)
        if on_disk is None:
            modified.append((rel_path, 'deleted'))
        elif on_disk != expected[rel_path]:
            modified.append((rel_path, 'modified'))

    working_files = workdir.list_working_files(repo_root, ignore.get_ignored_patterns(repo_root))
    untracked = [rel_path for rel_path in working_files if rel_path not in expected]

    return StatusReport(
        branch=repository.get_current_branch(repo_root),
        branches=repository.get_all_branches(repo_root),
        staged=sorted(staging.addition),
        removed=sorted(staging.removal),
        modified=modified,
        untracked=untracked,
    )


def format_status(report):
    lines = ['=== Branches ===']
    for branch in report.branches:
        lines.append(f"*{branch}" if branch == report.branch else branch)
    lines += ['', '=== Staged Files ===', *report.staged]
    lines += ['', '=== Removed Files ===', *report.removed]
    lines += ['', '=== Modifications Not Staged For Commit ===']
    lines += [f"{rel_path} ({kind})" for rel_path, kind in report.modified]
    lines += ['', '=== Untracked Files ===', *report.untracked, '']
    return '\n'.join(lines)


def run(args):
    repo_root = repository.find_repo_root()
    if not repo_root:
        print(NotInitialized.message, file=sys.stderr)
        sys.exit(1)

    try:
        report = status(repo_root)
    except GitletError as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    print(repository.get_head_status(repo_root))
    print(format_status(report))

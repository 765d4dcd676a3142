import argparse
import logging
import sys

from gitlet.commands import (
    init, add, rm, commit, log, find, status, config,
    branch, checkout, reset, merge
)

LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def build_parser():
    # The main parser
    parser = argparse.ArgumentParser(prog="gitlet", description="Gitlet: a small single-node version control system.")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Log what gitlet is doing to stderr (-vv for debug output).")
    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    # Command: init
    init_parser = subparsers.add_parser("init", help="Initialize a new, empty repository.")
    init_parser.add_argument("--initial-branch", help="Name of the first branch (default: main).")
    init_parser.set_defaults(func=init.run)

    # Command: add
    add_parser = subparsers.add_parser("add", help="Stage file contents for the next commit.")
    add_parser.add_argument("files", nargs="+", help="Files to add ('.' adds every working file).")
    add_parser.set_defaults(func=add.run)

    # Command: rm
    rm_parser = subparsers.add_parser("rm", help="Unstage a file, or stage a tracked file for removal.")
    rm_parser.add_argument("files", nargs="+", help="Files to remove.")
    rm_parser.set_defaults(func=rm.run)

    # Command: commit
    commit_parser = subparsers.add_parser("commit", help="Record the staged changes.")
    commit_parser.add_argument("-m", "--message", required=True, help="Commit message.")
    commit_parser.set_defaults(func=commit.run)

    # Command: log
    log_parser = subparsers.add_parser("log", help="Show the history of the current commit.")
    log_parser.set_defaults(func=log.run)

    # Command: global-log
    global_log_parser = subparsers.add_parser("global-log", help="Show every commit ever made.")
    global_log_parser.set_defaults(func=log.run_global)

    # Command: find
    find_parser = subparsers.add_parser("find", help="Print the ids of all commits with the given message.")
    find_parser.add_argument("message", help="The exact commit message.")
    find_parser.set_defaults(func=find.run)

    # Command: status
    status_parser = subparsers.add_parser("status", help="Show the working tree status.")
    status_parser.set_defaults(func=status.run)

    # Command: config
    config_parser = subparsers.add_parser("config", help="Set a repository option.")
    config_parser.add_argument("key", help="The configuration key (e.g., core.verifyobjects).")
    config_parser.add_argument("value", help="The configuration value.")
    config_parser.set_defaults(func=config.run)

    # Command: branch
    branch_parser = subparsers.add_parser("branch", help="List or create branches.")
    branch_parser.add_argument("name", nargs="?", help="The name of the branch to create.")
    branch_parser.set_defaults(func=branch.run)

    # Command: rm-branch
    rm_branch_parser = subparsers.add_parser("rm-branch", help="Delete a branch pointer.")
    rm_branch_parser.add_argument("name", help="The branch to delete.")
    rm_branch_parser.set_defaults(func=branch.run_remove)

    # Command: checkout
    checkout_parser = subparsers.add_parser("checkout", help="Switch branches or restore a file.")
    checkout_parser.add_argument("target", nargs="?",
                                 help="Branch to switch to, or with --file the commit to restore from.")
    checkout_parser.add_argument("-f", "--file", help="Restore this file (from HEAD unless a commit is given).")
    checkout_parser.set_defaults(func=checkout.run)

    # Command: reset
    reset_parser = subparsers.add_parser("reset", help="Move the current branch to a commit and check it out.")
    reset_parser.add_argument("commit", help="The commit id (a unique prefix is enough).")
    reset_parser.set_defaults(func=reset.run)

    # Command: merge
    merge_parser = subparsers.add_parser("merge", help="Merge a branch into the current branch.")
    merge_parser.add_argument("branch", help="The branch to merge.")
    merge_parser.set_defaults(func=merge.run)

    return parser


# The main entry point for the Gitlet version control system
def main(argv=None):
    parser = build_parser()
    # Parse the arguments
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=LOG_LEVELS[min(args.verbose, len(LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # If a command was specified, run its function
    if hasattr(args, 'func'):
        args.func(args)
    else:
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())

# What it does: Defines every failure the engine can report, grouped into four families (NotFound, StateError, ConflictGuard, IntegrityError)
# How it does: Each concrete exception carries a fixed, human-readable default message so callers (and tests) can match on the text
# What data structure it uses: A class hierarchy (a Tree of exception types rooted at GitletError)


class GitletError(Exception):
    message = "Gitlet error."

    def __init__(self, message=None):
        super().__init__(message or self.message)


# Families

class NotFound(GitletError):
    message = "Not found."


class StateError(GitletError):
    message = "Invalid repository state."


class ConflictGuard(GitletError):
    message = "Operation would overwrite working files."


class IntegrityError(GitletError): # Stored bytes do not hash to their key; never repaired or retried
    message = "Object store is corrupt."

    def __init__(self, sha1, reason="digest mismatch"):
        self.sha1 = sha1
        super().__init__(f"Object {sha1} is corrupt ({reason})")


# NotFound

class NotInitialized(NotFound):
    message = "Not in an initialized Gitlet directory."


class ObjectNotFound(NotFound):
    def __init__(self, sha1):
        self.sha1 = sha1
        super().__init__(f"Object not found: {sha1}")


class NoSuchCommit(NotFound):
    message = "No commit with that id exists."


class NoSuchBranch(NotFound):
    message = "No such branch exists."


class FileDoesNotExist(NotFound):
    message = "File does not exist."


class FileNotInCommit(NotFound):
    message = "File does not exist in that commit."


class NoSuchRemote(NotFound):
    message = "Remote directory not found."


# StateError

class AlreadyInitialized(StateError):
    message = "A Gitlet version-control system already exists in the current directory."


class NothingToCommit(StateError):
    message = "No changes added to the commit."


class EmptyMessage(StateError):
    message = "Please enter a commit message."


class NoReasonToRemove(StateError):
    message = "No reason to remove the file."


class BranchAlreadyExists(StateError):
    message = "A branch with that name already exists."


class InvalidBranchName(StateError):
    message = "Not a valid branch name."


class InvalidPath(StateError):
    message = "Not a valid file path inside the repository."


class AlreadyOnBranch(StateError):
    message = "No need to checkout the current branch."


class CannotRemoveCurrentBranch(StateError):
    message = "Cannot remove the current branch."


class UncommittedChanges(StateError):
    message = "You have uncommitted changes."


class CannotMergeSelf(StateError):
    message = "Cannot merge a branch with itself."


class NoCommonAncestor(StateError):
    message = "No common ancestor found."


# ConflictGuard

class UntrackedFileInTheWay(ConflictGuard):
    message = "There is an untracked file in the way; delete it, or add and commit it first."

    def __init__(self, paths=()):
        self.paths = sorted(paths)
        super().__init__()

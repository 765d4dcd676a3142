# What it does: Manages the low-level object database, handling the storage and retrieval of blobs and commits
# How it does: It implements a content-addressed storage system. `hash_object` saves content and returns its hash, `read_object` retrieves it
# and re-hashes what it read so on-disk corruption surfaces as an IntegrityError instead of bad data. Commits are serialised to a
# deterministic text record, so identical (message, time, parents, tracked files) always give the identical hash
# What data structure it uses: Hash Table / Dictionary (the entire object store is a content-addressed dictionary where the SHA-1 hash is the key)

import hashlib
import logging
import os
import string
import time
import zlib
from dataclasses import dataclass, field

from . import config, repository
from .errors import IntegrityError, NoSuchCommit, NoSuchRemote, ObjectNotFound
from .fileio import GITLET_DIR, atomic_write, gitlet_path
from .graph import CommitGraph

logger = logging.getLogger(__name__)

HASH_LENGTH = 40
INITIAL_COMMIT_MESSAGE = 'initial commit'


def objects_dir(repo_root):
    return gitlet_path(repo_root, 'objects')


def object_path(repo_root, sha1): # Objects fan out into 256 sub-directories keyed by the first two hex digits
    return os.path.join(objects_dir(repo_root), sha1[:2], sha1[2:])


def is_hash(value):
    return (isinstance(value, str) and len(value) == HASH_LENGTH
            and all(c in string.hexdigits for c in value))


def hash_object(repo_root, content, obj_type, write=True): # Hashes content and optionally writes it as an object of the given type ('blob', 'commit')
    header = f'{obj_type} {len(content)}\0'.encode()
    data = header + content

    sha1 = hashlib.sha1(data).hexdigest()

    if write:
        path = object_path(repo_root, sha1)
        # Identical content always maps to the identical key, so an existing object is never rewritten
        if not os.path.exists(path):
            atomic_write(path, zlib.compress(data))
            logger.debug("Stored %s %s (%d bytes)", obj_type, sha1, len(content))

    return sha1


def _load(repo_root, sha1):
    path = object_path(repo_root, sha1)
    if not is_hash(sha1) or not os.path.exists(path):
        raise ObjectNotFound(sha1)
    with open(path, 'rb') as f:
        return f.read()


def read_object(repo_root, sha1, verify=True): # Reads an object by its SHA-1 hash and returns its type and content
    compressed_data = _load(repo_root, sha1)

    try:
        data = zlib.decompress(compressed_data)
    except zlib.error as e:
        raise IntegrityError(sha1, f"cannot decompress: {e}")

    if verify and hashlib.sha1(data).hexdigest() != sha1:
        raise IntegrityError(sha1)

    null_byte_index = data.find(b'\0')
    if null_byte_index < 0:
        raise IntegrityError(sha1, "missing header")
    try:
        obj_type, size = data[:null_byte_index].decode().split(' ')
        size = int(size)
    except ValueError:
        raise IntegrityError(sha1, "malformed header")
    content = data[null_byte_index + 1:]
    if size != len(content):
        raise IntegrityError(sha1, "size mismatch")

    return obj_type, content


def read_object_type(repo_root, sha1): # Decompresses only the header of an object to learn its type
    compressed_data = _load(repo_root, sha1)
    try:
        head = zlib.decompressobj().decompress(compressed_data, 64)
    except zlib.error as e:
        raise IntegrityError(sha1, f"cannot decompress: {e}")
    return head.split(b' ', 1)[0].decode(errors='replace')


def object_exists(repo_root, sha1):
    return is_hash(sha1) and os.path.exists(object_path(repo_root, sha1))


def iter_object_hashes(repo_root, prefix=''):
    """
    Yields the hash of every stored object whose hash starts with `prefix`.
    Temporary files left by interrupted writes are skipped.
    """
    root = objects_dir(repo_root)
    if not os.path.isdir(root):
        return
    if len(prefix) >= 2:
        fan_dirs = [prefix[:2]]
    else:
        fan_dirs = sorted(d for d in os.listdir(root) if d.startswith(prefix))
    for fan_dir in fan_dirs:
        dir_path = os.path.join(root, fan_dir)
        if not os.path.isdir(dir_path):
            continue
        for name in sorted(os.listdir(dir_path)):
            if name.startswith('.'):
                continue
            sha1 = fan_dir + name
            if sha1.startswith(prefix) and is_hash(sha1):
                yield sha1


@dataclass(frozen=True)
class Commit:
    """
    Immutable snapshot record. `tracked` maps repository paths to blob hashes,
    `parents` is empty for the root commit, one hash normally and two for a merge.
    """

    message: str
    timestamp: int
    parents: tuple = ()
    tracked: dict = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'parents', tuple(self.parents))
        object.__setattr__(self, 'tracked', dict(self.tracked))

    @property
    def is_merge(self):
        return len(self.parents) > 1

    @property
    def first_parent(self):
        return self.parents[0] if self.parents else None

    def serialize(self):
        lines = [f'time {int(self.timestamp)}']
        for parent in self.parents:
            lines.append(f'parent {parent}')
        for path in sorted(self.tracked):
            lines.append(f'file {self.tracked[path]}\t{path}')
        lines.append('')
        lines.append(self.message)
        return '\n'.join(lines).encode()

    @classmethod
    def parse(cls, content):
        header, _, message = content.decode().partition('\n\n')
        timestamp = 0
        parents = []
        tracked = {}
        for line in header.splitlines():
            key, _, value = line.partition(' ')
            if key == 'time':
                timestamp = int(value)
            elif key == 'parent':
                parents.append(value)
            elif key == 'file':
                blob_hash, _, path = value.partition('\t')
                tracked[path] = blob_hash
        return cls(message, timestamp, parents, tracked)


def initial_commit():
    return Commit(INITIAL_COMMIT_MESSAGE, 0)


def commit_hash(commit):
    return hash_object(None, commit.serialize(), 'commit', write=False)


def write_commit(repo_root, commit):
    sha1 = hash_object(repo_root, commit.serialize(), 'commit')
    logger.debug("Wrote commit %s with parents %s", sha1, list(commit.parents))
    return sha1


def read_commit(repo_root, sha1, verify=True):
    obj_type, content = read_object(repo_root, sha1, verify=verify)
    if obj_type != 'commit':
        raise NoSuchCommit()
    return Commit.parse(content)


def get_commit_files(repo_root, sha1): # Retrieves all tracked files and their blob hashes from a commit
    if not sha1:
        return {}
    return dict(read_commit(repo_root, sha1).tracked)


def iter_commits(repo_root, verify=True): # Yields (hash, Commit) for every commit in the store, in hash order
    for sha1 in iter_object_hashes(repo_root):
        if read_object_type(repo_root, sha1) == 'commit':
            yield sha1, read_commit(repo_root, sha1, verify=verify)


def resolve_commit(repo_root, prefix):
    """
    Expands a full hash or a unique hash prefix into a commit hash.
    Zero or several matches fail with NoSuchCommit.
    """
    prefix = (prefix or '').strip().lower()
    if not prefix or any(c not in string.hexdigits for c in prefix):
        raise NoSuchCommit()

    matches = [sha1 for sha1 in iter_object_hashes(repo_root, prefix)
               if read_object_type(repo_root, sha1) == 'commit']
    if len(matches) != 1:
        logger.debug("Commit prefix %r matched %d commits", prefix, len(matches))
        raise NoSuchCommit()
    return matches[0]


class ObjectSource:
    """
    Capability over one repository's object store: `put`, `get`, commit lookup
    and split-point search. `local` reads the repository being worked on,
    `remote` reads another repository on the local filesystem; callers use
    either one the same way.
    """

    def __init__(self, repo_root, name='local', remote=False, verify=True):
        self.repo_root = repo_root
        self.name = name
        self.is_remote = remote
        self.verify = verify

    @classmethod
    def local(cls, repo_root):
        return cls(repo_root, verify=config.get_verify_objects(repo_root))

    @classmethod
    def remote(cls, location, name='origin'):
        location = os.path.abspath(location)
        if os.path.basename(location) == GITLET_DIR:
            location = os.path.dirname(location)
        if not os.path.isdir(gitlet_path(location)):
            raise NoSuchRemote()
        return cls(location, name=name, remote=True,
                   verify=config.get_verify_objects(location))

    def __repr__(self):
        kind = 'remote' if self.is_remote else 'local'
        return f"ObjectSource({kind} {self.name!r} at {self.repo_root!r})"

    def put(self, content):
        return hash_object(self.repo_root, content, 'blob')

    def get(self, sha1):
        _, content = read_object(self.repo_root, sha1, verify=self.verify)
        return content

    def contains(self, sha1):
        return object_exists(self.repo_root, sha1)

    def read_commit(self, sha1):
        return read_commit(self.repo_root, sha1, verify=self.verify)

    def write_commit(self, commit):
        return write_commit(self.repo_root, commit)

    def commits(self):
        return iter_commits(self.repo_root, verify=self.verify)

    def resolve(self, prefix):
        return resolve_commit(self.repo_root, prefix)

    def branches(self):
        return {name: repository.get_branch_commit(self.repo_root, name)
                for name in repository.get_all_branches(self.repo_root)}

    def graph(self):
        return CommitGraph.load(self)

    def find_split_point(self, commit1, commit2):
        return self.graph().find_split_point(commit1, commit2)


def now(): # Commit timestamps are whole seconds since the epoch
    return int(time.time())

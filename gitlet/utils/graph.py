# What it does: Holds the commit history as a Directed Acyclic Graph and answers ancestry questions (is-ancestor, split point) over it
# How it does: Nodes live in a flat dictionary keyed by commit hash; parents and children are stored as hash strings, never as object
# references. `load` builds the graph in two phases (read every commit, then link edges) so no node is ever half-built
# What data structure it uses: Directed Acyclic Graph (adjacency lists in a Hash Table) and Breadth-First Search with a Queue

import logging
from collections import deque

from .errors import NoSuchCommit, ObjectNotFound

logger = logging.getLogger(__name__)


class CommitNode:
    __slots__ = ('sha1', 'parents', 'children', 'placeholder')

    def __init__(self, sha1, parents=(), placeholder=False):
        self.sha1 = sha1
        self.parents = list(parents)
        self.children = []
        self.placeholder = placeholder

    def __repr__(self):
        return f"CommitNode({self.sha1[:7]}, parents={len(self.parents)}, children={len(self.children)})"


class CommitGraph:

    def __init__(self):
        self.nodes = {}

    @classmethod
    def load(cls, source):
        """
        Builds the graph of every commit reachable through `source` (an ObjectSource).

        Phase one reads and hashes every commit; phase two links parent/child
        edges once all nodes exist. A parent that is missing from the store is
        reported as ObjectNotFound rather than patched with a placeholder.
        """
        graph = cls()
        entries = list(source.commits())
        for sha1, commit in entries:
            graph.nodes[sha1] = CommitNode(sha1, commit.parents)
        for sha1, commit in entries:
            for parent in commit.parents:
                parent_node = graph.nodes.get(parent)
                if parent_node is None:
                    raise ObjectNotFound(parent)
                parent_node.children.append(sha1)
        logger.debug("Loaded commit graph with %d nodes from %r", len(graph.nodes), source)
        return graph

    def __contains__(self, sha1):
        return sha1 in self.nodes

    def __len__(self):
        return len(self.nodes)

    def add_commit(self, sha1, parents):
        """
        Registers a commit incrementally. Parents not seen yet get a placeholder
        node (no parents of its own) which is filled in when that commit arrives.
        """
        node = self.nodes.get(sha1)
        if node is None:
            node = CommitNode(sha1, parents)
            self.nodes[sha1] = node
        elif node.placeholder:
            node.parents = list(parents)
            node.placeholder = False
        else:
            return node

        for parent in parents:
            parent_node = self.nodes.get(parent)
            if parent_node is None:
                parent_node = CommitNode(parent, placeholder=True)
                self.nodes[parent] = parent_node
            if sha1 not in parent_node.children:
                parent_node.children.append(sha1)
        return node

    def placeholders(self): # Hashes referenced as parents whose commit has not been added yet
        return sorted(sha1 for sha1, node in self.nodes.items() if node.placeholder)

    def _node(self, sha1):
        node = self.nodes.get(sha1)
        if node is None:
            raise NoSuchCommit()
        return node

    def parents(self, sha1):
        return list(self._node(sha1).parents)

    def children(self, sha1):
        return list(self._node(sha1).children)

    def ancestors(self, sha1): # Reflexive-transitive closure over parent edges
        self._node(sha1)
        ancestors = {sha1}
        queue = deque([sha1])
        while queue:
            current = queue.popleft()
            node = self.nodes.get(current)
            if node is None:
                continue
            for parent in node.parents:
                if parent not in ancestors:
                    ancestors.add(parent)
                    queue.append(parent)
        return ancestors

    def is_ancestor(self, ancestor, descendant):
        return ancestor in self.ancestors(descendant)

    def find_split_point(self, commit1, commit2):
        """
        Returns the split point of two commits: every ancestor of `commit1` is
        collected, then a breadth-first walk up from `commit2` returns the first
        commit in that set. With several merge bases this is the first one the
        walk reaches, which is not always the unique lowest common ancestor.
        Returns None when the histories share nothing.
        """
        ancestors = self.ancestors(commit1)
        self._node(commit2)

        visited = {commit2}
        queue = deque([commit2])
        while queue:
            current = queue.popleft()
            if current in ancestors:
                return current
            node = self.nodes.get(current)
            if node is None:
                continue
            for parent in node.parents:
                if parent not in visited:
                    visited.add(parent)
                    queue.append(parent)
        return None

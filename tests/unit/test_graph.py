# Unit tests for utils/graph.py

import pytest

from gitlet.utils import objects
from gitlet.utils.errors import NoSuchCommit, ObjectNotFound
from gitlet.utils.graph import CommitGraph
from tests.conftest import commit_files


def build_graph(edges):
    # edges: [(commit, [parents])] in insertion order
    graph = CommitGraph()
    for sha1, parents in edges:
        graph.add_commit(sha1, parents)
    return graph


@pytest.fixture
def history():
    #   A - B - C - D
    #        \
    #         E
    return build_graph([
        ('A', []),
        ('B', ['A']),
        ('C', ['B']),
        ('D', ['C']),
        ('E', ['B']),
    ])


class TestAncestry:
    """Tests for CommitGraph.is_ancestor() and ancestors()"""

    def test_root_is_ancestor_of_descendant(self, history):
        assert history.is_ancestor('A', 'C')

    def test_descendant_is_not_ancestor(self, history):
        assert not history.is_ancestor('C', 'A')

    def test_is_reflexive(self, history):
        assert history.is_ancestor('C', 'C')

    def test_sibling_branches_are_unrelated(self, history):
        assert not history.is_ancestor('E', 'D')
        assert not history.is_ancestor('D', 'E')

    def test_ancestors_set(self, history):
        assert history.ancestors('D') == {'A', 'B', 'C', 'D'}

    def test_children_are_linked(self, history):
        assert sorted(history.children('B')) == ['C', 'E']
        assert history.parents('B') == ['A']

    def test_unknown_commit_raises(self, history):
        with pytest.raises(NoSuchCommit):
            history.ancestors('Z')


class TestFindSplitPoint:
    """Tests for CommitGraph.find_split_point()"""

    def test_split_of_sibling_branches(self, history):
        """D and E both descend from B; B is their split point."""
        assert history.find_split_point('D', 'E') == 'B'
        assert history.find_split_point('E', 'D') == 'B'

    def test_split_with_ancestor_is_the_ancestor(self, history):
        assert history.find_split_point('D', 'B') == 'B'
        assert history.find_split_point('B', 'D') == 'B'

    def test_split_with_itself(self, history):
        assert history.find_split_point('C', 'C') == 'C'

    def test_merge_commit_reaches_both_sides(self, history):
        history.add_commit('M', ['D', 'E'])
        assert history.find_split_point('M', 'E') == 'E'
        assert history.find_split_point('E', 'M') == 'E'

    def test_unrelated_histories_have_no_split(self):
        graph = build_graph([('X', []), ('Y', [])])
        assert graph.find_split_point('X', 'Y') is None

    def test_first_found_policy_in_criss_cross(self):
        # Two merge bases (C and D); the walk from the second commit finds one of them first
        graph = build_graph([
            ('A', []),
            ('C', ['A']),
            ('D', ['A']),
            ('M1', ['C', 'D']),
            ('M2', ['D', 'C']),
        ])
        assert graph.find_split_point('M1', 'M2') == 'D'


class TestPlaceholders:
    """Tests for incremental add_commit() with parents that arrive later"""

    def test_unknown_parent_gets_placeholder(self):
        graph = CommitGraph()
        graph.add_commit('C', ['B'])
        assert graph.placeholders() == ['B']
        assert graph.parents('B') == []
        assert graph.children('B') == ['C']

    def test_placeholder_is_reconciled(self):
        graph = CommitGraph()
        graph.add_commit('C', ['B'])
        graph.add_commit('B', ['A'])
        assert graph.placeholders() == ['A']
        assert graph.parents('B') == ['A']
        assert graph.children('B') == ['C']

        graph.add_commit('A', [])
        assert graph.placeholders() == []
        assert graph.is_ancestor('A', 'C')

    def test_adding_twice_is_harmless(self, history):
        history.add_commit('C', ['B'])
        assert history.children('B').count('C') == 1


class FakeSource:
    # Minimal stand-in for an ObjectSource: only `commits()` is needed to load a graph
    def __init__(self, entries):
        self.entries = entries

    def commits(self):
        return iter(self.entries)


class TestLoad:
    """Tests for the two-phase CommitGraph.load()"""

    def test_load_links_in_any_order(self):
        # Children listed before their parents still link up
        entries = [
            ('c' * 40, objects.Commit('third', 3, ['b' * 40])),
            ('b' * 40, objects.Commit('second', 2, ['a' * 40])),
            ('a' * 40, objects.Commit('first', 1)),
        ]
        graph = CommitGraph.load(FakeSource(entries))
        assert len(graph) == 3
        assert graph.placeholders() == []
        assert graph.is_ancestor('a' * 40, 'c' * 40)

    def test_missing_parent_raises(self):
        entries = [('c' * 40, objects.Commit('orphan', 3, ['b' * 40]))]
        with pytest.raises(ObjectNotFound):
            CommitGraph.load(FakeSource(entries))

    def test_load_from_repository(self, repo_with_commit):
        repo_root, commit_hash = repo_with_commit
        second = commit_files(repo_root, {'a.txt': 'a'}, 'second', timestamp=2000)

        graph = objects.ObjectSource.local(repo_root).graph()
        root = objects.commit_hash(objects.initial_commit())
        assert len(graph) == 3
        assert root in graph
        assert graph.is_ancestor(root, second)
        assert graph.parents(second) == [commit_hash]

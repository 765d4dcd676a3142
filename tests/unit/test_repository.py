# Unit tests for utils/repository.py

import os

import pytest

from gitlet.utils import repository
from gitlet.utils.errors import (
    BranchAlreadyExists, CannotRemoveCurrentBranch, InvalidBranchName, NoSuchBranch, NotInitialized,
)


class TestFindRepoRoot:
    """Tests for repository.find_repo_root()"""

    def test_finds_root_in_current_dir(self, temp_repo):
        """Should find repo root when in the root directory."""
        assert repository.find_repo_root(temp_repo) == temp_repo

    def test_finds_root_from_subdirectory(self, temp_repo):
        """Should find repo root when in a subdirectory."""
        subdir = os.path.join(temp_repo, 'src', 'components')
        os.makedirs(subdir)
        assert repository.find_repo_root(subdir) == temp_repo

    def test_returns_none_outside_repo(self, temp_dir):
        """Should return None when not in a repository."""
        assert repository.find_repo_root(temp_dir) is None

    def test_require_repo_root_raises_outside_repo(self, temp_dir):
        with pytest.raises(NotInitialized) as exc_info:
            repository.require_repo_root(temp_dir)
        assert str(exc_info.value) == "Not in an initialized Gitlet directory."


class TestHead:
    """Tests for HEAD handling"""

    def test_head_points_at_default_branch(self, temp_repo):
        assert repository.get_current_branch(temp_repo) == 'main'
        assert repository.get_head_commit(temp_repo) == repository.get_branch_commit(temp_repo, 'main')

    def test_head_status_on_branch(self, temp_repo):
        assert repository.get_head_status(temp_repo) == "On branch main"

    def test_update_head_moves_current_branch(self, temp_repo):
        repository.update_head(temp_repo, 'f' * 40)
        assert repository.get_branch_commit(temp_repo, 'main') == 'f' * 40
        assert repository.get_current_branch(temp_repo) == 'main'

    def test_detached_head(self, temp_repo):
        """A HEAD holding a bare hash has no current branch; updates move HEAD itself."""
        root = repository.get_head_commit(temp_repo)
        with open(os.path.join(temp_repo, '.gitlet', 'HEAD'), 'w') as f:
            f.write(root + '\n')

        assert repository.get_current_branch(temp_repo) is None
        assert repository.get_head_status(temp_repo) == f"HEAD detached at {root[:7]}"

        repository.update_head(temp_repo, 'e' * 40)
        assert repository.get_head_commit(temp_repo) == 'e' * 40
        assert repository.get_branch_commit(temp_repo, 'main') == root


class TestBranches:
    """Tests for branch pointer management"""

    def test_create_and_list(self, temp_repo):
        head = repository.get_head_commit(temp_repo)
        repository.create_branch(temp_repo, 'feature', head)
        repository.create_branch(temp_repo, 'bugfix', head)

        assert repository.get_all_branches(temp_repo) == ['bugfix', 'feature', 'main']
        assert repository.get_branch_commit(temp_repo, 'feature') == head

    def test_duplicate_branch_raises(self, temp_repo):
        head = repository.get_head_commit(temp_repo)
        with pytest.raises(BranchAlreadyExists):
            repository.create_branch(temp_repo, 'main', head)

    @pytest.mark.parametrize('name', ['', '.hidden', 'a/b', 'a\\b', ' padded '])
    def test_invalid_names_raise(self, temp_repo, name):
        with pytest.raises(InvalidBranchName):
            repository.create_branch(temp_repo, name, repository.get_head_commit(temp_repo))

    def test_unknown_branch_has_no_commit(self, temp_repo):
        assert repository.get_branch_commit(temp_repo, 'nope') is None
        assert not repository.branch_exists(temp_repo, 'nope')

    def test_delete_branch(self, temp_repo):
        repository.create_branch(temp_repo, 'feature', repository.get_head_commit(temp_repo))
        repository.delete_branch(temp_repo, 'feature')
        assert repository.get_all_branches(temp_repo) == ['main']

    def test_delete_current_branch_raises(self, temp_repo):
        with pytest.raises(CannotRemoveCurrentBranch):
            repository.delete_branch(temp_repo, 'main')
        assert repository.branch_exists(temp_repo, 'main')

    def test_delete_missing_branch_raises(self, temp_repo):
        with pytest.raises(NoSuchBranch) as exc_info:
            repository.delete_branch(temp_repo, 'ghost')
        assert str(exc_info.value) == "A branch with that name does not exist."

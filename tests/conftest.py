"""Shared fixtures: an in-memory repository that serves canned answers."""

import pytest

from changebump.git.reader import RepositoryQuery, RepositoryUnavailable


class FakeRepository(RepositoryQuery):
    """RepositoryQuery test double. No git process is ever started."""

    def __init__(self, files=(), commits=(), branch="main", tag=None, dirty=None, repository=True):
        self.files = frozenset(files)
        self.commits = list(commits)
        self.branch = branch
        self.tag = tag
        self.dirty = bool(self.files) if dirty is None else dirty
        self.repository = repository
        self.fallback_counts = []

    def _check(self):
        if not self.repository:
            raise RepositoryUnavailable("Not inside a git repository")

    def is_repository(self) -> bool:
        return self.repository

    def current_branch_name(self) -> str:
        self._check()
        return self.branch

    def has_uncommitted_changes(self) -> bool:
        self._check()
        return self.dirty

    def changed_files(self) -> frozenset[str]:
        self._check()
        return self.files

    def recent_commit_subjects(self, fallback_count: int = 10) -> list[str]:
        self._check()
        self.fallback_counts.append(fallback_count)
        return self.commits if self.tag else self.commits[:fallback_count]

    def latest_tag(self):
        self._check()
        return self.tag


@pytest.fixture
def fake_repo():
    """Return a factory for FakeRepository."""
    return FakeRepository

"""Repository Reader - Read-only queries over a git working tree."""

import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path


DEFAULT_FALLBACK_COUNT = 10


@dataclass(frozen=True)
class ChangeSnapshot:
    """What changed in the working tree and which commits are unreleased."""
    changed_files: frozenset[str] = field(default_factory=frozenset)
    recent_commit_subjects: tuple[str, ...] = ()

    @property
    def total_files(self) -> int:
        return len(self.changed_files)

    @property
    def total_commits(self) -> int:
        return len(self.recent_commit_subjects)

    @property
    def is_empty(self) -> bool:
        return not self.changed_files and not self.recent_commit_subjects


class GitError(Exception):
    """Raised when git operations fail."""
    pass


class RepositoryUnavailable(GitError):
    """Git is missing or the directory is not inside a work tree."""
    pass


class ExternalToolFailure(GitError):
    """A git command exited non-zero."""

    def __init__(self, args: tuple[str, ...], stderr: str = ""):
        self.command = ('git', *args)
        self.stderr = stderr.strip()
        message = f"Git command failed: git {' '.join(args)}"
        if self.stderr:
            message = f"{message}\n{self.stderr}"
        super().__init__(message)


class RepositoryQuery(ABC):
    """Read-only view of a version-controlled working tree."""

    @abstractmethod
    def is_repository(self) -> bool:
        pass

    @abstractmethod
    def current_branch_name(self) -> str:
        pass

    @abstractmethod
    def has_uncommitted_changes(self) -> bool:
        pass

    @abstractmethod
    def changed_files(self) -> frozenset[str]:
        pass

    @abstractmethod
    def recent_commit_subjects(self, fallback_count: int = DEFAULT_FALLBACK_COUNT) -> list[str]:
        pass

    @abstractmethod
    def latest_tag(self) -> str | None:
        pass

    def snapshot(self, fallback_count: int = DEFAULT_FALLBACK_COUNT) -> ChangeSnapshot:
        """Gather changed files and unreleased commit subjects."""
        return ChangeSnapshot(
            changed_files=frozenset(self.changed_files()),
            recent_commit_subjects=tuple(self.recent_commit_subjects(fallback_count)),
        )


class GitReader(RepositoryQuery):
    """Answers repository questions by running git in a working directory."""

    def __init__(self, working_directory: str | Path | None = None):
        self.working_directory = Path(working_directory) if working_directory else Path.cwd()
        self._verified = False

    def _run_git(self, *args: str) -> str:
        """Run a git command in the working directory and return stdout."""
        try:
            result = subprocess.run(
                ['git', *args],
                cwd=self.working_directory,
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace'
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise ExternalToolFailure(args, e.stderr or "")
        except FileNotFoundError:
            if not self.working_directory.is_dir():
                raise RepositoryUnavailable(f"Directory does not exist: {self.working_directory}")
            raise RepositoryUnavailable("Git is not installed or not in PATH")
        except NotADirectoryError:
            raise RepositoryUnavailable(f"Not a directory: {self.working_directory}")

    def _lines(self, *args: str) -> list[str]:
        return [line.strip() for line in self._run_git(*args).splitlines() if line.strip()]

    def _require_repository(self) -> None:
        """Fail fast if we're not in a git repository."""
        if self._verified:
            return
        try:
            inside = self._run_git('rev-parse', '--is-inside-work-tree').strip()
        except ExternalToolFailure:
            inside = ""
        if inside != 'true':
            raise RepositoryUnavailable(f"Not inside a git repository: {self.working_directory}")
        self._verified = True

    def _has_head(self) -> bool:
        """A freshly initialised repository has no HEAD commit yet."""
        try:
            self._run_git('rev-parse', '--verify', '--quiet', 'HEAD')
        except ExternalToolFailure:
            return False
        return True

    def is_repository(self) -> bool:
        try:
            self._require_repository()
        except GitError:
            return False
        return True

    def current_branch_name(self) -> str:
        self._require_repository()
        return self._run_git('branch', '--show-current').strip()

    def has_uncommitted_changes(self) -> bool:
        self._require_repository()
        return bool(self._run_git('status', '--porcelain').strip())

    def staged_files(self) -> list[str]:
        self._require_repository()
        return self._lines('diff', '--cached', '--name-only')

    def changed_files(self) -> frozenset[str]:
        """Union of unstaged and staged paths."""
        self._require_repository()
        staged = self.staged_files()
        if not self._has_head():
            return frozenset(staged)
        return frozenset(self._lines('diff', '--name-only', 'HEAD')) | frozenset(staged)

    def latest_tag(self) -> str | None:
        """Most recent tag reachable from HEAD, or None."""
        self._require_repository()
        try:
            tag = self._run_git('describe', '--tags', '--abbrev=0').strip()
        except ExternalToolFailure:
            # No names found / no commits: not a failure
            return None
        return tag or None

    def recent_commit_subjects(self, fallback_count: int = DEFAULT_FALLBACK_COUNT) -> list[str]:
        """Commit subjects since the latest tag, newest first.

        Falls back to the last ``fallback_count`` subjects when no tag exists.
        """
        if fallback_count < 1:
            raise ValueError(f"fallback_count must be at least 1, got {fallback_count}")
        self._require_repository()
        if not self._has_head():
            return []
        tag = self.latest_tag()
        if tag is None:
            return self._lines('log', f'-{fallback_count}', '--pretty=format:%s')
        return self._lines('log', f'{tag}..HEAD', '--pretty=format:%s')

    def remote_url(self, remote: str = 'origin') -> str:
        self._require_repository()
        try:
            return self._run_git('config', '--get', f'remote.{remote}.url').strip()
        except ExternalToolFailure:
            # git config exits 1 when the key is unset
            return ""

    def repository_name(self) -> str:
        """Name from the origin URL, else the top-level directory name."""
        url = self.remote_url().rstrip('/')
        if url:
            name = url.replace(':', '/').rsplit('/', 1)[-1]
            return name[:-4] if name.endswith('.git') else name
        toplevel = self._run_git('rev-parse', '--show-toplevel').strip()
        return Path(toplevel).name

"""Concrete GitPython-based repository handle."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from git import GitCommandError, GitError, InvalidGitRepositoryError, NoSuchPathError, Repo

from pygit_global.models import FailureKind, StatusEntry

STATUS_ARGS = ('--porcelain', '--untracked-files=normal')

# GitPython puts this in stderr when kill_after_timeout fires.
KILLED_MARKER = 'Timeout: the command'


class GitPythonRepository:
    """Handle for one cached repository path, opened lazily on each query"""

    def __init__(self, repo_path: Path, timeout: float | None = None):
        """Wrap repo_path without checking it; the cache may be stale."""
        self._path = Path(repo_path)
        self._timeout = timeout
        self._logger = logging.getLogger(__name__)

    def __repr__(self) -> str:
        return f"GitPythonRepository({str(self._path)!r})"

    @property
    def path(self) -> Path:
        """Absolute path to the repository root."""
        return self._path

    def _open(self) -> Repo:
        """Open the repository, refusing to search parent directories."""
        return Repo(self._path, search_parent_directories=False)

    def _run_status(self, repo: Repo) -> str:
        return repo.git.status(*STATUS_ARGS, kill_after_timeout=self._timeout)

    def query_status(self) -> StatusEntry:
        """Return working tree, staged and untracked changes as porcelain status lines.

        Never raises for a bad repository: a missing path or broken metadata
        becomes a failed StatusEntry. A git process killed for running past
        the timeout is reported as TIMED_OUT.
        """
        try:
            repo = self._open()
        except (NoSuchPathError, InvalidGitRepositoryError) as e:
            self._logger.debug("Stale repository path %s: %r", self._path, e)
            return StatusEntry.failed(self._path, FailureKind.STALE_PATH,
                                      "No longer a git repository")

        started = time.monotonic()
        try:
            output = self._run_status(repo)
            branch = self._branch_name(repo)
        except GitCommandError as e:
            if self._was_killed(e, time.monotonic() - started):
                self._logger.debug("git status killed in %s after %ss", self._path, self._timeout)
                return StatusEntry.failed(self._path, FailureKind.TIMED_OUT,
                                          f"git status killed after {self._timeout:g}s")
            reason = (e.stderr or '').strip() or str(e)
            self._logger.debug("git status failed in %s: %s", self._path, reason)
            return StatusEntry.failed(self._path, FailureKind.QUERY_FAILED, reason)
        except (GitError, OSError) as e:
            self._logger.debug("git status failed in %s: %r", self._path, e)
            return StatusEntry.failed(self._path, FailureKind.QUERY_FAILED, str(e))
        finally:
            repo.close()

        lines = tuple(line for line in output.splitlines() if line)
        return StatusEntry(self._path, lines, branch=branch)

    def _was_killed(self, error: GitCommandError, elapsed: float) -> bool:
        if self._timeout is None:
            return False
        return KILLED_MARKER in (error.stderr or '') or elapsed >= self._timeout

    @staticmethod
    def _branch_name(repo: Repo) -> str | None:
        """Name of the checked-out branch, or None if HEAD is detached or unreadable."""
        try:
            if repo.head.is_detached:
                return None
            return repo.active_branch.name
        except (GitError, TypeError, ValueError):
            return None

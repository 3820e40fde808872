"""Repository scanner: finds git repos under a directory."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from pygit_global.errors import BaseDirectoryError

GIT_DIR = '.git'

logger = logging.getLogger(__name__)


class RepositoryScanner:
    """Responsible for finding git repositories"""

    def __init__(self, ignore_patterns: Iterable[str] = None):
        """Create a scanner that skips directories named exactly like an ignore pattern."""
        self.ignore_patterns = frozenset(p for p in (ignore_patterns or ()) if p)

    def scan(self, base: Path) -> list[Path]:
        """Return every repository root under base, de-duplicated and sorted."""
        base = Path(base).expanduser()
        if not base.is_dir():
            raise BaseDirectoryError(f"Base directory does not exist or is not a directory: {base}")
        base = base.absolute()
        logger.info("Scanning for git repositories under %s", base)
        repos = sorted(set(self.find_repositories(base)))
        logger.info("Found %d repositories under %s", len(repos), base)
        return repos

    def find_repositories(self, base: Path) -> Iterator[Path]:
        """Yield repository roots, pruning ignored subtrees and never following symlinks."""
        for dirpath, dirnames, _filenames in os.walk(base, onerror=self._on_walk_error, followlinks=False):
            current = Path(dirpath)

            if self._is_repository_root(current, dirnames):
                yield current
                dirnames.clear()
                continue

            dirnames[:] = [d for d in dirnames if not self._should_ignore(d)]

    def _is_repository_root(self, directory: Path, dirnames: list[str]) -> bool:
        """Return True if directory holds a real .git directory (not a symlink or gitfile)."""
        return GIT_DIR in dirnames and not (directory / GIT_DIR).is_symlink()

    def _should_ignore(self, name: str) -> bool:
        """Return True if a directory name exactly matches an ignore pattern."""
        return name in self.ignore_patterns

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.warning("Skipping unreadable directory %s: %s", error.filename, error.strerror or error)

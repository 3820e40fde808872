"""PathCache: the persisted list of repository roots found by the last scan."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from datetime import datetime, timedelta
from pathlib import Path
from tempfile import NamedTemporaryFile

from platformdirs import user_cache_dir

from pygit_global.errors import CachePersistError, CacheUnavailable

APP_NAME = 'pygit-global'
CACHE_FILENAME = 'repos.txt'


def default_cache_path() -> Path:
    """Return the per-user cache file location (e.g. ~/.cache/pygit-global/repos.txt)."""
    return Path(user_cache_dir(APP_NAME, appauthor=False)) / CACHE_FILENAME


class PathCache:
    """Snapshot of repository paths, replaced wholesale on every scan"""

    def __init__(self, cache_file: Path = None):
        """Create a cache backed by cache_file (default: the per-user cache location)."""
        self.cache_file = Path(cache_file) if cache_file else default_cache_path()
        self._logger = logging.getLogger(__name__)

    def exists(self) -> bool:
        """Return True if a previous scan has been saved."""
        return self.cache_file.is_file()

    def load(self) -> list[Path]:
        """Return cached repository paths in saved order.

        Raises CacheUnavailable if no scan has been saved or the file cannot be read.
        """
        try:
            text = self.cache_file.read_text(encoding='utf-8')
        except FileNotFoundError as e:
            raise CacheUnavailable(f"No repository cache at {self.cache_file}; run a scan first") from e
        except OSError as e:
            raise CacheUnavailable(f"Could not read repository cache {self.cache_file}: {e}") from e

        paths = [Path(line) for line in text.splitlines() if line.strip()]
        self._logger.debug("Loaded %d cached repositories from %s", len(paths), self.cache_file)
        return paths

    def save(self, paths: Iterable[Path]) -> None:
        """Atomically replace the cache with paths.

        The new contents go to a temporary file next to the cache, which is then
        renamed over it with os.replace(). On failure the temporary file is
        removed and the previous cache is left as it was.

        Raises CachePersistError if the cache cannot be written.
        """
        tmp_path: Path | None = None
        try:
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode='w',
                encoding='utf-8',
                dir=self.cache_file.parent,
                prefix=f'.{self.cache_file.name}.',
                suffix='.tmp',
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
                for path in paths:
                    f.write(f"{path}\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.cache_file)
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise CachePersistError(f"Failed to write repository cache {self.cache_file}: {e}") from e

        self._logger.debug("Saved repository cache to %s", self.cache_file)

    def age(self) -> timedelta | None:
        """Time since the cache was last written, or None if there is no cache."""
        try:
            mtime = self.cache_file.stat().st_mtime
        except OSError:
            return None
        return datetime.now() - datetime.fromtimestamp(mtime)

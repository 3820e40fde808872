"""Domain models: enums, dataclasses, and configuration."""

from __future__ import annotations

import os
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum, auto
from pathlib import Path
from typing import Any

from pygit_global.cache import default_cache_path


class FailureKind(Enum):
    """Why a single repository could not report its status"""
    STALE_PATH = auto()
    QUERY_FAILED = auto()
    TIMED_OUT = auto()


@dataclass(frozen=True)
class StatusEntry:
    """Outcome of one status query: status lines, or a failure"""
    repo_path: Path
    lines: tuple[str, ...] = ()
    failure: FailureKind | None = None
    details: str = ""
    branch: str | None = None

    @classmethod
    def failed(cls, repo_path: Path, failure: FailureKind, details: str) -> StatusEntry:
        """Build a failure entry for the given repository."""
        return cls(repo_path, (), failure, details)

    @property
    def ok(self) -> bool:
        """Return True if the query completed."""
        return self.failure is None

    @property
    def is_clean(self) -> bool:
        """Return True if the query completed and reported nothing."""
        return self.ok and not self.lines

    @property
    def has_changes(self) -> bool:
        """Return True if the query completed and reported at least one line."""
        return self.ok and bool(self.lines)

    def __str__(self) -> str:
        if not self.ok:
            return f"{self.repo_path}: {self.failure.name} ({self.details})"
        if self.is_clean:
            return f"{self.repo_path}: clean"
        return f"{self.repo_path}: {len(self.lines)} change(s)"


@dataclass
class Report:
    """Ordered per-repository results of one aggregation run"""
    entries: list[StatusEntry] = field(default_factory=list)

    def __iter__(self) -> Iterator[StatusEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def paths(self) -> list[Path]:
        """Repository paths in report order."""
        return [entry.repo_path for entry in self.entries]

    def clean(self) -> list[StatusEntry]:
        """Entries for repositories with nothing to report."""
        return [entry for entry in self.entries if entry.is_clean]

    def dirty(self) -> list[StatusEntry]:
        """Entries for repositories with working tree, staged, or untracked changes."""
        return [entry for entry in self.entries if entry.has_changes]

    def failures(self) -> list[StatusEntry]:
        """Entries whose status query failed."""
        return [entry for entry in self.entries if not entry.ok]

    def has_failures(self) -> bool:
        """Return True if any repository failed to report."""
        return any(not entry.ok for entry in self.entries)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for JSON output."""
        return {
            'repos_queried': len(self.entries),
            'repos': [
                {
                    'path': str(e.repo_path),
                    'state': 'failed' if not e.ok else ('clean' if e.is_clean else 'dirty'),
                    'lines': list(e.lines),
                    'failure': e.failure.name if e.failure else None,
                    'details': e.details,
                    'branch': e.branch,
                }
                for e in self.entries
            ],
            'has_failures': self.has_failures(),
        }


@dataclass(frozen=True)
class CacheInfo:
    """Summary shown by the info command"""
    version: str
    repo_count: int
    basedir: Path
    ignore_patterns: tuple[str, ...]
    cache_file: Path
    cache_age: timedelta | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for JSON output."""
        return {
            'version': self.version,
            'repo_count': self.repo_count,
            'basedir': str(self.basedir),
            'ignore_patterns': list(self.ignore_patterns),
            'cache_file': str(self.cache_file),
            'cache_age_seconds': self.cache_age.total_seconds() if self.cache_age is not None else None,
        }


@dataclass(frozen=True)
class GlobalConfig:
    """Configuration for scan and status operations"""
    basedir: Path = field(default_factory=Path.home)
    ignore_patterns: tuple[str, ...] = ()
    cache_file: Path = field(default_factory=default_cache_path)
    max_workers: int = field(default_factory=lambda: min(os.cpu_count() or 4, 8))
    timeout: float | None = 30.0
    verbose: bool = False
    json_output: bool = False
    show_clean: bool = False

    def with_updates(self, **kwargs) -> GlobalConfig:
        """Return a new GlobalConfig with the given fields replaced."""
        current = {f.name: getattr(self, f.name) for f in self.__dataclass_fields__.values()}
        current.update(kwargs)
        return GlobalConfig(**current)

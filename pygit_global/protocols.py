"""Protocols for dependency injection."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pygit_global.models import StatusEntry


class RepositoryHandle(Protocol):
    """Protocol for per-repository status queries"""

    def query_status(self) -> StatusEntry: ...

    @property
    def path(self) -> Path: ...


class OutputHandler(Protocol):
    """Protocol for handling output"""

    def info(self, message: str, indent: int = 0) -> None: ...
    def success(self, message: str, indent: int = 0) -> None: ...
    def warning(self, message: str, indent: int = 0) -> None: ...
    def error(self, message: str, indent: int = 0) -> None: ...
    def status_line(self, line: str) -> None: ...
    def section(self, title: str) -> None: ...
    def debug(self, message: str) -> None: ...

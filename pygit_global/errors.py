"""Operation-level exceptions.

Problems with a single repository are never raised; they are recorded on
its StatusEntry instead.
"""

from __future__ import annotations


class PygitGlobalError(Exception):
    """Base class for pygit-global errors"""


class CacheUnavailable(PygitGlobalError):
    """No repository cache exists yet; a scan is needed."""


class CachePersistError(PygitGlobalError):
    """The repository cache could not be written. The previous cache is intact."""


class BaseDirectoryError(PygitGlobalError):
    """The base directory to scan does not exist or is not a directory."""

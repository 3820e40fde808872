"""
pygit-global: Git Repository Status Across a Whole Directory Tree

Discovers git repositories under a base directory, caches their paths, and
reports the combined status of all of them from anywhere.
"""

from colorama import init as colorama_init

colorama_init(autoreset=True)

__version__ = "0.3.0"

# Re-export public API so `from pygit_global import X` keeps working.
from pygit_global.aggregator import StatusAggregator  # noqa: E402
from pygit_global.cache import PathCache, default_cache_path  # noqa: E402
from pygit_global.cli import main  # noqa: E402
from pygit_global.config import (  # noqa: E402
    create_argument_parser,
    load_config_file,
    read_git_config,
    resolve_config,
    split_patterns,
)
from pygit_global.errors import (  # noqa: E402
    BaseDirectoryError,
    CachePersistError,
    CacheUnavailable,
    PygitGlobalError,
)
from pygit_global.models import (  # noqa: E402
    CacheInfo,
    FailureKind,
    GlobalConfig,
    Report,
    StatusEntry,
)
from pygit_global.output import (  # noqa: E402
    SECTION_WIDTH,
    ConsoleOutputHandler,
    NullOutputHandler,
)
from pygit_global.protocols import OutputHandler, RepositoryHandle  # noqa: E402
from pygit_global.reporter import ReportPrinter, format_age  # noqa: E402
from pygit_global.repository import GitPythonRepository  # noqa: E402
from pygit_global.scanner import RepositoryScanner  # noqa: E402

__all__ = [
    "__version__",
    # Models
    "CacheInfo",
    "FailureKind",
    "GlobalConfig",
    "Report",
    "StatusEntry",
    # Errors
    "BaseDirectoryError",
    "CachePersistError",
    "CacheUnavailable",
    "PygitGlobalError",
    # Protocols
    "OutputHandler",
    "RepositoryHandle",
    # Implementations
    "GitPythonRepository",
    "ConsoleOutputHandler",
    "NullOutputHandler",
    "SECTION_WIDTH",
    # Services
    "PathCache",
    "RepositoryScanner",
    "StatusAggregator",
    "ReportPrinter",
    "default_cache_path",
    "format_age",
    # Config / CLI
    "create_argument_parser",
    "load_config_file",
    "read_git_config",
    "resolve_config",
    "split_patterns",
    "main",
]

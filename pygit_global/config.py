"""Configuration: argument parser, config file loader, and git config reader."""

from __future__ import annotations

import argparse
import configparser
import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from git import GitConfigParser
from git.config import get_config_path

from pygit_global.models import GlobalConfig

try:
    import tomllib
except ModuleNotFoundError:
    try:
        import tomli as tomllib  # type: ignore[no-redef]
    except ImportError:
        tomllib = None  # type: ignore[assignment]

CONFIG_FILENAME = '.pygit-global.toml'
GIT_SECTION = 'global'
SETTING_BASEDIR = 'basedir'
SETTING_IGNORED = 'ignore'
COMMANDS = ('scan', 'list', 'status', 'info')
DEFAULT_COMMAND = 'status'
COMMAND_IGNORE_DEST = 'command_ignore_patterns'

logger = logging.getLogger(__name__)


def _common_options(ignore_dest: str) -> argparse.ArgumentParser:
    """Options accepted both before and after the subcommand.

    SUPPRESS keeps a subparser from overwriting a value given before it.
    --ignore collects into ignore_dest so both positions can be merged.
    """
    common = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
    common.add_argument('--basedir',
                        help='Directory to scan (default: git config global.basedir, else home)')
    common.add_argument('--ignore', action='append', dest=ignore_dest, metavar='NAME',
                        help='Directory name to skip while scanning (can specify multiple, '
                             'before or after the command)')
    common.add_argument('--cache-file', dest='cache_file',
                        help='Path of the repository cache file')
    common.add_argument('--workers', type=int, dest='max_workers',
                        help='Max parallel status queries (default: min(cpu_count, 8))')
    common.add_argument('--timeout', type=float,
                        help='Seconds to wait for one repository (default: 30, 0=no limit)')
    common.add_argument('--show-clean', dest='show_clean', action='store_true',
                        help='Also list repositories without changes')
    common.add_argument('--json', dest='json_output', action='store_true',
                        help='Output results as JSON (suppresses normal output)')
    common.add_argument('--verbose', action='store_true',
                        help='Verbose output')
    common.add_argument('--config', dest='config_path',
                        help=f'Path to config file (default: ~/{CONFIG_FILENAME})')
    return common


def create_argument_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with all pygit-global subcommands and flags."""
    # Lazy import to avoid circular dependency with __init__.py
    from pygit_global import __version__

    parser = argparse.ArgumentParser(
        prog='pygit-global',
        description="Find every git repository under a directory and report their status",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        parents=[_common_options('ignore_patterns')],
        epilog="""
Examples:
  %(prog)s scan                          # Find repositories and cache them
  %(prog)s status                        # Status of every cached repository
  %(prog)s list                          # Show cached repositories
  %(prog)s scan --ignore node_modules    # Skip directories by name

--ignore may be repeated before and after the command; all values are used.
        """
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    common = _common_options(COMMAND_IGNORE_DEST)
    subparsers.add_parser('scan', parents=[common], help='Scan the base directory and rebuild the cache')
    subparsers.add_parser('list', parents=[common], help='List cached repositories')
    subparsers.add_parser('status', parents=[common], help='Show status of every cached repository (default)')
    subparsers.add_parser('info', parents=[common], help='Show configuration and cache information')

    return parser


def load_config_file(config_path: str | None = None) -> dict[str, Any]:
    """Load ~/.pygit-global.toml or an explicit path.

    Returns empty dict if not found, unparsable, or tomllib is unavailable.
    """
    path = Path(config_path).expanduser() if config_path else Path.home() / CONFIG_FILENAME
    if not path.is_file():
        if config_path:
            logger.warning("Config file '%s' not found. Ignoring.", config_path)
        return {}
    if tomllib is None:
        logger.warning("Found %s but tomllib/tomli not available (Python 3.11+ or pip install tomli). Ignoring.",
                       path)
        return {}
    try:
        with open(path, 'rb') as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to parse %s: %s", path, e)
        return {}


def split_patterns(raw: str | Iterable[str] | None) -> tuple[str, ...]:
    """Normalize ignore patterns from a comma-separated string or a list.

    Whitespace is trimmed, empty entries dropped, duplicates removed (first wins).
    """
    if not raw:
        return ()
    items = raw.split(',') if isinstance(raw, str) else raw
    patterns: list[str] = []
    for item in items:
        pattern = str(item).strip()
        if pattern and pattern not in patterns:
            patterns.append(pattern)
    return tuple(patterns)


def read_git_config(config_files: Iterable[str | os.PathLike] = None) -> dict[str, Any]:
    """Read global.basedir and global.ignore from the user's git configuration.

    Returns only the keys that are set. A missing or unreadable git config
    yields an empty dict.
    """
    if config_files is None:
        config_files = [get_config_path('global'), get_config_path('user')]
    files = [str(f) for f in config_files if Path(f).is_file()]
    if not files:
        return {}

    settings: dict[str, Any] = {}
    try:
        reader = GitConfigParser(files, read_only=True)
        try:
            basedir = reader.get_value(GIT_SECTION, SETTING_BASEDIR, '')
            ignored = reader.get_value(GIT_SECTION, SETTING_IGNORED, '')
        finally:
            reader.release()
    except (OSError, configparser.Error) as e:
        logger.debug("Could not read git config %s: %s", files, e)
        return {}

    if basedir:
        settings['basedir'] = str(basedir)
    if ignored:
        settings['ignore_patterns'] = split_patterns(str(ignored))
    return settings


def resolve_config(
    args: argparse.Namespace,
    file_config: dict[str, Any] = None,
    git_config: dict[str, Any] = None,
) -> GlobalConfig:
    """Merge CLI flags over the config file over git config over defaults."""
    file_config = file_config or {}
    git_config = git_config or {}

    def effective(key: str, default: Any = None) -> Any:
        value = getattr(args, key, None)
        if value is not None:
            return value
        if key in file_config:
            return file_config[key]
        if key in git_config:
            return git_config[key]
        return default

    config = GlobalConfig()
    updates: dict[str, Any] = {}

    basedir = effective('basedir')
    if basedir:
        updates['basedir'] = Path(basedir).expanduser().absolute()

    # --ignore flags on both sides of the command add up, and together
    # replace file/git patterns rather than extending them
    cli_ignored = [*(getattr(args, 'ignore_patterns', None) or []),
                   *(getattr(args, COMMAND_IGNORE_DEST, None) or [])]
    updates['ignore_patterns'] = split_patterns(cli_ignored or effective('ignore_patterns'))

    cache_file = effective('cache_file')
    if cache_file:
        updates['cache_file'] = Path(cache_file).expanduser()

    max_workers = effective('max_workers')
    if max_workers is not None:
        updates['max_workers'] = max(1, int(max_workers))

    timeout = effective('timeout')
    if timeout is not None:
        updates['timeout'] = float(timeout) if float(timeout) > 0 else None

    for flag in ('verbose', 'json_output', 'show_clean'):
        updates[flag] = bool(effective(flag, False))

    return config.with_updates(**updates)

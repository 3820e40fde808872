"""CLI entry point: main() function and subcommands."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from colorama import Fore, Style

from pygit_global.aggregator import StatusAggregator
from pygit_global.cache import PathCache
from pygit_global.config import (
    DEFAULT_COMMAND,
    create_argument_parser,
    load_config_file,
    read_git_config,
    resolve_config,
)
from pygit_global.errors import BaseDirectoryError, CachePersistError, CacheUnavailable
from pygit_global.models import CacheInfo, GlobalConfig, Report
from pygit_global.output import ConsoleOutputHandler, NullOutputHandler
from pygit_global.protocols import OutputHandler
from pygit_global.reporter import ReportPrinter
from pygit_global.repository import GitPythonRepository
from pygit_global.scanner import RepositoryScanner

NO_CACHE_HINT = "No repository cache found. Run `pygit-global scan` first."


def run_scan(config: GlobalConfig, cache: PathCache) -> list[Path]:
    """Scan the base directory and replace the cache with what was found."""
    scanner = RepositoryScanner(config.ignore_patterns)
    repos = scanner.scan(config.basedir)
    cache.save(repos)
    return repos


def run_status(config: GlobalConfig, cache: PathCache) -> Report:
    """Query every cached repository and return the ordered report."""
    handles = [GitPythonRepository(path, timeout=config.timeout) for path in cache.load()]
    aggregator = StatusAggregator(
        max_workers=config.max_workers,
        timeout=config.timeout,
        show_progress=not config.json_output and sys.stderr.isatty(),
    )
    return aggregator.aggregate(handles)


def build_info(config: GlobalConfig, cache: PathCache) -> CacheInfo:
    """Collect configuration and cache details for the info command."""
    from pygit_global import __version__

    try:
        repo_count = len(cache.load())
    except CacheUnavailable:
        repo_count = 0
    return CacheInfo(
        version=__version__,
        repo_count=repo_count,
        basedir=config.basedir,
        ignore_patterns=config.ignore_patterns,
        cache_file=cache.cache_file,
        cache_age=cache.age(),
    )


def _dispatch(command: str, config: GlobalConfig, output: OutputHandler) -> int:
    """Run one subcommand and return its exit code."""
    cache = PathCache(config.cache_file)
    printer = ReportPrinter(output)

    if command == 'scan':
        output.info(f"Scanning for git repos under {config.basedir}; this may take a while...")
        repos = run_scan(config, cache)
        if config.json_output:
            print(json.dumps([str(p) for p in repos], indent=2))
        else:
            printer.print_scan_summary(repos, config.basedir)
        return 0

    if command == 'info':
        info = build_info(config, cache)
        if config.json_output:
            print(json.dumps(info.to_dict(), indent=2))
        else:
            printer.print_info(info)
        return 0

    try:
        if command == 'list':
            repos = cache.load()
            if config.json_output:
                print(json.dumps([str(p) for p in repos], indent=2))
            else:
                printer.print_list(repos)
            return 0

        report = run_status(config, cache)
    except CacheUnavailable as e:
        logging.getLogger(__name__).debug("%s", e)
        if config.json_output:
            print(json.dumps({'error': NO_CACHE_HINT}, indent=2))
        else:
            output.warning(NO_CACHE_HINT)
        return 0

    if config.json_output:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        printer.print_status(report, show_clean=config.show_clean)
    return 1 if report.has_failures() else 0


def main(argv: list[str] | None = None):
    """Main entry point"""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    command = args.command or DEFAULT_COMMAND

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, 'verbose', False) else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    file_config = load_config_file(getattr(args, 'config_path', None))
    config = resolve_config(args, file_config, read_git_config())

    output = NullOutputHandler() if config.json_output else ConsoleOutputHandler(verbose=config.verbose)
    output.debug(f"Effective configuration: {config}")

    try:
        sys.exit(_dispatch(command, config, output))

    except (BaseDirectoryError, CachePersistError) as e:
        if config.json_output:
            print(json.dumps({'error': str(e)}, indent=2))
        else:
            print(f"{Fore.RED}Error: {e}{Style.RESET_ALL}")
        sys.exit(1)
    except KeyboardInterrupt:
        if not config.json_output:
            output.warning("\n\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        if config.json_output:
            print(json.dumps({'error': str(e)}, indent=2))
        else:
            output.error(f"\nUnexpected error: {e}")
            if config.verbose:
                import traceback
                traceback.print_exc()
        sys.exit(1)

"""ReportPrinter: renders reports, repository lists, and cache info."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta
from pathlib import Path

from pygit_global.models import CacheInfo, Report, StatusEntry
from pygit_global.protocols import OutputHandler


def format_age(age: timedelta | None) -> str:
    """Render a cache age like '3d 4h 12m', or 'n/a' when there is no cache."""
    if age is None:
        return "n/a"
    total_minutes = int(age.total_seconds() // 60)
    days, remainder = divmod(total_minutes, 24 * 60)
    hours, minutes = divmod(remainder, 60)
    if days:
        return f"{days}d {hours}h {minutes}m"
    if hours:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


class ReportPrinter:
    """Writes command results to an output handler"""

    def __init__(self, output: OutputHandler):
        """Create a printer that writes to the given output handler."""
        self.output = output

    def print_status(self, report: Report, show_clean: bool = False) -> None:
        """Print each repository with changes, followed by its status lines.

        Failed repositories are always shown; clean ones only with show_clean.
        """
        for entry in report:
            if entry.has_changes:
                self._print_changes(entry)
            elif not entry.ok:
                self._print_failure(entry)
            elif show_clean:
                self.output.section(self._header(entry))
                self.output.success("clean", indent=1)
                self.output.info("")

        dirty = len(report.dirty())
        failed = len(report.failures())
        summary = f"{len(report)} repositories: {dirty} with changes, {failed} failed"
        if failed:
            self.output.warning(summary)
        else:
            self.output.info(summary)

    @staticmethod
    def _header(entry: StatusEntry) -> str:
        if entry.branch:
            return f"{entry.repo_path} ({entry.branch})"
        return str(entry.repo_path)

    def _print_changes(self, entry: StatusEntry) -> None:
        self.output.section(self._header(entry))
        for line in entry.lines:
            self.output.status_line(line)
        self.output.info("")

    def _print_failure(self, entry: StatusEntry) -> None:
        self.output.section(str(entry.repo_path))
        self.output.error(f"{entry.failure.name.lower().replace('_', ' ')}: {entry.details}", indent=1)
        self.output.info("")

    def print_list(self, paths: Sequence[Path]) -> None:
        """Print one repository path per line."""
        for path in paths:
            self.output.info(str(path))

    def print_scan_summary(self, paths: Sequence[Path], basedir: Path) -> None:
        """Report how many repositories a scan found."""
        if not paths:
            self.output.warning(f"No git repositories found in {basedir}")
            return
        self.output.success(f"Found {len(paths)} repositories.")
        self.output.info("Use `pygit-global list` to show them.")

    def print_info(self, info: CacheInfo) -> None:
        """Print the configuration and cache summary."""
        self.output.section(f"pygit-global {info.version}")
        self.output.info(f"Number of repos: {info.repo_count}")
        self.output.info(f"Base directory: {info.basedir}")
        if info.ignore_patterns:
            self.output.info("Ignored patterns:")
            for pattern in info.ignore_patterns:
                self.output.info(pattern, indent=1)
        else:
            self.output.info("Ignored patterns: (none)")
        self.output.info(f"Cache file: {info.cache_file}")
        self.output.info(f"Cache file age: {format_age(info.cache_age)}")

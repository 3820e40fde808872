"""Output handler implementations: console and null."""

from __future__ import annotations

from colorama import Fore, Style
from tqdm import tqdm

SECTION_WIDTH = 50
INDENT = "  "

UNTRACKED_CODE = "??"
UNMERGED_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})


def status_color(line: str) -> str:
    """Pick a colour for one porcelain status line from its two-letter XY code.

    Untracked and unmerged entries are red, fully staged ones green, and
    anything with unstaged changes yellow.
    """
    code = line[:2]
    if code == UNTRACKED_CODE or code in UNMERGED_CODES:
        return Fore.RED
    if code[1:] == " ":
        return Fore.GREEN
    return Fore.YELLOW


class ConsoleOutputHandler:
    """Writes coloured lines through tqdm so an active progress bar stays intact"""

    def __init__(self, verbose: bool = False):
        """Create a console handler. Set verbose=True to enable debug output."""
        self.verbose = verbose

    @staticmethod
    def _write(message: str, indent: int = 0, color: str = "") -> None:
        if color:
            message = f"{color}{message}{Style.RESET_ALL}"
        tqdm.write(INDENT * indent + message)

    def info(self, message: str, indent: int = 0) -> None:
        self._write(message, indent)

    def success(self, message: str, indent: int = 0) -> None:
        self._write(message, indent, Fore.GREEN)

    def warning(self, message: str, indent: int = 0) -> None:
        self._write(message, indent, Fore.YELLOW)

    def error(self, message: str, indent: int = 0) -> None:
        self._write(message, indent, Fore.RED)

    def status_line(self, line: str) -> None:
        """Print a porcelain status line coloured by its change kind."""
        self._write(line, color=status_color(line))

    def section(self, title: str) -> None:
        """Print a bright repository header over a divider line."""
        self._write(title, color=Style.BRIGHT)
        self._write("-" * SECTION_WIDTH)

    def debug(self, message: str) -> None:
        if self.verbose:
            self._write(f"[DEBUG] {message}", color=Fore.CYAN)


class NullOutputHandler:
    """Silent output handler for JSON mode."""

    def info(self, message: str, indent: int = 0) -> None:
        pass

    def success(self, message: str, indent: int = 0) -> None:
        pass

    def warning(self, message: str, indent: int = 0) -> None:
        pass

    def error(self, message: str, indent: int = 0) -> None:
        pass

    def status_line(self, line: str) -> None:
        pass

    def section(self, title: str) -> None:
        pass

    def debug(self, message: str) -> None:
        pass

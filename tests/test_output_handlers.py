"""Tests for output handler implementations."""

from colorama import Fore

from pygit_global import ConsoleOutputHandler, NullOutputHandler
from pygit_global.output import status_color


class TestNullOutputHandler:
    """NullOutputHandler should accept all calls silently."""

    def test_all_methods(self, capsys):
        handler = NullOutputHandler()
        handler.info("test", indent=2)
        handler.success("test")
        handler.warning("test", indent=1)
        handler.error("test")
        handler.section("title")
        handler.status_line("?? x.txt")
        handler.debug("test")
        captured = capsys.readouterr()
        assert captured.out == ""


class TestConsoleOutputHandler:
    def test_info_prints(self, capsys):
        handler = ConsoleOutputHandler()
        handler.info("hello")
        captured = capsys.readouterr()
        assert "hello" in captured.out

    def test_info_with_indent(self, capsys):
        handler = ConsoleOutputHandler()
        handler.info("hello", indent=2)
        captured = capsys.readouterr()
        assert captured.out.startswith("    ")  # 2 * "  "

    def test_status_line_leading_space_kept(self, capsys):
        handler = ConsoleOutputHandler()
        handler.info(" M file.py")
        captured = capsys.readouterr()
        assert captured.out == " M file.py\n"

    def test_colored_levels(self, capsys):
        handler = ConsoleOutputHandler()
        handler.success("ok")
        handler.warning("warn")
        handler.error("err")
        captured = capsys.readouterr()
        for text in ("ok", "warn", "err"):
            assert text in captured.out

    def test_section_prints(self, capsys):
        handler = ConsoleOutputHandler()
        handler.section("/h/repo")
        captured = capsys.readouterr()
        assert "/h/repo" in captured.out
        assert "---" in captured.out

    def test_debug_verbose(self, capsys):
        handler = ConsoleOutputHandler(verbose=True)
        handler.debug("debugging")
        captured = capsys.readouterr()
        assert "debugging" in captured.out

    def test_debug_non_verbose(self, capsys):
        handler = ConsoleOutputHandler(verbose=False)
        handler.debug("debugging")
        captured = capsys.readouterr()
        assert captured.out == ""

    def test_status_line_keeps_line_intact(self, capsys):
        handler = ConsoleOutputHandler()
        handler.status_line("?? new.txt")
        captured = capsys.readouterr()
        assert "?? new.txt" in captured.out
        assert captured.out.startswith(Fore.RED)


class TestStatusColor:
    def test_untracked(self):
        assert status_color("?? x.txt") == Fore.RED

    def test_unmerged(self):
        assert status_color("UU conflict.txt") == Fore.RED

    def test_fully_staged(self):
        assert status_color("A  staged.txt") == Fore.GREEN
        assert status_color("R  old -> new") == Fore.GREEN

    def test_unstaged_changes(self):
        assert status_color(" M tracked.txt") == Fore.YELLOW
        assert status_color("MM both.txt") == Fore.YELLOW

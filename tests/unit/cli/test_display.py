"""Unit tests for cli/display.py.

Tests for the Rich tables and reports printed by the sync and validate
commands.
"""

import io

import pytest
from dirdoc.cli.display import (
    create_entries_table,
    create_issues_table,
    order_for_display,
    print_diff,
    print_validation_issues,
    simplify_path,
)
from dirdoc.core.diff import DiffEntry, DiffResult
from dirdoc.core.theme import ThemeColors, get_rich_theme, get_theme
from dirdoc.core.validator import DescriptionIssue, ValidationResult
from rich.console import Console


def _render(table: object) -> str:
    buf = io.StringIO()
    Console(theme=get_theme(), file=buf, color_system=None, width=120).print(table)
    return buf.getvalue()


def _capture_output(func: object, *args: object, **kwargs: object) -> str:
    """Capture Rich console output by temporarily replacing the consoles.

    Patches the module-level consoles used by display functions and
    captures stdout and stderr output to one StringIO buffer.
    """
    import dirdoc.cli.display as display_mod
    import dirdoc.utils.formatting as fmt_mod

    buf = io.StringIO()
    test_console = Console(theme=get_theme(), file=buf, color_system=None, width=120)

    originals = (display_mod.console, fmt_mod.console, fmt_mod.err_console)
    display_mod.console = test_console
    fmt_mod.console = test_console
    fmt_mod.err_console = test_console
    try:
        func(*args, **kwargs)  # type: ignore[operator]
    finally:
        display_mod.console, fmt_mod.console, fmt_mod.err_console = originals

    return buf.getvalue()


# ===========================================================================
# simplify_path
# ===========================================================================


class TestSimplifyPath:
    """Tests for simplify_path."""

    @pytest.mark.parametrize(
        ("path", "root_path", "expected"),
        [
            ("/project/src/app", "/project/", "src/app"),
            ("/project/README.md", "/project/", "README.md"),
            ("/other/src/app", "/project/", "/other/src/app"),
            ("/project/src/app", "", "src/app"),
            ("/project/README.md", "", "README.md"),
            ("/project", "", "/project"),
            ("", "", ""),
        ],
    )
    def test_simplify_path(self, path: str, root_path: str, expected: str) -> None:
        """The root prefix is removed when present."""
        assert simplify_path(path, root_path) == expected


# ===========================================================================
# order_for_display
# ===========================================================================


class TestOrderForDisplay:
    """Tests for order_for_display."""

    def test_directories_first_then_path(self) -> None:
        """Directories come first, each group sorted by path."""
        items = [
            DiffEntry("/p/b.txt", "b.txt", "file"),
            DiffEntry("/p/Zeta", "Zeta", "directory"),
            DiffEntry("/p/A.txt", "A.txt", "file"),
            DiffEntry("/p/alpha", "alpha", "directory"),
        ]

        ordered = order_for_display(items)

        assert [i.path for i in ordered] == ["/p/alpha", "/p/Zeta", "/p/A.txt", "/p/b.txt"]


# ===========================================================================
# Tables
# ===========================================================================


class TestCreateEntriesTable:
    """Tests for create_entries_table."""

    def test_columns(self) -> None:
        """Table has Type and Path columns."""
        table = create_entries_table("New Items", [], "/p/", "added")
        assert [col.header for col in table.columns] == ["Type", "Path"]

    def test_rows(self) -> None:
        """Each entry becomes a row with its relative path."""
        entries = [
            DiffEntry("/p/src/new.py", "new.py", "file"),
            DiffEntry("/p/lib", "lib", "directory"),
        ]

        table = create_entries_table("New Items", entries, "/p/", "added")
        output = _render(table)

        assert table.row_count == 2
        assert "src/new.py" in output
        assert "/p/src" not in output
        assert output.index("lib") < output.index("src/new.py")

    def test_markup_in_names_escaped(self) -> None:
        """Bracketed names are shown literally."""
        entry = DiffEntry("/p/[id].tsx", "[id].tsx", "file")
        table = create_entries_table("New Items", [entry], "/p/", "added")
        assert "[id].tsx" in _render(table)

    @pytest.mark.parametrize(("style", "rgb"), [("added", "193;255;98"), ("removed", "245;50;99")])
    def test_paths_use_style(self, style: str, rgb: str) -> None:
        """Paths are coloured with the given theme style."""
        entry = DiffEntry("/p/new.txt", "new.txt", "file")
        buf = io.StringIO()
        Console(
            theme=get_rich_theme(ThemeColors()), file=buf, color_system="truecolor", width=120
        ).print(create_entries_table("Items", [entry], "/p/", style))

        assert f"\x1b[38;2;{rgb}m" in buf.getvalue()


class TestCreateIssuesTable:
    """Tests for create_issues_table."""

    def test_plain_columns(self) -> None:
        """Missing-description tables only show type and path."""
        table = create_issues_table("Missing Descriptions", [], "/p/")
        assert [col.header for col in table.columns] == ["Type", "Path"]

    def test_description_columns(self) -> None:
        """Short-description tables show the text and requirement."""
        issue = DescriptionIssue("/p/a.txt", "a.txt", "file", "Short", 10)

        table = create_issues_table("Short Descriptions", [issue], "/p/", show_description=True)
        output = _render(table)

        assert [col.header for col in table.columns] == [
            "Type",
            "Path",
            "Current Description",
            "Requirement",
        ]
        assert "Short" in output
        assert "at least 10 characters" in output


# ===========================================================================
# Reports
# ===========================================================================


class TestPrintDiff:
    """Tests for print_diff."""

    def test_in_sync_prints_nothing(self) -> None:
        """Nothing is printed when there are no changes."""
        output = _capture_output(print_diff, DiffResult((), (), (), ()), "/p/")
        assert output == ""

    def test_removed_and_new(self) -> None:
        """Removed and new items are listed in separate tables."""
        result = DiffResult(
            missing_in_actual=(DiffEntry("/p/util", "util", "directory"),),
            missing_in_recorded=(DiffEntry("/p/new.txt", "new.txt", "file"),),
            different_descriptions=(),
            short_or_missing_descriptions=(),
        )

        output = _capture_output(print_diff, result, "/p/")

        assert "1 item(s) removed" in output
        assert "Removed Items" in output
        assert "util" in output
        assert "1 item(s) on disk are not in the structure document" in output
        assert "New Items" in output
        assert "new.txt" in output


class TestPrintValidationIssues:
    """Tests for print_validation_issues."""

    def test_missing_and_short(self) -> None:
        """Both classes of issue are reported."""
        result = ValidationResult(
            without_description=(DescriptionIssue("/p/new.txt", "new.txt", "file"),),
            with_short_description=(
                DescriptionIssue("/p/docs", "docs", "directory", "Docs", 10),
            ),
        )

        output = _capture_output(print_validation_issues, result, "/p/")

        assert "1 item(s) have no description" in output
        assert "Missing Descriptions" in output
        assert "new.txt" in output
        assert "too short" in output
        assert "Short Descriptions" in output
        assert "at least 10 characters" in output

    def test_passed_prints_nothing(self) -> None:
        """A passing result prints nothing."""
        output = _capture_output(print_validation_issues, ValidationResult((), ()), "/p/")
        assert output == ""

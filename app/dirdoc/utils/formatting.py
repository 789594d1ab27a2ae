"""Shared Rich consoles and message helpers for the CLI.

Regular output goes to ``console`` (stdout); warnings and errors go to
``err_console`` (stderr) so that ``--json`` output stays parseable.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dirdoc.core.theme import get_theme


def make_console(stderr: bool = False) -> Console:
    """Create a themed console.

    Interactive terminals get truecolor so hex theme colours render
    exactly; otherwise Rich picks the colour system itself.
    """
    stream = sys.stderr if stderr else sys.stdout
    color_system = "truecolor" if stream.isatty() else None
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = make_console()
err_console = make_console(stderr=True)


def create_path_table(title: str, *extra_columns: str) -> Table:
    """Create a table with Type and Path columns, plus any extra columns."""
    table = Table(title=title, header_style="bold_header", border_style="border")
    table.add_column("Type", width=9)
    table.add_column("Path", no_wrap=True)
    for header in extra_columns:
        table.add_column(header)
    return table


def format_node_type(node_type: str) -> str:
    """Render a node type with its theme style; unknown types use the file style."""
    if node_type == "directory":
        return "[directory]directory[/]"
    return f"[file]{escape(node_type) or '-'}[/]"


def _emit(target: Console, style: str, message: str, label: str = "") -> None:
    prefix = f"[{style}]{label}[/] " if label else ""
    body = message if label else f"[{style}]{message}[/]"
    target.print(prefix + body)


def print_info(message: str) -> None:
    """Print an informational message to stdout in the info style."""
    _emit(console, "info", message)


def print_success(message: str) -> None:
    """Print a success message to stdout in the success style."""
    _emit(console, "success", message)


def print_warning(message: str) -> None:
    """Print a message to stderr behind a "Warning:" label."""
    _emit(err_console, "warning", message, label="Warning:")


def print_error(message: str) -> None:
    """Print a message to stderr behind an "Error:" label."""
    _emit(err_console, "error", message, label="Error:")

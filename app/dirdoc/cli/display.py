"""Shared Rich display functions for diff and validation reports.

Report entries are listed directories first, then files, each group
sorted by path without regard to case. Paths are shown relative to
the scanned root.
"""

from collections.abc import Iterable

from rich.markup import escape
from rich.table import Table

from dirdoc.core.diff import DiffEntry, DiffResult
from dirdoc.core.validator import DescriptionIssue, ValidationResult
from dirdoc.utils.formatting import (
    console,
    create_path_table,
    format_node_type,
    print_info,
    print_warning,
)


def simplify_path(path: str, root_path: str = "") -> str:
    """Strip the root prefix from a report path.

    Args:
        path: Report path such as ``/project/src/app``.
        root_path: Prefix to remove, such as ``/project/``. When empty,
            the first path segment is used.

    Returns:
        The path without the root prefix, or unchanged if it does not
        start with it.
    """
    if not root_path:
        parts = path.strip("/").split("/")
        if parts and parts[0]:
            root_path = f"/{parts[0]}/"

    if root_path and path.startswith(root_path):
        return path[len(root_path) :]
    return path


def order_for_display(
    items: Iterable[DiffEntry | DescriptionIssue],
) -> list[DiffEntry | DescriptionIssue]:
    """Order report items: directories first, then by path, case-insensitively."""
    return sorted(items, key=lambda i: (i.node_type != "directory", i.path.casefold()))


def create_entries_table(
    title: str, entries: Iterable[DiffEntry], root_path: str, style: str
) -> Table:
    """Create a table of added or removed nodes.

    Args:
        title: Table title.
        entries: Nodes to list.
        root_path: Root prefix stripped from each path.
        style: Theme style for the path column, ``added`` or ``removed``.

    Returns:
        Rich Table with one row per node.
    """
    table = create_path_table(title)
    for entry in order_for_display(entries):
        table.add_row(
            format_node_type(entry.node_type),
            f"[{style}]{escape(simplify_path(entry.path, root_path))}[/{style}]",
        )
    return table


def create_issues_table(
    title: str,
    issues: Iterable[DescriptionIssue],
    root_path: str,
    show_description: bool = False,
) -> Table:
    """Create a table of nodes with description problems.

    Args:
        title: Table title.
        issues: Nodes to list.
        root_path: Root prefix stripped from each path.
        show_description: Add the current description and the length
            requirement as columns.

    Returns:
        Rich Table with one row per node.
    """
    if show_description:
        table = create_path_table(title, "Current Description", "Requirement")
    else:
        table = create_path_table(title)

    for issue in order_for_display(issues):
        row = [
            format_node_type(issue.node_type),
            escape(simplify_path(issue.path, root_path)),
        ]
        if show_description:
            row.append(f"[muted]{escape(issue.description)}[/muted]")
            row.append(f"at least {issue.min_length} characters")
        table.add_row(*row)
    return table


def print_diff(result: DiffResult, root_path: str) -> None:
    """Print removed and newly found nodes.

    Args:
        result: Comparison result.
        root_path: Root prefix stripped from each path.
    """
    if result.missing_in_actual:
        print_info(
            f"{len(result.missing_in_actual)} item(s) removed from the structure document"
        )
        console.print(
            create_entries_table("Removed Items", result.missing_in_actual, root_path, "removed")
        )

    if result.missing_in_recorded:
        print_warning(
            f"{len(result.missing_in_recorded)} item(s) on disk are not in the structure document"
        )
        console.print(
            create_entries_table("New Items", result.missing_in_recorded, root_path, "added")
        )


def print_validation_issues(result: ValidationResult, root_path: str) -> None:
    """Print nodes with missing or too-short descriptions.

    Args:
        result: Validation result.
        root_path: Root prefix stripped from each path.
    """
    if result.without_description:
        print_warning(f"{len(result.without_description)} item(s) have no description")
        console.print(
            create_issues_table("Missing Descriptions", result.without_description, root_path)
        )

    if result.with_short_description:
        print_warning(
            f"{len(result.with_short_description)} item(s) have a description that is too short"
        )
        console.print(
            create_issues_table(
                "Short Descriptions",
                result.with_short_description,
                root_path,
                show_description=True,
            )
        )

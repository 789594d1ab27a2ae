"""Sync command implementation.

Scans the project and creates or updates the structure document.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from dirdoc.cli.display import print_diff, print_validation_issues
from dirdoc.core.config import ConfigError, load_config
from dirdoc.core.document import DocumentError, DocumentWriteError
from dirdoc.core.paths import get_document_path
from dirdoc.core.pipeline import SyncResult, sync_structure
from dirdoc.core.scanner import PathNotFoundError, ScanError
from dirdoc.utils.formatting import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Scan the project and update the structure document.",
    invoke_without_command=True,
)


def _result_to_dict(result: SyncResult) -> dict[str, object]:
    """Convert a sync result to a dictionary for JSON output."""
    return {
        "output": str(result.output_path),
        "created": result.created,
        "parse_failed": result.parse_failed,
        "nodes": result.tree.count(),
        "diff": result.diff.to_dict() if result.diff is not None else None,
        "validation": result.validation.to_dict() if result.validation is not None else None,
    }


def _save_message(result: SyncResult) -> str:
    """Pick the final status message for a sync run."""
    name = result.output_path.name
    if result.created:
        return f"Created {name}"
    if result.has_changes:
        return f"Updated {name}"
    return f"No changes to {name}"


@app.callback(invoke_without_command=True)
def sync_document(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to the configuration file (default: ./dirdoc.toml).",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Path to the structure document (default: ./dirdoc.json).",
        ),
    ] = None,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Directory to scan (overrides scan.root from the config).",
        ),
    ] = None,
    scan_only: Annotated[
        bool,
        typer.Option(
            "--scan-only",
            help="Only scan and save; skip comparison and validation.",
        ),
    ] = False,
    compact: Annotated[
        bool,
        typer.Option(
            "--compact",
            help="Write the document without indentation.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output results as JSON for scripting.",
        ),
    ] = False,
) -> None:
    """Scan the project and create or update the structure document.

    Descriptions already written in the document are kept for every
    directory and file that still exists. New entries are added with an
    empty description and reported, together with removed entries and
    descriptions that are missing or too short.

    Examples:
        dirdoc sync                     # Update ./dirdoc.json
        dirdoc sync --root src          # Scan another directory
        dirdoc sync --scan-only         # Skip comparison and validation
        dirdoc sync --json              # JSON output for scripting
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    obj = ctx.obj or {}
    verbose = bool(obj.get("verbose"))
    quiet = bool(obj.get("quiet"))

    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e

    output_path = output or get_document_path()
    if verbose and not json_output:
        print_info(f"Scanning: {root or config.scan.root}")

    try:
        result = sync_structure(
            config,
            output_path,
            root=root,
            scan_only=scan_only,
            pretty=not compact,
        )
    except PathNotFoundError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except ScanError as e:
        print_error(f"Scan failed: {e}")
        raise typer.Exit(code=1) from e
    except DocumentWriteError as e:
        print_error(f"Failed to save {output_path.name}: {e}")
        raise typer.Exit(code=1) from e
    except DocumentError as e:
        print_error(f"Failed to read {output_path.name}: {e}")
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(json.dumps(_result_to_dict(result), ensure_ascii=False))
        return

    if result.parse_failed:
        print_warning(f"Could not parse existing {output_path.name}. Creating a new one.")

    if not quiet:
        if result.diff is not None:
            print_diff(result.diff, result.root_path)
        if result.validation is not None and not result.validation.passed:
            print_validation_issues(result.validation, result.root_path)

    print_success(_save_message(result))

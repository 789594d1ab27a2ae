"""Validate command implementation.

Checks the descriptions of an existing structure document without
scanning the filesystem.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from dirdoc.cli.display import print_validation_issues
from dirdoc.core.config import ConfigError, load_config
from dirdoc.core.document import DocumentError, DocumentNotFoundError
from dirdoc.core.paths import get_document_path
from dirdoc.core.pipeline import validate_document
from dirdoc.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Validate descriptions in the structure document.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def validate_descriptions(
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
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output results as JSON for scripting.",
        ),
    ] = False,
) -> None:
    """Validate descriptions in an existing structure document.

    Exits with code 1 when any directory or file has a missing or too
    short description, or when the document cannot be read.

    Examples:
        dirdoc validate                  # Check ./dirdoc.json
        dirdoc validate -o docs/tree.json
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(f"Failed to load config: {e}")
        raise typer.Exit(code=1) from e

    document_path = output or get_document_path()

    try:
        result = validate_document(config, document_path)
    except DocumentNotFoundError as e:
        print_error(f"Structure document not found: {document_path}")
        print_info("Run 'dirdoc sync' to create it.")
        raise typer.Exit(code=1) from e
    except DocumentError as e:
        print_error(f"Failed to parse {document_path.name}: {e}")
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(json.dumps(result.to_dict(), ensure_ascii=False))
        if not result.passed:
            raise typer.Exit(code=1)
        return

    if result.passed:
        print_success("All items have a valid description.")
        return

    # Root name is the first segment of every report path
    issues = result.without_description + result.with_short_description
    root_name = issues[0].path.strip("/").split("/")[0]
    print_validation_issues(result, f"/{root_name}/")
    raise typer.Exit(code=1)

"""Init command implementation.

Writes a dirdoc.toml file with the default settings.
"""

from pathlib import Path
from typing import Annotated

import typer

from dirdoc.core.config import ConfigError, DirDocConfig, save_config
from dirdoc.core.paths import get_config_path
from dirdoc.utils.formatting import console, print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Create a configuration file with default settings.",
    invoke_without_command=True,
)


def _show_config_summary(config: DirDocConfig, output_path: Path) -> None:
    """Display the key settings of a configuration."""
    scan = config.scan
    console.print()
    console.print("[bold]Configuration Summary[/bold]")
    console.print(f"  Output: [muted]{output_path}[/muted]")
    console.print(f"  Scan root: [info]{scan.root}[/info]")
    console.print(f"  Default depth: [info]{scan.depth.default}[/info]")
    console.print(f"  Excluded paths: [muted]{', '.join(scan.exclude.patterns) or '-'}[/muted]")
    console.print(f"  Excluded files: [muted]{', '.join(scan.exclude.files) or '-'}[/muted]")
    console.print(
        f"  Minimum description length: [info]{config.validation.min_description_length}[/info]"
    )
    console.print()


@app.callback(invoke_without_command=True)
def init_config(
    ctx: typer.Context,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path for the configuration file.",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing configuration file.",
        ),
    ] = False,
) -> None:
    """Create a dirdoc.toml configuration file.

    The file contains every setting with its default value and can be
    edited afterwards.

    Examples:
        dirdoc init                      # Create ./dirdoc.toml
        dirdoc init --output cfg.toml    # Create at a custom path
        dirdoc init --force              # Overwrite an existing file
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    output_path = output or get_config_path()

    if output_path.exists():
        if not force:
            print_error(f"Configuration already exists: {output_path}")
            print_info("Use --force to overwrite or specify a different path with --output.")
            raise typer.Exit(code=1)
        print_warning(f"Overwriting existing configuration: {output_path}")

    config = DirDocConfig()
    _show_config_summary(config, output_path)

    try:
        saved_path = save_config(config, output_path)
    except ConfigError as e:
        print_error(f"Failed to save configuration: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Configuration created: {saved_path}")

"""Entry point of the ``dirdoc`` command.

Builds the Typer application, wires up the sync, validate and init
sub-commands, and handles the options shared by all of them.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from dirdoc import __version__
from dirdoc.cli.commands import init, sync, validate
from dirdoc.utils.formatting import err_console

app = typer.Typer(
    name="dirdoc",
    help="Keep a described map of a project's directories and files.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)
app.add_typer(sync.app, name="sync")
app.add_typer(validate.app, name="validate")
app.add_typer(init.app, name="init")


def version_callback(value: bool) -> None:
    """Print the installed version and stop."""
    if not value:
        return
    typer.echo(f"dirdoc version {__version__}")
    raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through Rich; DEBUG with --verbose, else WARNING."""
    handler = RichHandler(console=err_console, show_path=False, show_time=verbose)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


VersionOption = Annotated[
    bool | None,
    typer.Option(
        "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", "-v", help="Log scan and diff details to stderr.")
]
QuietOption = Annotated[
    bool, typer.Option("--quiet", "-q", help="Only print the final status line.")
]


@app.callback()
def main(
    ctx: typer.Context,
    version: VersionOption = None,
    verbose: VerboseOption = False,
    quiet: QuietOption = False,
) -> None:
    """dirdoc - describe every directory and file of a project.

    [bold]sync[/bold] scans the project into dirdoc.json and reports what
    changed; [bold]validate[/bold] checks that every entry is described.
    """
    configure_logging(verbose)
    ctx.obj = {**(ctx.obj or {}), "verbose": verbose, "quiet": quiet}


if __name__ == "__main__":
    app()

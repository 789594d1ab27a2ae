"""CLI package for dirdoc.

This package contains the Typer application and all subcommands.
"""

from dirdoc.cli.main import app

__all__ = ["app"]

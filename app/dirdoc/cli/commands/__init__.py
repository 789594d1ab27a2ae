"""CLI commands for dirdoc.

This package contains all subcommand implementations.
"""

from dirdoc.cli.commands import init, sync, validate

__all__ = ["init", "sync", "validate"]

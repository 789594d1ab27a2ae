"""Default file locations for dirdoc.

Project files (the configuration and the structure document) live in
the current working directory. User-level settings such as the colour
theme follow the XDG Base Directory Specification.
"""

import os
import stat
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "dirdoc"

CONFIG_FILENAME = "dirdoc.toml"
DOCUMENT_FILENAME = "dirdoc.json"


def get_config_path() -> Path:
    """Get the default project configuration file path.

    Returns:
        Path to ./dirdoc.toml in the current working directory.
    """
    return Path.cwd() / CONFIG_FILENAME


def get_document_path() -> Path:
    """Get the default structure document path.

    Returns:
        Path to ./dirdoc.json in the current working directory.
    """
    return Path.cwd() / DOCUMENT_FILENAME


def get_user_config_dir() -> Path:
    """Get the user configuration directory path.

    Returns:
        Path to ~/.config/dirdoc/ (or XDG_CONFIG_HOME/dirdoc/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to theme.toml in the user configuration directory.
    """
    return get_user_config_dir() / "theme.toml"


def get_file_mode(path: Path) -> int:
    """Permission bits a rewritten project file should carry.

    Args:
        path: File about to be replaced or created.

    Returns:
        The current mode of an existing file, otherwise 0o666 minus the
        process umask, as a plain open() would create it.
    """
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask

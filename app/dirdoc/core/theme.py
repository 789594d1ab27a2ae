"""Console colour theme.

Colours come from the ``[colors]`` table of the bundled ``theme.toml``.
A user file at ``~/.config/dirdoc/theme.toml`` may redefine any subset
of them. Style names used in console markup are derived from the
colours through :data:`STYLE_TEMPLATES`.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError
from rich.theme import Theme

from dirdoc.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def _parse_hex_color(value: object) -> str:
    """Accept ``#RGB`` or ``#RRGGBB`` strings, surrounding blanks removed."""
    if not isinstance(value, str):
        raise ValueError(f"expected a colour string, got {type(value).__name__}")
    color = value.strip()
    digits = color.removeprefix("#")
    if digits == color:
        raise ValueError(f"colour {color!r} must start with '#'")
    if len(digits) not in (3, 6):
        raise ValueError(f"colour {color!r} must have 3 or 6 hex digits")
    if any(c not in "0123456789abcdefABCDEF" for c in digits):
        raise ValueError(f"colour {color!r} is not a hex value")
    return color


HexColor = Annotated[str, BeforeValidator(_parse_hex_color)]


class ThemeColors(BaseModel):
    """Colours used by the dirdoc console."""

    model_config = ConfigDict(extra="forbid")

    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"

    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"

    # Diff reports
    added: HexColor = "#c1ff62"
    removed: HexColor = "#f53263"

    directory: HexColor = "#69B9A1"
    file: HexColor = "#b2bec3"


# Rich style name -> style definition, filled from ThemeColors fields
STYLE_TEMPLATES: dict[str, str] = {
    "muted": "{muted}",
    "bold_header": "bold {header}",
    "border": "{border}",
    "success": "{success}",
    "warning": "{warning}",
    "error": "bold {error}",
    "info": "{info}",
    "added": "{added}",
    "removed": "{removed}",
    "directory": "bold {directory}",
    "file": "{file}",
}


def get_bundled_theme_path() -> Path:
    """Path of the theme file shipped in ``dirdoc.data``."""
    return resources.files("dirdoc.data").joinpath("theme.toml")  # type: ignore[return-value]


def _read_colors(path: Path) -> dict[str, str] | None:
    """Read the string entries of a theme file's ``[colors]`` table.

    Returns None when the file is absent or unusable; problems other
    than absence are logged.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    table = data.get("colors", {})
    if not isinstance(table, dict):
        logger.warning("Ignoring theme file %s: 'colors' is not a table", path)
        return None
    return {name: value for name, value in table.items() if isinstance(value, str)}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Load the bundled colours with the user's overrides applied.

    Args:
        user_path: Override file. Defaults to the user theme path.

    Returns:
        Validated colours; the built-in defaults if the merged set is invalid.
    """
    colors = _read_colors(get_bundled_theme_path())
    if colors is None:
        logger.error("Bundled theme is missing or unreadable")
        colors = {}

    overrides = _read_colors(user_path or get_user_theme_path())
    if overrides:
        colors.update(overrides)

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colours, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a set of colours.

    Args:
        colors: Colours to use. Loaded with :func:`load_theme` when None.
    """
    values = (colors or load_theme()).model_dump()
    return Theme({name: template.format(**values) for name, template in STYLE_TEMPLATES.items()})


@cache
def get_theme() -> Theme:
    """Rich theme for the shared consoles, loaded once per process.

    Call ``get_theme.cache_clear()`` to pick up edited theme files.
    """
    return get_rich_theme()

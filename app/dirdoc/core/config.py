"""Configuration models and TOML file I/O.

The configuration is a set of typed Pydantic records whose defaults
describe the stock behaviour. A partial ``dirdoc.toml`` only needs to
name the values it changes; everything else keeps its default.

Example ``dirdoc.toml``::

    [scan]
    root = "."

    [scan.depth]
    default = 2
    directories = { src = 3 }

    [scan.exclude]
    patterns = ["vendor/*", ".git/*"]
    files = ["*.log"]

    [validation]
    min_description_length = 20
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from dirdoc.core.paths import get_config_path, get_file_mode

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (
    "vendor/*",
    "node_modules/*",
    ".git/*",
)

DEFAULT_EXCLUDE_FILES: tuple[str, ...] = (
    "*.log",
    "*.cache",
)

DEFAULT_MIN_DESCRIPTION_LENGTH = 10


class DepthConfig(BaseModel):
    """Scan depth limits.

    Attributes:
        default: Depth limit used for directories without an override.
        directories: Per-directory-name depth overrides.
    """

    model_config = ConfigDict(extra="forbid")

    default: Annotated[int, Field(ge=0, description="Default scan depth")] = 1
    directories: Annotated[
        dict[str, Annotated[int, Field(ge=0)]],
        Field(default_factory=dict, description="Depth overrides by directory name"),
    ]

    def depth_for(self, directory_name: str) -> int:
        """Get the depth limit for a directory.

        Args:
            directory_name: Base name of the directory.

        Returns:
            The override for this name, or the default depth.
        """
        return self.directories.get(directory_name, self.default)


class ExcludeConfig(BaseModel):
    """Exclusion patterns.

    Attributes:
        patterns: Glob patterns matched against paths relative to the scan root.
        files: Glob patterns matched against file names.
    """

    model_config = ConfigDict(extra="forbid")

    patterns: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS),
            description="Relative path patterns to exclude",
        ),
    ]
    files: Annotated[
        list[str],
        Field(
            default_factory=lambda: list(DEFAULT_EXCLUDE_FILES),
            description="File name patterns to exclude",
        ),
    ]


class IncludeConfig(BaseModel):
    """Inclusion switches.

    Attributes:
        root_files: Include files that sit directly in the scan root.
        empty_directories: Include directories whose listing is empty.
    """

    model_config = ConfigDict(extra="forbid")

    root_files: Annotated[bool, Field(description="Include files in the root directory")] = True
    empty_directories: Annotated[bool, Field(description="Include empty directories")] = False


class ScanConfig(BaseModel):
    """Settings for the directory scanner."""

    model_config = ConfigDict(extra="forbid")

    root: Annotated[str, Field(description="Directory to scan")] = "."
    depth: Annotated[DepthConfig, Field(default_factory=DepthConfig)]
    exclude: Annotated[ExcludeConfig, Field(default_factory=ExcludeConfig)]
    include: Annotated[IncludeConfig, Field(default_factory=IncludeConfig)]


class ValidationConfig(BaseModel):
    """Settings for description validation.

    Attributes:
        require_description: Report nodes whose description is empty.
        min_description_length: Minimum length of a non-empty description.
    """

    model_config = ConfigDict(extra="forbid")

    require_description: Annotated[
        bool, Field(description="Every node must have a description")
    ] = True
    min_description_length: Annotated[
        int, Field(ge=0, description="Minimum description length in characters")
    ] = DEFAULT_MIN_DESCRIPTION_LENGTH


class DirDocConfig(BaseModel):
    """Complete dirdoc configuration."""

    model_config = ConfigDict(extra="forbid")

    scan: Annotated[ScanConfig, Field(default_factory=ScanConfig)]
    validation: Annotated[ValidationConfig, Field(default_factory=ValidationConfig)]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file does not exist."""


class ConfigParseError(ConfigError):
    """Raised when the config file is not valid TOML."""


class ConfigValidationError(ConfigError):
    """Raised when the config content does not match the schema."""


def load_config(path: Path | None = None) -> DirDocConfig:
    """Load configuration from a TOML file.

    When no path is given the default ``dirdoc.toml`` in the current
    directory is used, and its absence simply yields the defaults.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated DirDocConfig.

    Raises:
        ConfigNotFoundError: If an explicit path does not exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is None:
            return DirDocConfig()
        raise ConfigNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return DirDocConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: DirDocConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written to a temporary file in the same directory and
    moved into place with os.replace().

    Args:
        config: Configuration to save.
        path: Destination path. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = config.model_dump()

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.chmod(tmp_path, get_file_mode(config_path))
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path

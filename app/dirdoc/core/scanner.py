"""Directory scanner that builds a documented tree from the filesystem.

Walks the scan root recursively, honouring per-directory depth limits,
glob exclusions and the root-file and empty-directory switches from
:class:`~dirdoc.core.config.ScanConfig`. Every node starts with an
empty description except the root, which gets a placeholder.
"""

import logging
import os
import stat
from fnmatch import fnmatchcase
from pathlib import Path

from dirdoc.core.config import ScanConfig
from dirdoc.models.node import NodeType, TreeNode

logger = logging.getLogger(__name__)

ROOT_DESCRIPTION = "Project root directory"


class ScanError(Exception):
    """Raised when the filesystem cannot be scanned."""


class PathNotFoundError(ScanError):
    """Raised when the scan root does not exist."""


class DirectoryScanner:
    """Builds a TreeNode hierarchy from a directory on disk.

    Args:
        config: Scan settings. Defaults to ScanConfig().
    """

    def __init__(self, config: ScanConfig | None = None) -> None:
        self._config = config or ScanConfig()

    @property
    def config(self) -> ScanConfig:
        """Scan settings used by this scanner."""
        return self._config

    def scan(self, root_path: str | Path | None = None) -> TreeNode:
        """Scan a directory and return its tree.

        Args:
            root_path: Directory to scan. Defaults to ``config.root``.

        Returns:
            Root TreeNode. Its children are in listing order until sorted.

        Raises:
            PathNotFoundError: If the root path does not exist.
            ScanError: If any directory or entry cannot be read.
        """
        path = Path(root_path if root_path is not None else self._config.root)

        if not path.exists():
            raise PathNotFoundError(f"Path does not exist: {path}")

        try:
            real_path = path.resolve(strict=True)
        except OSError as e:
            raise ScanError(f"Cannot resolve path {path}: {e}") from e

        logger.info("Scanning %s", real_path)

        root = TreeNode(
            name=real_path.name,
            node_type=NodeType.DIRECTORY,
            description=ROOT_DESCRIPTION,
            absolute_path=str(real_path),
        )
        self._scan_directory(root, real_path, depth=0, relative_path="")
        return root

    def _scan_directory(
        self,
        parent: TreeNode,
        path: Path,
        depth: int,
        relative_path: str,
    ) -> None:
        """Add the entries of one directory to its node, recursively.

        Args:
            parent: Node representing ``path``.
            path: Directory to list.
            depth: Recursion depth of ``path`` (0 for the scan root).
            relative_path: ``path`` relative to the scan root, slash-joined.
        """
        max_depth = self._config.depth.depth_for(parent.name)
        if depth >= max_depth:
            logger.debug("Depth limit %d reached at %s", max_depth, path)
            return

        for entry in self._list_directory(path):
            name = entry.name
            entry_relative = f"{relative_path}/{name}" if relative_path else name

            if self._is_excluded_path(entry_relative):
                logger.debug("Excluded by path pattern: %s", entry_relative)
                continue

            mode = self._stat_mode(entry)

            if stat.S_ISDIR(mode):
                # Emptiness is judged on the raw listing, before any exclusion
                if not self._config.include.empty_directories and self._is_empty(entry):
                    logger.debug("Skipping empty directory: %s", entry_relative)
                    continue

                child = parent.add_child(
                    TreeNode(
                        name=name,
                        node_type=NodeType.DIRECTORY,
                        absolute_path=str(entry),
                    )
                )
                self._scan_directory(child, entry, depth + 1, entry_relative)

            elif stat.S_ISREG(mode):
                if depth == 0 and not self._config.include.root_files:
                    continue
                if self._is_excluded_file(name):
                    logger.debug("Excluded by file pattern: %s", entry_relative)
                    continue

                parent.add_child(
                    TreeNode(
                        name=name,
                        node_type=NodeType.FILE,
                        absolute_path=str(entry),
                    )
                )

    def _is_excluded_path(self, relative_path: str) -> bool:
        """Check a root-relative path against the path exclude patterns."""
        return any(fnmatchcase(relative_path, p) for p in self._config.exclude.patterns)

    def _is_excluded_file(self, file_name: str) -> bool:
        """Check a file name against the file exclude patterns."""
        return any(fnmatchcase(file_name, p) for p in self._config.exclude.files)

    @staticmethod
    def _list_directory(path: Path) -> list[Path]:
        """List a directory, converting OS errors to ScanError."""
        try:
            return list(path.iterdir())
        except OSError as e:
            raise ScanError(f"Cannot read directory {path}: {e}") from e

    @staticmethod
    def _stat_mode(path: Path) -> int:
        """Get the mode of an entry, following symlinks.

        A symlink whose target is missing fails here.
        """
        try:
            return os.stat(path).st_mode
        except OSError as e:
            raise ScanError(f"Cannot access {path}: {e}") from e

    @staticmethod
    def _is_empty(path: Path) -> bool:
        """Check whether a directory has no entries at all."""
        try:
            with os.scandir(path) as it:
                return next(it, None) is None
        except OSError as e:
            raise ScanError(f"Cannot read directory {path}: {e}") from e


def scan(root_path: str | Path, config: ScanConfig | None = None) -> TreeNode:
    """Scan ``root_path`` with the given settings.

    Convenience wrapper around :class:`DirectoryScanner`.
    """
    return DirectoryScanner(config).scan(root_path)

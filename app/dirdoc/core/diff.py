"""Diff engine for comparing a recorded tree with the scanned tree.

The recorded tree comes from the structure document, the actual tree
from a fresh filesystem scan. Children are paired by name and type; a
renamed entry therefore shows up as one removal plus one addition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dirdoc.core.config import DEFAULT_MIN_DESCRIPTION_LENGTH
from dirdoc.core.validator import DescriptionIssue, join_path
from dirdoc.models.node import TreeNode

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DiffEntry:
    """A node present on only one side of the comparison.

    Attributes:
        path: Slash-joined report path starting at the root name.
        name: Node name.
        node_type: Node type as written in documents.
    """

    path: str
    name: str
    node_type: str

    @property
    def is_directory(self) -> bool:
        """Whether the entry is a directory."""
        return self.node_type == "directory"

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {"path": self.path, "type": self.node_type, "name": self.name}


@dataclass(frozen=True, slots=True)
class DescriptionChange:
    """A matched node whose two descriptions differ.

    Attributes:
        path: Slash-joined report path starting at the root name.
        name: Node name.
        node_type: Node type as written in documents.
        recorded_description: Description from the document.
        actual_description: Description on the scanned node.
    """

    path: str
    name: str
    node_type: str
    recorded_description: str
    actual_description: str

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "type": self.node_type,
            "name": self.name,
            "recorded_description": self.recorded_description,
            "actual_description": self.actual_description,
        }


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Result of comparing a recorded tree with an actual tree.

    Attributes:
        missing_in_actual: Recorded nodes no longer on disk.
        missing_in_recorded: Nodes on disk not yet in the document.
        different_descriptions: Matched nodes with a differing, non-empty
            actual description.
        short_or_missing_descriptions: Visited recorded nodes whose
            description is shorter than the minimum length.
    """

    missing_in_actual: tuple[DiffEntry, ...]
    missing_in_recorded: tuple[DiffEntry, ...]
    different_descriptions: tuple[DescriptionChange, ...]
    short_or_missing_descriptions: tuple[DescriptionIssue, ...]

    @property
    def has_discrepancies(self) -> bool:
        """True if any node was added or removed."""
        return bool(self.missing_in_actual or self.missing_in_recorded)

    @property
    def has_description_issues(self) -> bool:
        """True if any description differs or is too short."""
        return bool(self.different_descriptions or self.short_or_missing_descriptions)

    @property
    def is_in_sync(self) -> bool:
        """True if the document structure matches the filesystem."""
        return not self.has_discrepancies

    @property
    def total_changes(self) -> int:
        """Number of added plus removed nodes."""
        return len(self.missing_in_actual) + len(self.missing_in_recorded)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "in_sync": self.is_in_sync,
            "summary": {
                "removed": len(self.missing_in_actual),
                "new": len(self.missing_in_recorded),
                "different_descriptions": len(self.different_descriptions),
                "short_descriptions": len(self.short_or_missing_descriptions),
            },
            "missing_in_actual": [e.to_dict() for e in self.missing_in_actual],
            "missing_in_recorded": [e.to_dict() for e in self.missing_in_recorded],
            "different_descriptions": [c.to_dict() for c in self.different_descriptions],
            "short_or_missing_descriptions": [
                i.to_dict() for i in self.short_or_missing_descriptions
            ],
        }


def index_children(node: TreeNode) -> dict[tuple[str, str], TreeNode]:
    """Index a node's children by (name, type), keeping the first occurrence."""
    index: dict[tuple[str, str], TreeNode] = {}
    for child in node.children:
        index.setdefault((child.name, child.type_name), child)
    return index


class DiffEngine:
    """Engine for computing differences between two trees.

    Only matched pairs where both sides have children are descended
    into. A subtree whose counterpart is childless is not inspected.

    Example:
        >>> engine = DiffEngine(min_description_length=10)
        >>> result = engine.compare(load_document(), scan("."))
        >>> if result.is_in_sync:
        ...     print("Document matches the filesystem")
    """

    def __init__(self, min_description_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH) -> None:
        """Initialize the engine.

        Args:
            min_description_length: Recorded descriptions shorter than this
                are reported in ``short_or_missing_descriptions``.
        """
        self.min_description_length = min_description_length

    def compare(self, recorded: TreeNode, actual: TreeNode) -> DiffResult:
        """Compare a recorded tree against an actual tree.

        Args:
            recorded: Tree read from the structure document.
            actual: Tree built by scanning the filesystem.

        Returns:
            DiffResult with all four lists in walk order.
        """
        self._missing_in_actual: list[DiffEntry] = []
        self._missing_in_recorded: list[DiffEntry] = []
        self._different: list[DescriptionChange] = []
        self._short: list[DescriptionIssue] = []

        self._compare_nodes(recorded, actual, "")

        result = DiffResult(
            missing_in_actual=tuple(self._missing_in_actual),
            missing_in_recorded=tuple(self._missing_in_recorded),
            different_descriptions=tuple(self._different),
            short_or_missing_descriptions=tuple(self._short),
        )
        logger.debug(
            "Diff: %d removed, %d new, %d changed descriptions",
            len(result.missing_in_actual),
            len(result.missing_in_recorded),
            len(result.different_descriptions),
        )
        return result

    def _compare_nodes(self, recorded: TreeNode, actual: TreeNode, parent_path: str) -> None:
        path = join_path(parent_path, recorded.name)

        if len(recorded.description) < self.min_description_length:
            self._short.append(
                DescriptionIssue(
                    path=path,
                    name=recorded.name,
                    node_type=recorded.type_name,
                    description=recorded.description,
                    min_length=self.min_description_length,
                )
            )

        actual_index = index_children(actual)
        for recorded_child in recorded.children:
            child_path = join_path(path, recorded_child.name)
            actual_child = actual_index.get((recorded_child.name, recorded_child.type_name))

            if actual_child is None:
                self._missing_in_actual.append(_entry(recorded_child, child_path))
                continue

            if (
                recorded_child.description != actual_child.description
                and actual_child.description != ""
            ):
                self._different.append(
                    DescriptionChange(
                        path=child_path,
                        name=recorded_child.name,
                        node_type=recorded_child.type_name,
                        recorded_description=recorded_child.description,
                        actual_description=actual_child.description,
                    )
                )

            if recorded_child.has_children() and actual_child.has_children():
                self._compare_nodes(recorded_child, actual_child, path)

        recorded_index = index_children(recorded)
        for actual_child in actual.children:
            if (actual_child.name, actual_child.type_name) not in recorded_index:
                self._missing_in_recorded.append(
                    _entry(actual_child, join_path(path, actual_child.name))
                )


def _entry(node: TreeNode, path: str) -> DiffEntry:
    return DiffEntry(path=path, name=node.name, node_type=node.type_name)


def compare(
    recorded: TreeNode,
    actual: TreeNode,
    min_description_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH,
) -> DiffResult:
    """Compare two trees. See :meth:`DiffEngine.compare`."""
    return DiffEngine(min_description_length).compare(recorded, actual)

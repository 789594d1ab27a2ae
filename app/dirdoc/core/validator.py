"""Description completeness validation.

Checks every node of a tree, root included, for a missing description
(when descriptions are required) or a description shorter than the
configured minimum.
"""

from __future__ import annotations

from dataclasses import dataclass

from dirdoc.core.config import ValidationConfig
from dirdoc.models.node import TreeNode


def join_path(parent_path: str, name: str) -> str:
    """Build the report path of a node from its parent's path.

    The root of a tree is reported as ``/<root name>``.
    """
    return f"{parent_path}/{name}"


@dataclass(frozen=True, slots=True)
class DescriptionIssue:
    """A node whose description is missing or too short.

    Attributes:
        path: Slash-joined report path starting at the root name.
        name: Node name.
        node_type: Node type as written in documents.
        description: Current description text.
        min_length: Minimum length in effect when the issue was found.
    """

    path: str
    name: str
    node_type: str
    description: str = ""
    min_length: int = 0

    @property
    def is_directory(self) -> bool:
        """Whether the issue concerns a directory."""
        return self.node_type == "directory"

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "type": self.node_type,
            "name": self.name,
            "description": self.description,
            "min_length": self.min_length,
        }


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating a tree.

    Attributes:
        without_description: Nodes with an empty, required description.
        with_short_description: Nodes with a non-empty description below
            the minimum length.
    """

    without_description: tuple[DescriptionIssue, ...]
    with_short_description: tuple[DescriptionIssue, ...]

    @property
    def passed(self) -> bool:
        """True if no node has a description problem."""
        return not (self.without_description or self.with_short_description)

    @property
    def issue_count(self) -> int:
        """Total number of nodes with a description problem."""
        return len(self.without_description) + len(self.with_short_description)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "passed": self.passed,
            "without_description": [i.to_dict() for i in self.without_description],
            "with_short_description": [i.to_dict() for i in self.with_short_description],
        }


def validate(tree: TreeNode, config: ValidationConfig | None = None) -> ValidationResult:
    """Classify nodes with missing or too-short descriptions.

    An empty description is only reported when descriptions are
    required, and is never checked against the minimum length, so a
    node lands in at most one of the two lists.

    Args:
        tree: Root of the tree to check. Not modified.
        config: Validation settings. Defaults to ValidationConfig().

    Returns:
        ValidationResult listing the offending nodes in pre-order.
    """
    config = config or ValidationConfig()
    min_length = config.min_description_length

    missing: list[DescriptionIssue] = []
    short: list[DescriptionIssue] = []

    stack: list[tuple[TreeNode, str]] = [(tree, "")]
    while stack:
        node, parent_path = stack.pop()
        path = join_path(parent_path, node.name)
        description = node.description

        if description == "":
            if config.require_description:
                missing.append(
                    DescriptionIssue(path=path, name=node.name, node_type=node.type_name)
                )
        elif len(description) < min_length:
            short.append(
                DescriptionIssue(
                    path=path,
                    name=node.name,
                    node_type=node.type_name,
                    description=description,
                    min_length=min_length,
                )
            )

        stack.extend((child, path) for child in reversed(node.children))

    return ValidationResult(
        without_description=tuple(missing),
        with_short_description=tuple(short),
    )

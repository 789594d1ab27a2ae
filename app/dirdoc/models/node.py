"""Tree node model for documented directory structures.

This module defines the recursive node type that the scanner builds,
the document codec persists, and the diff, merge, validation and
sorting passes operate on.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class NodeType(str, Enum):
    """Type of a node in the directory tree.

    Attributes:
        DIRECTORY: Directory that may contain child nodes.
        FILE: Regular file (never has children).
    """

    DIRECTORY = "directory"
    FILE = "file"

    @classmethod
    def parse(cls, value: str) -> NodeType | str:
        """Convert a raw type string to a NodeType where possible.

        Documents written by hand may carry an empty or unknown type.
        Such values are returned unchanged so they survive a round trip
        and never match a scanned node.

        Args:
            value: Raw type string read from a document.

        Returns:
            The matching NodeType member, or the original string.
        """
        try:
            return cls(value)
        except ValueError:
            return value


@dataclass(slots=True)
class TreeNode:
    """A directory or file with its human-written description.

    Children are owned exclusively by their parent. Two nodes in
    different trees are considered the same entry when their name and
    type are equal.

    Attributes:
        name: Base name of the filesystem entry.
        node_type: Directory or file (or the raw string read from a document).
        description: Description text, empty when not yet written.
        children: Ordered child nodes (always empty for files).
        absolute_path: Absolute path set by the scanner; never persisted
            and ignored by equality.
    """

    name: str
    node_type: NodeType | str
    description: str = ""
    children: list[TreeNode] = field(default_factory=list)
    absolute_path: str | None = field(default=None, compare=False, repr=False)

    @property
    def is_directory(self) -> bool:
        """True if this node is a directory."""
        return self.node_type == NodeType.DIRECTORY

    @property
    def type_name(self) -> str:
        """Plain string form of the node type, as written to documents."""
        if isinstance(self.node_type, NodeType):
            return self.node_type.value
        return self.node_type

    def has_children(self) -> bool:
        """Check whether the node has at least one child."""
        return bool(self.children)

    def add_child(self, child: TreeNode) -> TreeNode:
        """Append a child node and return it."""
        self.children.append(child)
        return child

    def get_child(self, name: str, node_type: NodeType | str) -> TreeNode | None:
        """Find the first child with the given name and type.

        Args:
            name: Child name to look for.
            node_type: Child type to look for.

        Returns:
            The first matching child, or None.
        """
        for child in self.children:
            if child.name == name and child.node_type == node_type:
                return child
        return None

    def walk(self) -> Iterator[TreeNode]:
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def count(self) -> int:
        """Total number of nodes in this subtree, including this one."""
        return sum(1 for _ in self.walk())

"""Unit tests for canonical tree ordering."""

from dirdoc.core.sorter import sort_tree
from dirdoc.models.node import NodeType, TreeNode


def _names(node: TreeNode) -> list[str]:
    return [child.name for child in node.children]


class TestSortTree:
    """Tests for sort_tree function."""

    def test_directories_before_files(self) -> None:
        """Directories come first, then files."""
        tree = TreeNode(
            "p",
            NodeType.DIRECTORY,
            children=[
                TreeNode("a.txt", NodeType.FILE),
                TreeNode("z", NodeType.DIRECTORY),
                TreeNode("b.txt", NodeType.FILE),
                TreeNode("m", NodeType.DIRECTORY),
            ],
        )

        sort_tree(tree)

        assert _names(tree) == ["m", "z", "a.txt", "b.txt"]

    def test_case_insensitive(self) -> None:
        """Names are compared without regard to case."""
        tree = TreeNode(
            "p",
            NodeType.DIRECTORY,
            children=[
                TreeNode("readme.md", NodeType.FILE),
                TreeNode("Makefile", NodeType.FILE),
                TreeNode("a.txt", NodeType.FILE),
                TreeNode("Src", NodeType.DIRECTORY),
                TreeNode("docs", NodeType.DIRECTORY),
            ],
        )

        sort_tree(tree)

        assert _names(tree) == ["docs", "Src", "a.txt", "Makefile", "readme.md"]

    def test_every_level_sorted(self) -> None:
        """Nested directories are sorted too."""
        inner = TreeNode(
            "inner",
            NodeType.DIRECTORY,
            children=[TreeNode("y", NodeType.FILE), TreeNode("x", NodeType.FILE)],
        )
        middle = TreeNode(
            "middle",
            NodeType.DIRECTORY,
            children=[TreeNode("b.txt", NodeType.FILE), inner],
        )
        tree = TreeNode("p", NodeType.DIRECTORY, children=[middle])

        sort_tree(tree)

        assert _names(middle) == ["inner", "b.txt"]
        assert _names(inner) == ["x", "y"]

    def test_returns_same_root(self, sample_tree: TreeNode) -> None:
        """The tree is sorted in place."""
        assert sort_tree(sample_tree) is sample_tree

    def test_idempotent(self, sample_tree: TreeNode) -> None:
        """Sorting a sorted tree changes nothing."""
        once = repr(sort_tree(sample_tree))
        assert repr(sort_tree(sample_tree)) == once

    def test_sample_tree_order(self, sample_tree: TreeNode) -> None:
        """The shared sample tree sorts directories first at each level."""
        sort_tree(sample_tree)

        assert _names(sample_tree) == ["src", "README.md"]
        assert _names(sample_tree.children[0]) == ["util", "main.py"]

    def test_unknown_types_grouped_with_files(self) -> None:
        """Non-directory types sort among files."""
        tree = TreeNode(
            "p",
            NodeType.DIRECTORY,
            children=[
                TreeNode("b", NodeType.FILE),
                TreeNode("a", "symlink"),
                TreeNode("c", NodeType.DIRECTORY),
            ],
        )

        sort_tree(tree)

        assert _names(tree) == ["c", "a", "b"]

    def test_stable_for_equal_names(self) -> None:
        """Names equal apart from case keep their relative order."""
        first = TreeNode("README", NodeType.FILE)
        second = TreeNode("readme", NodeType.FILE)
        tree = TreeNode("p", NodeType.DIRECTORY, children=[first, second])

        sort_tree(tree)

        assert tree.children[0] is first
        assert tree.children[1] is second

    def test_leaf_untouched(self) -> None:
        """Sorting a childless node is a no-op."""
        leaf = TreeNode("a", NodeType.FILE)
        assert sort_tree(leaf).children == []

"""Canonical ordering of tree children.

Directories come first, then files; each group is ordered by name
without regard to case.
"""

from dirdoc.models.node import TreeNode


def _sort_key(node: TreeNode) -> tuple[bool, str]:
    return (not node.is_directory, node.name.casefold())


def sort_tree(tree: TreeNode) -> TreeNode:
    """Reorder the children of every directory in the tree.

    Nodes of a type other than directory are grouped with files. The
    sort is stable, so names equal apart from case keep their order.

    Args:
        tree: Root of the tree, modified in place.

    Returns:
        The same root node.
    """
    stack = [tree]
    while stack:
        node = stack.pop()
        if node.children:
            node.children = sorted(node.children, key=_sort_key)
            stack.extend(node.children)
    return tree

"""Description transfer from a recorded tree onto a scanned tree."""

import logging

from dirdoc.core.diff import index_children
from dirdoc.models.node import TreeNode

logger = logging.getLogger(__name__)


def transfer_descriptions(recorded: TreeNode, actual: TreeNode) -> int:
    """Copy non-empty recorded descriptions onto matching actual nodes.

    The two roots always match. Children are paired by name and type,
    first match wins, and a pair is only descended into when both nodes
    have children. Only ``description`` fields of ``actual`` change.

    Args:
        recorded: Tree read from the structure document.
        actual: Freshly scanned tree, updated in place.

    Returns:
        Number of descriptions copied.
    """
    transferred = _transfer(recorded, actual)
    logger.debug("Transferred %d descriptions", transferred)
    return transferred


def _transfer(recorded: TreeNode, actual: TreeNode) -> int:
    count = 0
    if recorded.description:
        actual.description = recorded.description
        count += 1

    actual_index = index_children(actual)
    for recorded_child in recorded.children:
        actual_child = actual_index.get((recorded_child.name, recorded_child.type_name))
        if actual_child is None:
            continue

        if recorded_child.has_children() and actual_child.has_children():
            count += _transfer(recorded_child, actual_child)
        elif recorded_child.description:
            actual_child.description = recorded_child.description
            count += 1

    return count

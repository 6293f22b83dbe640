"""
OKR tree helpers.

All helpers assume the tree is acyclic; run validate.check_acyclic first on
trees of unknown provenance.
"""

import logging
from typing import Iterator, Optional

from roadmap.lib.constants import CHILD_LEVELS
from roadmap.lib.types import ExecutionItem, OKRHierarchy

logger = logging.getLogger(__name__)


def iter_nodes(root: OKRHierarchy) -> Iterator[tuple[OKRHierarchy, int]]:
    """Yield (node, depth) pairs depth-first, parents before children.

    The root is at depth 1.
    """
    stack = [(root, 1)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        # Reverse so the first child is visited first
        stack.extend((child, depth + 1) for child in reversed(list(node.children())))


def find_node(root: OKRHierarchy, item_id: str) -> Optional[OKRHierarchy]:
    """Return the first node with the given id, or None."""
    for node, _ in iter_nodes(root):
        if node.id == item_id:
            return node
    return None


def _find_parent(root: OKRHierarchy, item_id: str) -> Optional[tuple[OKRHierarchy, str, int]]:
    """Locate (parent, child attribute, index) of the node with item_id."""
    for node, _ in iter_nodes(root):
        for attr, children in node.child_lists():
            for index, child in enumerate(children):
                if child.id == item_id:
                    return node, attr, index
    return None


def remove_node(root: OKRHierarchy, item_id: str) -> Optional[OKRHierarchy]:
    """Detach a node and its whole subtree from the tree.

    Args:
        root: Tree to remove from (modified in place)
        item_id: Id of the node to remove

    Returns:
        The removed node (still holding its subtree), or None if not found

    Raises:
        ValueError: If item_id is the root itself
    """
    if root.id == item_id:
        raise ValueError(f"Cannot remove root node '{item_id}' from its own tree")

    found = _find_parent(root, item_id)
    if found is None:
        return None

    parent, attr, index = found
    removed = getattr(parent, attr).pop(index)
    logger.debug(
        f"Removed {item_id} from {parent.id}.{CHILD_LEVELS[attr][0]} "
        f"({count_nodes(removed) - 1} descendant(s))"
    )
    return removed


def flatten(root: OKRHierarchy) -> list[ExecutionItem]:
    """Return every item in the tree, parents before children."""
    return [node.item for node, _ in iter_nodes(root)]


def count_nodes(root: OKRHierarchy) -> int:
    return sum(1 for _ in iter_nodes(root))


def max_depth(root: OKRHierarchy) -> int:
    """Number of levels in the tree (1 for a lone node)."""
    return max(depth for _, depth in iter_nodes(root))


def infer_level(node: OKRHierarchy) -> Optional[str]:
    """Conventional type implied by the first non-empty child list.

    A node populating keyResults is an Objective, initiatives a Key Result,
    and so on. Leaves imply nothing.
    """
    for attr, children in node.child_lists():
        if children:
            return CHILD_LEVELS[attr][1]
    return None

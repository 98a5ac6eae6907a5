"""
Tree Sorter

Orders siblings by display name at every level without touching the
caller's forest.
"""
from typing import Dict, List

from core.models import TreeNode
from utils.text_utils import collation_key

from .traversal import iter_postorder


def display_sort_key(node: TreeNode) -> str:
    """Case- and accent-insensitive display-name key."""
    return collation_key(node.display_name)


def sort_tree(nodes: List[TreeNode]) -> List[TreeNode]:
    """
    Sort a forest alphabetically by display name within each level.

    Returns new TreeNode objects; parent/child edges and levels are the
    same as the input. Equal keys keep their input order, so sorting an
    already sorted forest returns an equal forest.

    Args:
        nodes: Root nodes (or any sibling list)

    Returns:
        New sorted list of new nodes
    """
    copies: Dict[int, TreeNode] = {}

    for node in iter_postorder(nodes):
        children = sorted((copies[id(child)] for child in node.children), key=display_sort_key)
        copies[id(node)] = TreeNode(entity=node.entity, children=children, level=node.level)

    return sorted((copies[id(node)] for node in nodes), key=display_sort_key)

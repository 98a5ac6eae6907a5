"""
Forest traversal helpers.

All walks use explicit stacks; a badly shaped import (one long reporting
chain) can be thousands of levels deep.
"""
from typing import Iterator, List

from core.models import TreeNode


def iter_preorder(roots: List[TreeNode]) -> Iterator[TreeNode]:
    """Yield every node, parents before children, left to right."""
    for root in roots:
        yield from root.iter_subtree()


def iter_postorder(roots: List[TreeNode]) -> Iterator[TreeNode]:
    """Yield every node, children before parents, left to right."""
    stack = [(node, False) for node in reversed(roots)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(node.children))


def count_nodes(roots: List[TreeNode]) -> int:
    """Count nodes across all subtrees of the forest."""
    return sum(1 for _ in iter_preorder(roots))


def max_depth(roots: List[TreeNode]) -> int:
    """Deepest level in the forest, or -1 for an empty forest."""
    return max((node.level for node in iter_preorder(roots)), default=-1)

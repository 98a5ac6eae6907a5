"""
Subtree Filter

Two post-order passes over the forest produce, per node id, whether the
node matches, whether a descendant matches, and whether it is an ancestor
of a match. Rendering policies (dim, hide) read those flags without
walking the tree again.
"""
from typing import Callable, Dict, List, Optional, Union

from core.constants import FilterMode
from core.models import FilterResult, TreeNode

from .traversal import iter_postorder

Predicate = Callable[[TreeNode], bool]


def filter_tree(roots: List[TreeNode], predicate: Predicate) -> Dict[str, FilterResult]:
    """
    Evaluate ``predicate`` over the whole forest.

    Exceptions raised by ``predicate`` propagate to the caller.

    Args:
        roots: Forest roots
        predicate: Match test for a single node

    Returns:
        Dict mapping node id to FilterResult
    """
    results: Dict[str, FilterResult] = {}

    # Pass A: direct matches and matching descendants
    for node in iter_postorder(roots):
        matched = bool(predicate(node))
        has_matching_descendant = any(
            results[child.id].matched or results[child.id].has_matching_descendant
            for child in node.children
        )
        results[node.id] = FilterResult(
            node=node,
            matched=matched,
            has_matching_descendant=has_matching_descendant,
            is_ancestor_of_match=False,
        )

    # Pass B: ancestors of matches
    subtree_relevant: Dict[str, bool] = {}
    for node in iter_postorder(roots):
        result = results[node.id]
        if any(subtree_relevant[child.id] for child in node.children):
            result.is_ancestor_of_match = True
        subtree_relevant[node.id] = result.relevant

    return results


def branch_predicate(branch_id: str) -> Predicate:
    """
    Build a predicate selecting one branch and its people.

    A branch node matches on its own id or its ``branch_id``; a person
    matches on ``branch_id`` only.
    """
    def matches(node: TreeNode) -> bool:
        if node.is_branch:
            return node.id == branch_id or node.entity.branch_id == branch_id
        return node.entity.branch_id == branch_id

    return matches


def _coerce_mode(mode: Union[FilterMode, str]) -> FilterMode:
    try:
        return FilterMode(mode)
    except ValueError:
        raise ValueError(f"Unknown filter mode: {mode}") from None


def filter_by_branch(
    roots: List[TreeNode],
    branch_id: str,
    mode: Union[FilterMode, str] = FilterMode.HIGHLIGHT
) -> Dict[str, FilterResult]:
    """
    Filter the forest by branch.

    The mode does not change the computed flags; highlight and isolate give
    identical maps and differ only in how the renderer uses them.

    Args:
        roots: Forest roots
        branch_id: Target branch id
        mode: 'highlight' or 'isolate'

    Returns:
        Dict mapping node id to FilterResult

    Raises:
        ValueError: If mode is 'none' or unknown
    """
    if _coerce_mode(mode) is FilterMode.NONE:
        raise ValueError("filter_by_branch requires 'highlight' or 'isolate' mode")
    return filter_tree(roots, branch_predicate(branch_id))


def is_node_dimmed(node: TreeNode, results: Optional[Dict[str, FilterResult]]) -> bool:
    """Dim nodes that are neither a match nor on a path to one."""
    if results is None:
        return False
    result = results.get(node.id)
    if result is None:
        return True
    return not result.relevant


def is_node_hidden(
    node: TreeNode,
    results: Optional[Dict[str, FilterResult]],
    mode: Union[FilterMode, str]
) -> bool:
    """
    Hide unrelated branch nodes in isolate mode.

    People stay visible (dimmed at most); a branch stays visible when it
    matches or contains a match.
    """
    if results is None or _coerce_mode(mode) is not FilterMode.ISOLATE:
        return False
    result = results.get(node.id)
    if result is None:
        return True
    if node.is_branch:
        return not (result.matched or result.has_matching_descendant)
    return False

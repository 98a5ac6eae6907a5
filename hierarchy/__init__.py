"""Hierarchy package - Forest building, sorting and filtering."""

from .tree_builder import (
    BuildResult,
    build_forest,
    build_tree,
    index_entities,
    find_cycle_taint,
)

from .tree_sorter import (
    sort_tree,
    display_sort_key,
)

from .tree_filter import (
    filter_tree,
    filter_by_branch,
    branch_predicate,
    is_node_dimmed,
    is_node_hidden,
)

from .traversal import (
    iter_preorder,
    iter_postorder,
    count_nodes,
    max_depth,
)

__all__ = [
    # Building
    'BuildResult',
    'build_forest',
    'build_tree',
    'index_entities',
    'find_cycle_taint',

    # Sorting
    'sort_tree',
    'display_sort_key',

    # Filtering
    'filter_tree',
    'filter_by_branch',
    'branch_predicate',
    'is_node_dimmed',
    'is_node_hidden',

    # Traversal
    'iter_preorder',
    'iter_postorder',
    'count_nodes',
    'max_depth',
]

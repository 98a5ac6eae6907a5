"""Core package - Domain models, constants and exceptions."""

from .models import (
    Person,
    Branch,
    Entity,
    TreeNode,
    FilterResult,
    CycleWarning,
    EntityEventDetail,
    HierarchyChangeDetail,
    ProgressDetail,
    ErrorDetail,
    is_branch,
    is_person,
)
from .constants import EntityKind, FilterMode
from .exceptions import OrgChartError, DuplicateEntityError, ReparentCycleError

__all__ = [
    'Person',
    'Branch',
    'Entity',
    'TreeNode',
    'FilterResult',
    'CycleWarning',
    'EntityEventDetail',
    'HierarchyChangeDetail',
    'ProgressDetail',
    'ErrorDetail',
    'is_branch',
    'is_person',
    'EntityKind',
    'FilterMode',
    'OrgChartError',
    'DuplicateEntityError',
    'ReparentCycleError',
]

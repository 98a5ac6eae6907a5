"""
Core domain models for the org-chart hierarchy engine.

These are pure data structures without business logic. An entity is either
a Person or a Branch; the ``kind`` field is the discriminant.
"""
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union

from .constants import EntityKind


@dataclass
class Person:
    """A person in the organization."""
    id: str
    first_name: str
    last_name: str
    role: str = ""
    reports_to: Optional[str] = None
    branch_id: Optional[str] = None
    branch_name: Optional[str] = None
    avatar: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    kind: EntityKind = field(default=EntityKind.PERSON, init=False)

    @property
    def display_name(self) -> str:
        """First and last name."""
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict:
        """Convert to a camelCase record."""
        return {
            'id': self.id,
            'kind': self.kind.value,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'role': self.role,
            'reportsTo': self.reports_to,
            'branchId': self.branch_id,
            'branchName': self.branch_name,
            'avatar': self.avatar,
            'email': self.email,
            'phone': self.phone,
        }


@dataclass
class Branch:
    """A grouping node (office, department, region)."""
    id: str
    first_name: str
    role: str = ""
    reports_to: Optional[str] = None
    branch_id: Optional[str] = None
    branch_name: Optional[str] = None
    branch_logo: Optional[str] = None
    avatar: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    kind: EntityKind = field(default=EntityKind.BRANCH, init=False)

    @property
    def display_name(self) -> str:
        return self.first_name

    def to_dict(self) -> dict:
        """Convert to a camelCase record."""
        return {
            'id': self.id,
            'kind': self.kind.value,
            'firstName': self.first_name,
            'role': self.role,
            'reportsTo': self.reports_to,
            'branchId': self.branch_id,
            'branchName': self.branch_name,
            'branchLogo': self.branch_logo,
            'avatar': self.avatar,
            'email': self.email,
            'phone': self.phone,
        }


Entity = Union[Person, Branch]


def is_branch(entity: Entity) -> bool:
    """Check whether an entity is a branch node."""
    return entity.kind is EntityKind.BRANCH


def is_person(entity: Entity) -> bool:
    """Check whether an entity is a person node."""
    return entity.kind is EntityKind.PERSON


@dataclass
class TreeNode:
    """An entity placed in the forest, with its ordered children and depth."""
    entity: Entity
    children: List['TreeNode'] = field(default_factory=list)
    level: int = 0

    @property
    def id(self) -> str:
        return self.entity.id

    @property
    def reports_to(self) -> Optional[str]:
        return self.entity.reports_to

    @property
    def display_name(self) -> str:
        return self.entity.display_name

    @property
    def is_branch(self) -> bool:
        return is_branch(self.entity)

    def iter_subtree(self) -> Iterator['TreeNode']:
        """
        Iterate this node and all its descendants in pre-order.

        Uses an explicit stack so very deep chains do not hit the
        recursion limit.
        """
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def to_dict(self) -> dict:
        """Convert to dictionary format for serialization."""
        return {
            **self.entity.to_dict(),
            'level': self.level,
            'children': [child.to_dict() for child in self.children],
        }


@dataclass
class FilterResult:
    """Match information for one node, computed per filter invocation."""
    node: TreeNode
    matched: bool = False
    has_matching_descendant: bool = False
    is_ancestor_of_match: bool = False

    @property
    def relevant(self) -> bool:
        """True when the node matches or sits on a path to a match."""
        return self.matched or self.has_matching_descendant or self.is_ancestor_of_match


@dataclass
class CycleWarning:
    """Non-fatal notice that an entity was promoted to root to break a cycle."""
    entity_id: str
    message: str


@dataclass
class EntityEventDetail:
    """Payload for select, activate and delete events."""
    id: str
    entity: Entity


@dataclass
class HierarchyChangeDetail:
    """Payload for hierarchyChange events; new_parent_id is None on unlink."""
    entity_id: str
    old_parent_id: Optional[str]
    new_parent_id: Optional[str]


@dataclass
class ProgressDetail:
    """Long-press countdown progress in [0, 1]."""
    id: str
    progress: float


@dataclass
class ErrorDetail:
    """Payload for error events raised instead of exceptions."""
    code: str
    message: str
    entity_id: Optional[str] = None

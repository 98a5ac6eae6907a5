"""
Tree Builder

Turns a flat list of Person/Branch entities into a cycle-safe forest.

Entities live in an arena (flat list) with parent references stored as
indices. A single white/gray/black walk over those indices finds every
entity whose reporting chain runs into a cycle; such entities are promoted
to roots with a warning instead of failing the build.
"""
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from core.constants import DUPLICATE_ID_POLICIES
from core.exceptions import DuplicateEntityError
from core.models import CycleWarning, Entity, TreeNode

WHITE, GRAY, BLACK = 0, 1, 2


@dataclass
class BuildResult:
    """Forest roots plus the cycle warnings recorded while building."""
    roots: List[TreeNode] = field(default_factory=list)
    warnings: List[CycleWarning] = field(default_factory=list)


def index_entities(
    entities: Sequence[Entity],
    duplicate_policy: str = 'last_wins'
) -> Tuple[List[Entity], Dict[str, int]]:
    """
    Lay entities out in an arena keyed by id.

    Args:
        entities: Flat entity list in caller order
        duplicate_policy: 'last_wins' keeps the later record in the earlier
            record's slot; 'reject' raises on the first repeated id

    Returns:
        Tuple of (arena, index_of) where index_of maps id -> arena slot

    Raises:
        DuplicateEntityError: If an id repeats and the policy is 'reject'
        ValueError: If the policy is unknown
    """
    if duplicate_policy not in DUPLICATE_ID_POLICIES:
        raise ValueError(f"Unknown duplicate id policy: {duplicate_policy}")

    arena: List[Entity] = []
    index_of: Dict[str, int] = {}

    for entity in entities:
        slot = index_of.get(entity.id)
        if slot is None:
            index_of[entity.id] = len(arena)
            arena.append(entity)
            continue

        if duplicate_policy == 'reject':
            raise DuplicateEntityError(entity.id)
        logger.warning(f"Duplicate entity id {entity.id}; keeping the later record")
        arena[slot] = entity

    return arena, index_of


def resolve_parents(arena: List[Entity], index_of: Dict[str, int]) -> List[Optional[int]]:
    """
    Map each arena slot to its parent's slot.

    Missing or unknown ``reports_to`` values resolve to None (root/orphan).
    """
    return [
        index_of.get(entity.reports_to) if entity.reports_to else None
        for entity in arena
    ]


def find_cycle_taint(parent_of: List[Optional[int]]) -> Tuple[List[bool], List[bool]]:
    """
    Classify slots against reporting cycles in O(n).

    Each unvisited slot starts a walk up its parent chain. Reaching a gray
    slot closes a new cycle; reaching a black slot reuses that slot's
    verdict; reaching None ends at a root.

    Args:
        parent_of: Parent slot per slot (None for roots)

    Returns:
        Tuple of (in_cycle, tainted): in_cycle marks cycle members, tainted
        marks every slot whose chain reaches a cycle (members included)
    """
    size = len(parent_of)
    color = [WHITE] * size
    in_cycle = [False] * size
    tainted = [False] * size

    for start in range(size):
        if color[start] != WHITE:
            continue

        path: List[int] = []
        position: Dict[int, int] = {}
        current = start
        while current is not None and color[current] == WHITE:
            color[current] = GRAY
            position[current] = len(path)
            path.append(current)
            current = parent_of[current]

        if current is None:
            reaches_cycle = False
        elif color[current] == GRAY:
            for member in path[position[current]:]:
                in_cycle[member] = True
            reaches_cycle = True
        else:
            reaches_cycle = tainted[current]

        for slot in path:
            color[slot] = BLACK
            tainted[slot] = reaches_cycle

    return in_cycle, tainted


def assign_levels(roots: List[TreeNode]) -> None:
    """Set ``level`` breadth-first: roots 0, children parent + 1."""
    queue = deque()
    for root in roots:
        root.level = 0
        queue.append(root)
    while queue:
        node = queue.popleft()
        for child in node.children:
            child.level = node.level + 1
            queue.append(child)


def _cycle_message(entity: Entity, is_member: bool) -> str:
    name = entity.display_name
    if is_member:
        return (
            f"Circular reporting relationship detected for entity {entity.id} "
            f"({name}). Treating as root."
        )
    return (
        f"Cycle detected in ancestor chain for entity {entity.id} "
        f"({name}). Treating as root."
    )


def build_forest(
    entities: Sequence[Entity],
    duplicate_policy: str = 'last_wins'
) -> BuildResult:
    """
    Build a forest from a flat entity list.

    Entities without ``reports_to``, or whose ``reports_to`` is unknown,
    become roots. Entities whose chain reaches a cycle also become roots and
    produce a CycleWarning. Roots and siblings keep input order.

    Args:
        entities: Flat list of entities (need not be pre-sorted)
        duplicate_policy: See ``index_entities``

    Returns:
        BuildResult with roots and cycle warnings
    """
    result = BuildResult()
    if not entities:
        return result

    arena, index_of = index_entities(entities, duplicate_policy)
    parent_of = resolve_parents(arena, index_of)
    in_cycle, tainted = find_cycle_taint(parent_of)

    nodes = [TreeNode(entity=entity) for entity in arena]

    for slot, node in enumerate(nodes):
        parent = parent_of[slot]
        if tainted[slot]:
            message = _cycle_message(node.entity, in_cycle[slot])
            logger.warning(message)
            result.warnings.append(CycleWarning(entity_id=node.id, message=message))
            result.roots.append(node)
        elif parent is None:
            result.roots.append(node)
        else:
            nodes[parent].children.append(node)

    assign_levels(result.roots)
    return result


def build_tree(entities: Sequence[Entity], duplicate_policy: str = 'last_wins') -> List[TreeNode]:
    """Build a forest and return only its roots."""
    return build_forest(entities, duplicate_policy).roots

"""
Org Chart Service

Owns the caller's entity list and the derived forest. Every structural
change (reparent, delete, new entity list) is followed by a full rebuild:
build, sort, and re-apply the active branch filter.
"""
from typing import Dict, Iterator, List, Optional, Union

from loguru import logger

from core.constants import FilterMode
from core.exceptions import ReparentCycleError
from core.models import CycleWarning, Entity, FilterResult, HierarchyChangeDetail, TreeNode
from hierarchy.tree_builder import build_forest
from hierarchy.tree_filter import filter_by_branch, is_node_dimmed, is_node_hidden
from hierarchy.tree_sorter import sort_tree
from hierarchy.traversal import iter_preorder


class OrgChartService:
    """Entity list, sorted forest and branch filter state for one chart."""

    def __init__(
        self,
        entities: Optional[List[Entity]] = None,
        duplicate_policy: str = 'last_wins'
    ):
        """
        Initialize the service and build the first forest.

        Args:
            entities: Caller-owned entity list; mutated in place on reparent/delete
            duplicate_policy: 'last_wins' or 'reject' (see hierarchy.tree_builder)
        """
        self.entities: List[Entity] = entities if entities is not None else []
        self.duplicate_policy = duplicate_policy
        self.roots: List[TreeNode] = []
        self.warnings: List[CycleWarning] = []
        self.filter_mode = FilterMode.NONE
        self.filter_target_id = ""
        self.filter_results: Optional[Dict[str, FilterResult]] = None
        self._nodes: Dict[str, TreeNode] = {}

        self.rebuild()

    # ------------------------------------------------------------------
    # Rebuild pipeline
    # ------------------------------------------------------------------

    def rebuild(self) -> List[TreeNode]:
        """Rebuild and sort the forest, then re-apply the active filter."""
        result = build_forest(self.entities, self.duplicate_policy)
        self.roots = sort_tree(result.roots)
        self.warnings = result.warnings
        self._nodes = {node.id: node for node in iter_preorder(self.roots)}
        self.apply_filter()
        return self.roots

    def set_entities(self, entities: List[Entity]) -> List[TreeNode]:
        """Replace the entity list and rebuild."""
        self.entities = entities
        return self.rebuild()

    def set_filter(self, mode: Union[FilterMode, str], target_id: str = "") -> None:
        """
        Change the branch filter.

        Args:
            mode: 'none', 'highlight' or 'isolate'
            target_id: Branch id to filter by; empty clears the filter
        """
        self.filter_mode = FilterMode(mode)
        self.filter_target_id = target_id or ""
        self.apply_filter()

    def apply_filter(self) -> Optional[Dict[str, FilterResult]]:
        """Recompute filter results against the current forest."""
        if self.filter_mode is FilterMode.NONE or not self.filter_target_id:
            self.filter_results = None
        else:
            self.filter_results = filter_by_branch(
                self.roots, self.filter_target_id, self.filter_mode
            )
        return self.filter_results

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_entity(self, entity_id: Optional[str]) -> Optional[Entity]:
        """Find an entity in the caller's list by id."""
        if not entity_id:
            return None
        return next((entity for entity in self.entities if entity.id == entity_id), None)

    def find_node(self, entity_id: str) -> Optional[TreeNode]:
        """Find a node in the current forest by id."""
        return self._nodes.get(entity_id)

    def iter_nodes(self) -> Iterator[TreeNode]:
        """Iterate the forest in display (pre-)order."""
        return iter_preorder(self.roots)

    def node_count(self) -> int:
        return len(self._nodes)

    def would_create_cycle(self, entity_id: str, new_parent_id: Optional[str]) -> bool:
        """
        Check whether reporting ``entity_id`` to ``new_parent_id`` closes a cycle.

        Walks up from the new parent through the entity list; a cycle already
        present above the new parent does not count.
        """
        if not new_parent_id:
            return False
        parent_of = {entity.id: entity.reports_to for entity in self.entities}
        seen = set()
        current = new_parent_id
        while current and current not in seen:
            if current == entity_id:
                return True
            seen.add(current)
            current = parent_of.get(current)
        return False

    # ------------------------------------------------------------------
    # Structural changes
    # ------------------------------------------------------------------

    def reparent(
        self,
        entity_id: str,
        new_parent_id: Optional[str],
        reject_cycles: bool = False
    ) -> Optional[HierarchyChangeDetail]:
        """
        Point an entity at a new parent (None unlinks it) and rebuild.

        Args:
            entity_id: Entity being moved
            new_parent_id: New parent id, or None to make it a root
            reject_cycles: Raise instead of letting the rebuild repair a cycle

        Returns:
            HierarchyChangeDetail, or None when nothing changed (unknown
            entity, drop on itself, drop on its current parent)

        Raises:
            ReparentCycleError: If reject_cycles and the move closes a cycle
        """
        entity = self.find_entity(entity_id)
        if entity is None:
            logger.debug(f"Reparent ignored: unknown entity {entity_id}")
            return None

        old_parent_id = entity.reports_to or None
        new_parent_id = new_parent_id or None
        if new_parent_id == entity_id or new_parent_id == old_parent_id:
            logger.debug(f"Reparent ignored: {entity_id} already under {old_parent_id}")
            return None

        if reject_cycles and self.would_create_cycle(entity_id, new_parent_id):
            raise ReparentCycleError(entity_id, new_parent_id)

        entity.reports_to = new_parent_id
        logger.info(f"Reparented {entity_id}: {old_parent_id} -> {new_parent_id}")
        self.rebuild()

        return HierarchyChangeDetail(
            entity_id=entity_id,
            old_parent_id=old_parent_id,
            new_parent_id=new_parent_id,
        )

    def remove(self, entity_id: str) -> Optional[Entity]:
        """
        Delete an entity from the caller's list and rebuild.

        Its direct reports become orphan roots on the rebuild.

        Returns:
            The removed entity, or None if the id is unknown
        """
        for index, entity in enumerate(self.entities):
            if entity.id == entity_id:
                del self.entities[index]
                logger.info(f"Deleted entity {entity_id}")
                self.rebuild()
                return entity

        logger.debug(f"Delete ignored: unknown entity {entity_id}")
        return None

    # ------------------------------------------------------------------
    # Rendering policy
    # ------------------------------------------------------------------

    def is_dimmed(self, node: TreeNode) -> bool:
        return is_node_dimmed(node, self.filter_results)

    def is_hidden(self, node: TreeNode) -> bool:
        return is_node_hidden(node, self.filter_results, self.filter_mode)

    def to_dict(self) -> List[dict]:
        """Forest as JSON-ready dictionaries."""
        return [root.to_dict() for root in self.roots]

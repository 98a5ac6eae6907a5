"""
Exception types for the hierarchy engine.

Cycles in caller data are repaired, not raised; these cover the cases
where the caller explicitly asked for rejection.
"""


class OrgChartError(Exception):
    """Base class for org-chart errors."""


class DuplicateEntityError(OrgChartError, ValueError):
    """Raised when two entities share an id and the policy is 'reject'."""

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"Duplicate entity id: {entity_id}")


class ReparentCycleError(OrgChartError):
    """Raised when a reparent would make an entity its own ancestor."""

    def __init__(self, entity_id: str, new_parent_id: str):
        self.entity_id = entity_id
        self.new_parent_id = new_parent_id
        super().__init__(
            f"Moving {entity_id} under {new_parent_id} would create a reporting cycle"
        )

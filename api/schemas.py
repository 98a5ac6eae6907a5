"""
Pydantic schemas for inbound entity records and filter requests.

Records use the camelCase field names of the chart's JSON data.
"""
from typing import Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.constants import FilterMode
from core.models import Branch, Entity, Person


class EntityRecord(BaseModel):
    """One flat person/branch record."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    first_name: str = Field(alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    kind: Optional[Literal['person', 'branch']] = None
    role: str = ""
    reports_to: Optional[str] = Field(default=None, alias="reportsTo")
    branch_id: Optional[str] = Field(default=None, alias="branchId")
    branch_name: Optional[str] = Field(default=None, alias="branchName")
    branch_logo: Optional[str] = Field(default=None, alias="branchLogo")
    avatar: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, value):
        """Accept numeric ids from loosely typed sources."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator('reports_to', mode='before')
    @classmethod
    def blank_reports_to(cls, value):
        """Treat empty strings as 'no parent'."""
        if value == "":
            return None
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def resolved_kind(self) -> str:
        """Explicit kind if given; otherwise a surname means person."""
        if self.kind:
            return self.kind
        return 'person' if self.last_name else 'branch'

    def to_entity(self) -> Entity:
        """Convert to the Person/Branch tagged union."""
        common = {
            'id': self.id,
            'first_name': self.first_name,
            'role': self.role,
            'reports_to': self.reports_to,
            'branch_id': self.branch_id,
            'branch_name': self.branch_name,
            'avatar': self.avatar,
            'email': self.email,
            'phone': self.phone,
        }
        if self.resolved_kind() == 'person':
            return Person(last_name=self.last_name or "", **common)
        return Branch(branch_logo=self.branch_logo, **common)


class FilterRequest(BaseModel):
    """Branch filter parameters."""
    model_config = ConfigDict(populate_by_name=True)

    mode: FilterMode = FilterMode.NONE
    target_id: str = Field(default="", alias="targetId")


def parse_entities(records: Iterable[dict]) -> List[Entity]:
    """
    Validate raw records and convert them to entities.

    Args:
        records: Iterable of camelCase dicts

    Returns:
        List of Person/Branch entities in input order

    Raises:
        pydantic.ValidationError: If a record is missing id/firstName or malformed
    """
    return [EntityRecord.model_validate(record).to_entity() for record in records]

"""
Unit tests for api.schemas module.
"""
import pytest
from pydantic import ValidationError

from api.schemas import EntityRecord, FilterRequest, parse_entities
from core.constants import EntityKind, FilterMode
from core.models import Branch, Person


class TestEntityRecord:
    """Tests for record validation and conversion."""

    def test_person_from_surname(self):
        entity = EntityRecord.model_validate({
            'id': '2', 'firstName': 'Bob', 'lastName': 'Smith', 'role': 'CTO', 'reportsTo': '1',
        }).to_entity()

        assert isinstance(entity, Person)
        assert entity.display_name == 'Bob Smith'
        assert entity.reports_to == '1'

    def test_branch_without_surname(self):
        entity = EntityRecord.model_validate({
            'id': 'hq', 'firstName': 'HQ', 'role': 'Office', 'branchLogo': 'hq.png',
        }).to_entity()

        assert isinstance(entity, Branch)
        assert entity.branch_logo == 'hq.png'

    def test_explicit_kind_wins(self):
        entity = EntityRecord.model_validate({
            'id': 'x', 'firstName': 'Ops', 'lastName': 'Team', 'kind': 'branch',
        }).to_entity()

        assert entity.kind is EntityKind.BRANCH

    def test_numeric_ids_coerced(self):
        entity = EntityRecord.model_validate({'id': 7, 'firstName': 'A', 'lastName': 'B', 'reportsTo': 3}).to_entity()

        assert entity.id == '7'
        assert entity.reports_to == '3'

    def test_blank_reports_to(self):
        record = EntityRecord.model_validate({'id': '1', 'firstName': 'A', 'reportsTo': ''})
        assert record.reports_to is None

    def test_missing_first_name(self):
        with pytest.raises(ValidationError):
            EntityRecord.model_validate({'id': '1'})

    def test_empty_id(self):
        with pytest.raises(ValidationError):
            EntityRecord.model_validate({'id': '', 'firstName': 'A'})

    def test_snake_case_accepted(self):
        record = EntityRecord(id='1', first_name='A', last_name='B')
        assert record.resolved_kind() == 'person'


class TestParseEntities:
    def test_preserves_order(self):
        entities = parse_entities([
            {'id': 'z', 'firstName': 'Zoe'},
            {'id': 'a', 'firstName': 'Alice', 'lastName': 'A'},
        ])
        assert [e.id for e in entities] == ['z', 'a']


class TestFilterRequest:
    def test_aliases(self):
        request = FilterRequest.model_validate({'mode': 'isolate', 'targetId': 'west'})
        assert request.mode is FilterMode.ISOLATE
        assert request.target_id == 'west'

    def test_invalid_mode(self):
        with pytest.raises(ValidationError):
            FilterRequest.model_validate({'mode': 'spotlight'})

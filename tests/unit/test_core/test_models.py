"""
Unit tests for core.models module.
"""
import pytest

from core.constants import EntityKind
from core.models import Branch, FilterResult, Person, TreeNode, is_branch, is_person


class TestEntities:
    """Tests for the Person/Branch tagged union."""

    def test_person(self):
        person = Person(id='1', first_name='Alice', last_name='Johnson', role='CEO')

        assert person.kind is EntityKind.PERSON
        assert person.display_name == 'Alice Johnson'
        assert is_person(person)
        assert not is_branch(person)

    def test_branch(self):
        branch = Branch(id='hq', first_name='Headquarters')

        assert branch.kind is EntityKind.BRANCH
        assert branch.display_name == 'Headquarters'
        assert is_branch(branch)

    def test_kind_not_constructor_argument(self):
        """Test the discriminant is fixed per class."""
        with pytest.raises(TypeError):
            Person(id='1', first_name='A', last_name='B', kind=EntityKind.BRANCH)

    def test_to_dict_camel_case(self):
        data = Person(id='1', first_name='Bob', last_name='Smith', reports_to='0').to_dict()

        assert data['firstName'] == 'Bob'
        assert data['lastName'] == 'Smith'
        assert data['reportsTo'] == '0'
        assert data['kind'] == 'person'

    def test_branch_to_dict_has_logo(self):
        data = Branch(id='b', first_name='B', branch_logo='logo.png').to_dict()
        assert data['branchLogo'] == 'logo.png'
        assert 'lastName' not in data


class TestTreeNode:
    """Tests for TreeNode dataclass."""

    def test_defaults(self):
        node = TreeNode(entity=Branch(id='b', first_name='B'))

        assert node.children == []
        assert node.level == 0
        assert node.id == 'b'
        assert node.is_branch

    def test_children_default_independent(self):
        a = TreeNode(entity=Branch(id='a', first_name='A'))
        b = TreeNode(entity=Branch(id='b', first_name='B'))
        a.children.append(b)
        assert TreeNode(entity=Branch(id='c', first_name='C')).children == []

    def test_iter_subtree_preorder(self):
        leaf = TreeNode(entity=Person(id='3', first_name='C', last_name='C'), level=2)
        mid = TreeNode(entity=Person(id='2', first_name='B', last_name='B'), children=[leaf], level=1)
        other = TreeNode(entity=Person(id='4', first_name='D', last_name='D'), level=1)
        root = TreeNode(entity=Person(id='1', first_name='A', last_name='A'), children=[mid, other])

        assert [node.id for node in root.iter_subtree()] == ['1', '2', '3', '4']

    def test_to_dict_nested(self):
        child = TreeNode(entity=Person(id='2', first_name='B', last_name='B'), level=1)
        root = TreeNode(entity=Branch(id='1', first_name='A'), children=[child])

        data = root.to_dict()

        assert data['level'] == 0
        assert data['children'][0]['id'] == '2'
        assert data['children'][0]['level'] == 1


class TestFilterResult:
    def test_relevant(self):
        node = TreeNode(entity=Branch(id='b', first_name='B'))
        assert not FilterResult(node=node).relevant
        assert FilterResult(node=node, is_ancestor_of_match=True).relevant

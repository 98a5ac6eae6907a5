"""
Unit tests for utils.text_utils module.
"""
from core.models import Branch, Person
from utils.text_utils import collation_key, get_display_name, get_initials


class TestDisplayName:
    def test_person(self):
        assert get_display_name(Person(id='1', first_name='Alice', last_name='Johnson')) == 'Alice Johnson'

    def test_branch(self):
        assert get_display_name(Branch(id='b', first_name='Northwind')) == 'Northwind'


class TestInitials:
    def test_person(self):
        assert get_initials(Person(id='1', first_name='alice', last_name='johnson')) == 'AJ'

    def test_branch_uses_first_name_only(self):
        assert get_initials(Branch(id='b', first_name='Northwind')) == 'N'

    def test_empty_last_name(self):
        assert get_initials(Person(id='1', first_name='Cher', last_name='')) == 'C'


class TestCollationKey:
    def test_case_insensitive(self):
        assert collation_key('Alice') == collation_key('ALICE')

    def test_accent_insensitive(self):
        assert collation_key('Émile') == collation_key('emile')

    def test_empty(self):
        assert collation_key('') == ''

    def test_ordering(self):
        words = ['zoe', 'Émile', 'alice', 'Bob']
        assert sorted(words, key=collation_key) == ['alice', 'Bob', 'Émile', 'zoe']

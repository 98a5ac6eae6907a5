"""
Unit tests for hierarchy.traversal module.
"""
from hierarchy.traversal import count_nodes, iter_postorder, iter_preorder, max_depth
from hierarchy.tree_builder import build_tree


class TestTraversal:
    """Tests for traversal helpers."""

    def test_preorder(self, sample_entities):
        """Test parents come before children."""
        order = [node.id for node in iter_preorder(build_tree(sample_entities))]
        assert order.index('hq') < order.index('1') < order.index('2') < order.index('4')

    def test_postorder(self, sample_entities):
        """Test children come before parents."""
        order = [node.id for node in iter_postorder(build_tree(sample_entities))]
        assert order.index('4') < order.index('2') < order.index('1') < order.index('hq')
        assert order.index('5') < order.index('west')

    def test_counts(self, sample_entities):
        roots = build_tree(sample_entities)
        assert count_nodes(roots) == 7
        assert max_depth(roots) == 3

    def test_empty(self):
        assert list(iter_postorder([])) == []
        assert max_depth([]) == -1

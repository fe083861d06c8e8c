"""
Unit tests for outline.tree_utils module.
"""
import pytest
from core.models import OutlineNode
from outline.tree_utils import iter_outline, count_nodes, max_depth


@pytest.fixture
def forest():
    return [
        OutlineNode("A", 1, 10, [
            OutlineNode("A.1", 1, 4, [OutlineNode("A.1.a", 2, 4)]),
            OutlineNode("A.2", 5, 10),
        ]),
        OutlineNode("B", 11, 12),
    ]


class TestIterOutline:
    """Tests for iter_outline function."""
    
    def test_preorder_with_depth(self, forest):
        """Test nodes come in document order with their depth."""
        result = [(depth, node.title) for depth, node in iter_outline(forest)]
        
        assert result == [
            (0, "A"),
            (1, "A.1"),
            (2, "A.1.a"),
            (1, "A.2"),
            (0, "B"),
        ]
    
    def test_empty(self):
        """Test an empty forest yields nothing."""
        assert list(iter_outline([])) == []


class TestCounts:
    """Tests for count_nodes and max_depth."""
    
    def test_count_nodes(self, forest):
        assert count_nodes(forest) == 5
    
    def test_max_depth(self, forest):
        assert max_depth(forest) == 3
        assert max_depth([OutlineNode("Flat", 1, 1)]) == 1
        assert max_depth([]) == 0

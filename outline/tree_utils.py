"""
Traversal helpers for resolved outlines.
"""
from typing import Iterator, List, Sequence, Tuple

from core.models import OutlineNode


def iter_outline(forest: Sequence[OutlineNode]) -> Iterator[Tuple[int, OutlineNode]]:
    """
    Yield (depth, node) pairs in document order (pre-order).
    
    Uses an explicit stack, so deeply nested outlines are safe.
    """
    stack: List[Tuple[int, OutlineNode]] = [(0, node) for node in reversed(forest)]
    while stack:
        depth, node = stack.pop()
        yield depth, node
        stack.extend((depth + 1, child) for child in reversed(node.children))


def count_nodes(forest: Sequence[OutlineNode]) -> int:
    """Count all nodes in the forest."""
    return sum(1 for _ in iter_outline(forest))


def max_depth(forest: Sequence[OutlineNode]) -> int:
    """Depth of the deepest level (1 for a flat outline, 0 for an empty one)."""
    return max((depth + 1 for depth, _ in iter_outline(forest)), default=0)

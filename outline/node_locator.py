"""
Node lookup over a resolved outline.
"""

from typing import List, Optional, Sequence

from core.models import OutlineNode


def find_covering_path(forest: Sequence[OutlineNode], page: int) -> List[OutlineNode]:
    """
    Find the chain of nodes from the top level down to the deepest node covering a page.
    
    At every level the first node in document order whose range contains the
    page wins; the walk then continues into that node's children.
    
    Args:
        forest: Resolved outline forest
        page: 1-indexed page number
    
    Returns:
        Nodes from outermost to innermost, empty if nothing covers the page
    """
    path = []
    level = forest
    while level:
        match = next((node for node in level if node.contains(page)), None)
        if match is None:
            break
        path.append(match)
        level = match.children
    return path


def find_deepest_covering(forest: Sequence[OutlineNode], page: int) -> Optional[OutlineNode]:
    """
    Find the most specific outline node whose range contains a page.
    
    Args:
        forest: Resolved outline forest
        page: 1-indexed page number
    
    Returns:
        Deepest covering node, or None if no top-level node contains the page
    """
    path = find_covering_path(forest, page)
    return path[-1] if path else None

"""
Core domain models for the outline/selection workflow.

These are pure data structures without business logic.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class RawOutlineNode:
    """A bookmark as delivered by the document loader (no end page yet)."""
    title: str
    start_page: int
    items: List['RawOutlineNode'] = field(default_factory=list)


@dataclass
class OutlineNode:
    """A resolved outline node covering the inclusive range [start_page, end_page]."""
    title: str
    start_page: int
    end_page: int
    children: List['OutlineNode'] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        """Number of pages in the node's range."""
        return self.end_page - self.start_page + 1

    def contains(self, page: int) -> bool:
        """Check whether a page falls inside this node's range."""
        return self.start_page <= page <= self.end_page

    def to_dict(self) -> dict:
        """Convert to dictionary, children included (iterative, so depth is unbounded)."""
        root = self._fields_dict()
        stack = [(self, root)]
        while stack:
            node, state = stack.pop()
            for child in node.children:
                child_state = child._fields_dict()
                state['children'].append(child_state)
                stack.append((child, child_state))
        return root

    def _fields_dict(self) -> dict:
        return {
            'title': self.title,
            'start_page': self.start_page,
            'end_page': self.end_page,
            'page_count': self.page_count,
            'children': []
        }


@dataclass
class ExportResult:
    """Outcome of a slicing request."""
    filename: str
    pages: List[int] = field(default_factory=list)
    data: bytes = b""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when the slicer produced a document."""
        return self.error is None

"""
Page selection state.

Holds the set of 1-indexed page numbers marked for export and the
range-toggle operations the outline checkboxes drive.
"""
from typing import Iterable, Iterator, List, Optional

from core.models import OutlineNode


class SelectionSet:
    """Mutable set of selected pages bounded by the document's page count."""
    
    def __init__(self, total_pages: int = 0):
        """
        Initialize an empty selection.
        
        Args:
            total_pages: Number of pages in the loaded document
        """
        self.total_pages = total_pages
        self._pages = set()
    
    def __len__(self) -> int:
        return len(self._pages)
    
    def __contains__(self, page) -> bool:
        return page in self._pages
    
    def __iter__(self) -> Iterator[int]:
        return iter(self.sorted_pages())
    
    def __repr__(self):
        return f"<SelectionSet(pages={len(self._pages)}, total={self.total_pages})>"
    
    @property
    def pages(self) -> frozenset:
        """Read-only view of the selected pages."""
        return frozenset(self._pages)
    
    def is_empty(self) -> bool:
        """Check whether no page is selected."""
        return not self._pages
    
    def sorted_pages(self) -> List[int]:
        """Selected pages in ascending order."""
        return sorted(self._pages)
    
    def first_page(self) -> Optional[int]:
        """Lowest selected page, or None if the selection is empty."""
        return min(self._pages) if self._pages else None
    
    def toggle_range(self, start: int, end: int, select: bool) -> None:
        """
        Select or deselect every page in [start, end].
        
        The range is clamped to [1, total_pages]; an empty range after
        clamping is a no-op. Applying the same call twice is the same as once.
        
        Args:
            start: First page of the range (1-indexed)
            end: Last page of the range (inclusive)
            select: True to add pages, False to remove them
        """
        safe_start, safe_end = self._clamp(start, end)
        if safe_start > safe_end:
            return
        
        pages = range(safe_start, safe_end + 1)
        if select:
            self._pages.update(pages)
        else:
            self._pages.difference_update(pages)
    
    def toggle_node(self, node: OutlineNode) -> bool:
        """
        Flip an outline node's checkbox.
        
        Selects the node's range unless it is already fully selected, in
        which case the range is deselected.
        
        Returns:
            The new checked state of the node
        """
        return self.flip_range(node.start_page, node.end_page)
    
    def flip_range(self, start: int, end: int) -> bool:
        """
        Select [start, end] unless it is already fully selected, else deselect it.
        
        The range is clamped to [1, total_pages] before the fully-selected
        check, the same way toggle_range clamps it.
        
        Returns:
            True if the range ended up selected
        """
        safe_start, safe_end = self._clamp(start, end)
        select = not self.is_range_fully_selected(safe_start, safe_end)
        self.toggle_range(safe_start, safe_end, select)
        return select
    
    def select_pages(self, pages: Iterable[int], select: bool = True) -> None:
        """Select or deselect individual pages (out-of-range pages are ignored)."""
        for page in pages:
            self.toggle_range(page, page, select)
    
    def is_range_fully_selected(self, start: int, end: int) -> bool:
        """True iff every page in [start, end] is selected."""
        return all(page in self._pages for page in range(start, end + 1))
    
    def _clamp(self, start: int, end: int):
        return max(1, start), min(end, self.total_pages)
    
    def clear(self) -> None:
        """Deselect everything."""
        self._pages.clear()
    
    def reset(self, total_pages: int) -> None:
        """Start over for a newly loaded document."""
        self.total_pages = total_pages
        self._pages = set()

"""
Document Session

Owns everything tied to the currently loaded PDF: the resolved outline,
the page selection, the current page and the export processing flag.
"""
import asyncio
from typing import Awaitable, Callable, Iterable, List, Optional, Sequence

from core.models import ExportResult, OutlineNode, RawOutlineNode
from outline import (
    RangeResolver,
    base_name_from_filename,
    ensure_pdf_extension,
    find_covering_path,
    suggest_name
)
from selection import SelectionSet
from utils.pdf_utils import read_pdf_outline, slice_pdf


Slicer = Callable[[bytes, List[int]], Awaitable[bytes]]


async def default_slicer(file_bytes: bytes, pages: List[int]) -> bytes:
    """Slice a PDF off the event loop."""
    return await asyncio.to_thread(slice_pdf, file_bytes, pages)


class DocumentSession:
    """State for one open document."""
    
    def __init__(self, slicer: Optional[Slicer] = None, logger = None):
        """
        Initialize an empty session.
        
        Args:
            slicer: Async callable producing the new PDF from (bytes, pages)
            logger: Optional logger
        """
        self.slicer = slicer or default_slicer
        self.logger = logger
        self._reset()
    
    def _reset(self):
        self.filename: Optional[str] = None
        self.file_bytes: Optional[bytes] = None
        self.total_pages = 0
        self.outline: List[OutlineNode] = []
        self.selection = SelectionSet(0)
        self.current_page = 1
        self.is_processing = False
    
    @property
    def is_loaded(self) -> bool:
        """Check whether a document is open."""
        return self.total_pages > 0
    
    @property
    def can_export(self) -> bool:
        """Export is allowed with a file, a non-empty selection and nothing in flight."""
        return (
            self.file_bytes is not None
            and not self.selection.is_empty()
            and not self.is_processing
        )
    
    def load_document(self, file_bytes: bytes, filename: str) -> List[OutlineNode]:
        """
        Open a PDF, replacing whatever was loaded before.
        
        Args:
            file_bytes: Raw PDF content
            filename: Original filename
        
        Returns:
            Resolved outline
        """
        total_pages, raw_outline = read_pdf_outline(file_bytes)
        outline = self.on_document_load(total_pages, raw_outline)
        self.file_bytes = file_bytes
        self.filename = filename
        return outline
    
    def on_document_load(
        self,
        total_pages: int,
        raw_outline: Sequence[RawOutlineNode]
    ) -> List[OutlineNode]:
        """
        Resolve a freshly loaded outline and reset per-document state.
        
        Args:
            total_pages: Number of pages in the document
            raw_outline: Bookmarks with resolved start pages
        
        Returns:
            Resolved outline
        """
        self._reset()
        self.total_pages = max(total_pages, 0)
        self.selection.reset(self.total_pages)
        self.outline = RangeResolver.resolve(raw_outline, self.total_pages, logger=self.logger)
        
        if self.logger:
            self.logger.info(f"Loaded document with {self.total_pages} pages")
        
        return self.outline
    
    def close(self):
        """Discard the document, outline and selection."""
        self._reset()
    
    def toggle_range(self, start: int, end: int, select: bool):
        """Select or deselect a page range."""
        self.selection.toggle_range(start, end, select)
    
    def toggle_node(self, node: OutlineNode) -> bool:
        """Flip an outline node's checkbox; returns the new checked state."""
        return self.selection.toggle_node(node)
    
    def flip_range(self, start: int, end: int) -> bool:
        """Flip a page range like a checkbox; returns the new checked state."""
        return self.selection.flip_range(start, end)
    
    def select_pages(self, pages: Iterable[int], select: bool = True):
        """Select or deselect individual pages."""
        self.selection.select_pages(pages, select)
    
    def clear_selection(self):
        """Deselect everything."""
        self.selection.clear()
    
    def jump_to_page(self, page: int) -> int:
        """
        Move the viewer to a page, clamped into the document.
        
        Returns:
            The page actually shown
        """
        if self.is_loaded:
            self.current_page = min(max(page, 1), self.total_pages)
        return self.current_page
    
    def locate(self, page: int) -> List[OutlineNode]:
        """Outline path (outermost first) covering a page."""
        return find_covering_path(self.outline, page)
    
    def outline_state(self) -> List[dict]:
        """
        Outline as dictionaries with each node's checkbox state.
        
        Returns:
            Nested dicts with title, start_page, end_page, page_count,
            checked and children
        """
        states = [node.to_dict() for node in self.outline]
        stack = list(states)
        while stack:
            state = stack.pop()
            state['checked'] = self.selection.is_range_fully_selected(
                state['start_page'], state['end_page']
            )
            stack.extend(state['children'])
        return states
    
    def suggest_export_name(self) -> Optional[str]:
        """Suggested download name, or None while nothing is selected."""
        if self.selection.is_empty():
            return None
        base_name = base_name_from_filename(self.filename or "document")
        return suggest_name(base_name, self.selection.pages, self.outline)
    
    async def export(self, filename: Optional[str] = None) -> Optional[ExportResult]:
        """
        Slice the selected pages into a new PDF.
        
        Ignored (returns None) when there is no file, nothing is selected, or
        another export is still running. Slicer failures are reported in the
        result's error, verbatim, and never retried.
        
        Args:
            filename: Download name; the suggested name is used when blank
        
        Returns:
            ExportResult, or None if the request was ignored
        """
        if not self.can_export:
            if self.logger:
                self.logger.info("Export request ignored")
            return None
        
        if filename and filename.strip():
            final_name = ensure_pdf_extension(filename)
        else:
            final_name = self.suggest_export_name()
        
        pages = self.selection.sorted_pages()
        self.is_processing = True
        try:
            data = await self.slicer(self.file_bytes, pages)
        except Exception as e:
            if self.logger:
                self.logger.warning(f"Slicing failed: {e}")
            return ExportResult(filename=final_name, pages=pages, error=str(e))
        finally:
            self.is_processing = False
        
        if self.logger:
            self.logger.info(f"Exported {len(pages)} pages as {final_name}")
        
        return ExportResult(filename=final_name, pages=pages, data=data)

"""
PDF utilities for the outline/selection workflow.

Handles reading bookmarks and page counts, and slicing page subsets.
"""
from io import BytesIO
from typing import Iterable, List, Sequence, Tuple

import fitz  # PyMuPDF
from PyPDF2 import PdfReader, PdfWriter

from core.models import RawOutlineNode


def toc_to_raw_outline(toc: Sequence[Sequence]) -> List[RawOutlineNode]:
    """
    Convert a flat PyMuPDF table of contents into a nested raw outline.
    
    Args:
        toc: Entries of [level, title, page, ...] as returned by Document.get_toc()
    
    Returns:
        Raw outline forest. Entries whose destination does not resolve to a
        page (page < 1) start at page 1.
    """
    roots = []
    stack = []  # (level, node) of the current ancestor chain
    
    for entry in toc:
        level, title, page = entry[0], entry[1], entry[2]
        node = RawOutlineNode(title=str(title), start_page=page if page >= 1 else 1)
        
        # Attach to the nearest open entry with a lower level
        while stack and stack[-1][0] >= level:
            stack.pop()
        
        if stack:
            stack[-1][1].items.append(node)
        else:
            roots.append(node)
        stack.append((level, node))
    
    return roots


def read_pdf_outline(file_bytes: bytes) -> Tuple[int, List[RawOutlineNode]]:
    """
    Read the page count and bookmark tree of a PDF.
    
    Args:
        file_bytes: Raw PDF content
    
    Returns:
        Tuple of (total_pages, raw outline forest)
    """
    doc = fitz.open(stream=file_bytes, filetype="pdf")
    try:
        total_pages = doc.page_count
        toc = doc.get_toc(simple=True)
    finally:
        doc.close()
    
    return total_pages, toc_to_raw_outline(toc)


def slice_pdf(file_bytes: bytes, pages: Iterable[int]) -> bytes:
    """
    Build a new PDF containing exactly the requested pages.
    
    Pages are written in ascending page-number order regardless of the
    order they are given in.
    
    Args:
        file_bytes: Raw PDF content
        pages: 1-indexed page numbers
    
    Returns:
        Raw content of the new PDF
    
    Raises:
        ValueError: If no pages are requested or a page is out of range
    """
    page_numbers = sorted(set(pages))
    if not page_numbers:
        raise ValueError("No pages selected")
    
    reader = PdfReader(BytesIO(file_bytes))
    total_pages = len(reader.pages)
    
    invalid = [page for page in page_numbers if page < 1 or page > total_pages]
    if invalid:
        raise ValueError(
            f"Pages out of range for a {total_pages}-page document: "
            f"{', '.join(str(page) for page in invalid)}"
        )
    
    writer = PdfWriter()
    for page in page_numbers:
        writer.add_page(reader.pages[page - 1])  # 0-indexed
    
    buf = BytesIO()
    writer.write(buf)
    return buf.getvalue()

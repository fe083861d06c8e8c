"""
Export filename suggestion.

Derives a download name from the first selected page's outline node.
"""
import re
from typing import Iterable, Sequence

from core.constants import (
    FALLBACK_EXPORT_SUFFIX,
    FILENAME_REPLACEMENT,
    INVALID_FILENAME_CHARS,
    PDF_EXTENSION
)
from core.models import OutlineNode
from .node_locator import find_deepest_covering


def sanitize_filename_component(text: str) -> str:
    """
    Replace characters that are invalid in filenames and trim whitespace.
    
    Args:
        text: Raw text (usually an outline title)
    
    Returns:
        Text with each of < > : " / \\ | ? * replaced by an underscore
    """
    return re.sub(INVALID_FILENAME_CHARS, FILENAME_REPLACEMENT, text).strip()


def ensure_pdf_extension(filename: str) -> str:
    """Append .pdf unless the name already ends with it (case-insensitive)."""
    filename = filename.strip()
    if not filename.lower().endswith(PDF_EXTENSION):
        filename += PDF_EXTENSION
    return filename


def base_name_from_filename(filename: str) -> str:
    """Strip a trailing .pdf (case-insensitive) from an uploaded filename."""
    return re.sub(r'\.pdf$', '', filename, flags=re.IGNORECASE)


def suggest_name(
    base_name: str,
    selection: Iterable[int],
    forest: Sequence[OutlineNode]
) -> str:
    """
    Suggest a filename for exporting the selected pages.
    
    Args:
        base_name: Source document name without extension
        selection: Selected page numbers
        forest: Resolved outline forest
    
    Returns:
        "{base_name}_{suffix}.pdf" where suffix is the deepest covering title
    
    Raises:
        ValueError: If the selection is empty
    """
    pages = list(selection)
    if not pages:
        raise ValueError("Cannot suggest an export name for an empty selection")
    
    suffix = FALLBACK_EXPORT_SUFFIX
    node = find_deepest_covering(forest, min(pages))
    if node is not None:
        suffix = node.title
    
    return ensure_pdf_extension(f"{base_name}_{sanitize_filename_component(suffix)}")

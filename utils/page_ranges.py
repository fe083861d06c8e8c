"""
Parse page specs such as "1-3,5,10-12" into page numbers.
"""
from typing import List, Optional


def parse_page_spec(spec: str, total_pages: Optional[int] = None) -> List[int]:
    """
    Expand a page spec into a sorted, unique list of page numbers.
    
    Args:
        spec: Comma-separated pages and inclusive ranges, e.g. "1,2,5-8"
        total_pages: If given, pages past the end of the document are
            dropped and range ends are clamped before expansion
    
    Returns:
        Sorted list of 1-indexed page numbers
    
    Raises:
        ValueError: If a token is not a positive page or a valid range
    """
    pages = set()
    for token in spec.split(','):
        part = token.strip()
        if not part:
            continue
        
        if '-' in part:
            start_str, end_str = part.split('-', 1)
            start, end = int(start_str.strip()), int(end_str.strip())
            if start <= 0 or end < start:
                raise ValueError(f"Invalid range '{part}'")
            if total_pages is not None:
                end = min(end, total_pages)
            pages.update(range(start, end + 1))
            continue
        
        page = int(part)
        if page <= 0:
            raise ValueError(f"Invalid page '{part}'")
        if total_pages is None or page <= total_pages:
            pages.add(page)
    
    return sorted(pages)

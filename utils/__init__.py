"""Utilities package - Helper functions for PDF access and page specs."""

from .pdf_utils import (
    read_pdf_outline,
    toc_to_raw_outline,
    slice_pdf
)

from .page_ranges import parse_page_spec

__all__ = [
    # PDF utils
    'read_pdf_outline',
    'toc_to_raw_outline',
    'slice_pdf',
    
    # Page specs
    'parse_page_spec'
]

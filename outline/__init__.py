"""
Outline package - range resolution, lookup and export naming over bookmark trees.
"""

from .range_resolver import RangeResolver
from .node_locator import find_deepest_covering, find_covering_path
from .export_namer import (
    suggest_name,
    sanitize_filename_component,
    ensure_pdf_extension,
    base_name_from_filename
)
from .tree_utils import iter_outline, count_nodes, max_depth

__all__ = [
    'RangeResolver',
    'find_deepest_covering',
    'find_covering_path',
    'suggest_name',
    'sanitize_filename_component',
    'ensure_pdf_extension',
    'base_name_from_filename',
    'iter_outline',
    'count_nodes',
    'max_depth',
]

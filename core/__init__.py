"""Core package - Domain models and constants."""

from .models import RawOutlineNode, OutlineNode, ExportResult
from .constants import (
    FALLBACK_PAGE_TITLE,
    FALLBACK_EXPORT_SUFFIX,
    INVALID_FILENAME_CHARS,
    PDF_EXTENSION,
    AVAILABLE_MODELS,
    DEFAULT_ASSISTANT_MODEL,
    SETTING_KEYS
)

__all__ = [
    'RawOutlineNode',
    'OutlineNode',
    'ExportResult',
    'FALLBACK_PAGE_TITLE',
    'FALLBACK_EXPORT_SUFFIX',
    'INVALID_FILENAME_CHARS',
    'PDF_EXTENSION',
    'AVAILABLE_MODELS',
    'DEFAULT_ASSISTANT_MODEL',
    'SETTING_KEYS'
]

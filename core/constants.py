"""
Constants and configuration values for the outline/selection workflow.
"""

# Title template for the per-page outline synthesized when a PDF has no bookmarks
FALLBACK_PAGE_TITLE = "Page {page}"

# Export name suffix used when no outline node covers the first selected page
FALLBACK_EXPORT_SUFFIX = "Selection"

# Characters that are not allowed in exported filenames
INVALID_FILENAME_CHARS = r'[<>:"/\\|?*]'

# Replacement for each invalid filename character
FILENAME_REPLACEMENT = "_"

PDF_EXTENSION = ".pdf"

# Assistant models offered in settings (id -> display name)
AVAILABLE_MODELS = {
    'gemini-2.5-flash': 'Gemini 2.5 Flash (Balanced & Recommended)',
    'gemini-3-pro-preview': 'Gemini 3.0 Pro (High Reasoning)',
    'gemini-2.0-flash-lite-preview-02-05': 'Gemini 2.0 Flash Lite (Fastest)',
    'gemini-1.5-pro': 'Gemini 1.5 Pro (Legacy)',
}

DEFAULT_ASSISTANT_MODEL = 'gemini-2.5-flash'

# Keys of the persisted key-value settings store
SETTING_KEYS = {
    'api_key': 'pdfslice_api_key',
    'model_id': 'pdfslice_model_id',
}

"""
Pydantic schemas for API request/response validation.
"""
from typing import List, Optional
from pydantic import BaseModel


class OutlineNodeResponse(BaseModel):
    """Resolved outline node with its checkbox state."""
    title: str
    start_page: int
    end_page: int
    page_count: int
    checked: bool = False
    children: List['OutlineNodeResponse'] = []


class DocumentResponse(BaseModel):
    """Response for an opened document."""
    session_id: str
    filename: str
    total_pages: int
    current_page: int
    outline: List[OutlineNodeResponse]


class ToggleRangeRequest(BaseModel):
    """Request body for selecting or deselecting a page range."""
    start: int
    end: int
    # None flips the range like an outline checkbox
    select: Optional[bool] = None


class SelectPagesRequest(BaseModel):
    """Request body for selecting individual pages, e.g. "1-3,7"."""
    pages: str
    select: bool = True


class SelectionResponse(BaseModel):
    """Current page selection."""
    pages: List[int]
    count: int
    first_page: Optional[int] = None
    suggested_filename: Optional[str] = None


class JumpRequest(BaseModel):
    """Request body for moving the viewer."""
    page: int


class LocateResponse(BaseModel):
    """Deepest outline node covering a page and its ancestors."""
    page: int
    node: Optional[OutlineNodeResponse] = None
    path: List[str] = []


class ExportRequest(BaseModel):
    """Request body for exporting the selection."""
    filename: Optional[str] = None


class AssistantSettingsRequest(BaseModel):
    """Request body for saving assistant settings."""
    model_id: str
    api_key: str = ""


class AssistantSettingsResponse(BaseModel):
    """Saved assistant settings (the credential itself is never returned)."""
    model_id: str
    has_api_key: bool
    available_models: dict


OutlineNodeResponse.model_rebuild()

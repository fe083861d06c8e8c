"""
Workflow API for the outline-selection-export pipeline.

Provides endpoints for:
- Opening, replacing and closing PDF documents
- Browsing the resolved outline
- Range and page selection
- Exporting the selected pages as a new PDF
- Persisted assistant settings
"""
from typing import Optional
from urllib.parse import quote

from fastapi import FastAPI, File, UploadFile, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_document_session, get_session_registry
from api.schemas import (
    AssistantSettingsRequest,
    AssistantSettingsResponse,
    DocumentResponse,
    ExportRequest,
    JumpRequest,
    LocateResponse,
    SelectPagesRequest,
    SelectionResponse,
    ToggleRangeRequest
)
from config.settings import settings
from core.constants import AVAILABLE_MODELS
from data.database import init_database
from utils.page_ranges import parse_page_spec
from .document_session import DocumentSession
from .session_registry import SessionRegistry
from .settings_service import AssistantSettingsService


# Create FastAPI app
workflow_app = FastAPI(
    title="PDF Slice API",
    description="Browse a PDF's outline, select chapters or pages, and export them",
    version="1.0.0"
)


# Initialize database on startup
@workflow_app.on_event("startup")
async def startup_event():
    """Initialize database tables on startup."""
    init_database()
    print("✓ PDF Slice API initialized")


def _document_response(session_id: str, session: DocumentSession) -> dict:
    return {
        "session_id": session_id,
        "filename": session.filename,
        "total_pages": session.total_pages,
        "current_page": session.current_page,
        "outline": session.outline_state()
    }


def _selection_response(session: DocumentSession) -> dict:
    return {
        "pages": session.selection.sorted_pages(),
        "count": len(session.selection),
        "first_page": session.selection.first_page(),
        "suggested_filename": session.suggest_export_name()
    }


async def _load_upload(session: DocumentSession, file: UploadFile):
    """Read an uploaded PDF into a session."""
    if not file.filename or not file.filename.lower().endswith('.pdf'):
        raise HTTPException(status_code=400, detail="Only PDF files are supported")

    content = await file.read()
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="File too large")

    try:
        session.load_document(content, file.filename)
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"Could not read PDF: {str(e)}")


@workflow_app.post("/documents", response_model=DocumentResponse)
async def open_document(
    file: UploadFile = File(...),
    registry: SessionRegistry = Depends(get_session_registry)
):
    """
    Open a PDF and resolve its outline.

    Args:
        file: PDF file to open
        registry: Session registry

    Returns:
        Session id, page count and resolved outline
    """
    session_id = registry.create()
    session = registry.get(session_id)

    try:
        await _load_upload(session, file)
    except HTTPException:
        registry.close(session_id)
        raise

    return _document_response(session_id, session)


@workflow_app.put("/documents/{session_id}", response_model=DocumentResponse)
async def replace_document(
    session_id: str,
    file: UploadFile = File(...),
    session: DocumentSession = Depends(get_document_session)
):
    """
    Replace the open document; outline and selection start over.

    Args:
        session_id: Session ID
        file: New PDF file
        session: Document session

    Returns:
        Session id, page count and resolved outline
    """
    await _load_upload(session, file)
    return _document_response(session_id, session)


@workflow_app.get("/documents/{session_id}", response_model=DocumentResponse)
async def get_document(
    session_id: str,
    session: DocumentSession = Depends(get_document_session)
):
    """Get document metadata and the outline with checkbox states."""
    return _document_response(session_id, session)


@workflow_app.delete("/documents/{session_id}")
async def close_document(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry)
):
    """Close a document and discard its selection."""
    if not registry.close(session_id):
        raise HTTPException(status_code=404, detail="Document session not found")
    return {"closed": session_id}


@workflow_app.get("/documents/{session_id}/locate", response_model=LocateResponse)
async def locate_page(
    session_id: str,
    page: int = Query(..., ge=1, description="1-indexed page number"),
    session: DocumentSession = Depends(get_document_session)
):
    """
    Find the deepest outline node covering a page.

    Args:
        session_id: Session ID
        page: Page number
        session: Document session

    Returns:
        Deepest node (or null) and the titles on the way down
    """
    path = session.locate(page)
    node = None
    if path:
        deepest = path[-1]
        node = {
            "title": deepest.title,
            "start_page": deepest.start_page,
            "end_page": deepest.end_page,
            "page_count": deepest.page_count,
            "checked": session.selection.is_range_fully_selected(deepest.start_page, deepest.end_page),
            "children": []
        }
    return {"page": page, "node": node, "path": [item.title for item in path]}


@workflow_app.put("/documents/{session_id}/current-page")
async def jump_to_page(
    session_id: str,
    request: JumpRequest,
    session: DocumentSession = Depends(get_document_session)
):
    """Move the viewer to a page (clamped into the document)."""
    return {"current_page": session.jump_to_page(request.page)}


@workflow_app.get("/documents/{session_id}/selection", response_model=SelectionResponse)
async def get_selection(
    session_id: str,
    session: DocumentSession = Depends(get_document_session)
):
    """Get the selected pages and the suggested export name."""
    return _selection_response(session)


@workflow_app.post("/documents/{session_id}/selection/range", response_model=SelectionResponse)
async def toggle_range(
    session_id: str,
    request: ToggleRangeRequest,
    session: DocumentSession = Depends(get_document_session)
):
    """
    Select or deselect a page range.

    When 'select' is omitted the range is flipped: selected unless it is
    already fully selected.
    """
    if request.select is None:
        session.flip_range(request.start, request.end)
    else:
        session.toggle_range(request.start, request.end, request.select)
    return _selection_response(session)


@workflow_app.post("/documents/{session_id}/selection/pages", response_model=SelectionResponse)
async def select_pages(
    session_id: str,
    request: SelectPagesRequest,
    session: DocumentSession = Depends(get_document_session)
):
    """Select or deselect individual pages from a spec like "1-3,7"."""
    try:
        pages = parse_page_spec(request.pages, session.total_pages)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    session.select_pages(pages, request.select)
    return _selection_response(session)


@workflow_app.delete("/documents/{session_id}/selection", response_model=SelectionResponse)
async def clear_selection(
    session_id: str,
    session: DocumentSession = Depends(get_document_session)
):
    """Clear the selection."""
    session.clear_selection()
    return _selection_response(session)


@workflow_app.post("/documents/{session_id}/export")
async def export_selection(
    session_id: str,
    request: Optional[ExportRequest] = None,
    session: DocumentSession = Depends(get_document_session)
):
    """
    Export the selected pages as a new PDF download.

    Args:
        session_id: Session ID
        request: Optional filename override
        session: Document session

    Returns:
        PDF bytes with a Content-Disposition filename
    """
    if session.selection.is_empty():
        raise HTTPException(status_code=409, detail="Select at least one page to export")
    if session.is_processing:
        raise HTTPException(status_code=409, detail="An export is already in progress")

    result = await session.export(request.filename if request else None)
    if result is None:
        raise HTTPException(status_code=409, detail="Export is not available")
    if not result.ok:
        raise HTTPException(status_code=500, detail=result.error)

    return Response(
        content=result.data,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(result.filename)}"}
    )


@workflow_app.get("/settings/assistant", response_model=AssistantSettingsResponse)
async def get_assistant_settings(db: Session = Depends(get_db)):
    """Get the saved assistant model and whether a credential is stored."""
    saved = AssistantSettingsService(db).load()
    return {
        "model_id": saved.model_id,
        "has_api_key": saved.has_api_key,
        "available_models": AVAILABLE_MODELS
    }


@workflow_app.put("/settings/assistant", response_model=AssistantSettingsResponse)
async def save_assistant_settings(
    request: AssistantSettingsRequest,
    db: Session = Depends(get_db)
):
    """Save the assistant model and credential."""
    try:
        saved = AssistantSettingsService(db).save(request.model_id, request.api_key)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "model_id": saved.model_id,
        "has_api_key": saved.has_api_key,
        "available_models": AVAILABLE_MODELS
    }


@workflow_app.get("/")
async def root():
    """API root endpoint."""
    return {
        "name": "PDF Slice API",
        "version": "1.0.0",
        "endpoints": {
            "open_document": "POST /documents",
            "replace_document": "PUT /documents/{session_id}",
            "get_document": "GET /documents/{session_id}",
            "close_document": "DELETE /documents/{session_id}",
            "locate": "GET /documents/{session_id}/locate?page=N",
            "toggle_range": "POST /documents/{session_id}/selection/range",
            "select_pages": "POST /documents/{session_id}/selection/pages",
            "clear_selection": "DELETE /documents/{session_id}/selection",
            "export": "POST /documents/{session_id}/export",
            "assistant_settings": "GET|PUT /settings/assistant"
        }
    }


# Export app for uvicorn
app = workflow_app

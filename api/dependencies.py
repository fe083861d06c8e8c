"""
API Dependencies - Dependency injection for FastAPI.

Provides reusable dependencies for database sessions and document sessions.
"""
from typing import Generator

from fastapi import Depends, HTTPException

from data.database import get_db_manager
from serving.document_session import DocumentSession
from serving.session_registry import SessionRegistry, get_registry


def get_db() -> Generator:
    """
    Dependency for database session.
    
    Yields:
        SQLAlchemy session
    """
    db_manager = get_db_manager()
    db = db_manager.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_registry() -> SessionRegistry:
    """
    Dependency for the document session registry.
    
    Returns:
        Global SessionRegistry
    """
    return get_registry()


def get_document_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry)
) -> DocumentSession:
    """
    Dependency resolving a session id path parameter.
    
    Raises:
        HTTPException: 404 if the session does not exist
    """
    session = registry.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Document session not found")
    return session

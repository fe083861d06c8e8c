"""
In-memory registry of open document sessions.
"""
import logging
import uuid
from collections import OrderedDict
from typing import Callable, Optional

from config.settings import settings
from .document_session import DocumentSession


class SessionRegistry:
    """
    Maps session ids to DocumentSession instances.
    
    Holds at most max_sessions documents; opening one more closes the least
    recently used session.
    """
    
    def __init__(
        self,
        session_factory: Optional[Callable[[], DocumentSession]] = None,
        max_sessions: Optional[int] = None,
        logger = None
    ):
        """
        Initialize registry.
        
        Args:
            session_factory: Builds new sessions (default: DocumentSession with this logger)
            max_sessions: Session limit (default: MAX_OPEN_DOCUMENTS setting)
            logger: Optional logger, also handed to the sessions it builds
        """
        self.logger = logger
        self.max_sessions = max(max_sessions or settings.max_open_documents, 1)
        self._session_factory = session_factory or (lambda: DocumentSession(logger=self.logger))
        self._sessions: "OrderedDict[str, DocumentSession]" = OrderedDict()
    
    def __len__(self) -> int:
        return len(self._sessions)
    
    def __contains__(self, session_id) -> bool:
        return session_id in self._sessions
    
    def create(self) -> str:
        """Create an empty session and return its id."""
        while len(self._sessions) >= self.max_sessions:
            evicted_id, evicted = self._sessions.popitem(last=False)
            evicted.close()
            if self.logger:
                self.logger.info(f"Closed least recently used document session {evicted_id}")
        
        session_id = str(uuid.uuid4())
        self._sessions[session_id] = self._session_factory()
        return session_id
    
    def get(self, session_id: str) -> Optional[DocumentSession]:
        """Get a session by id, marking it as recently used."""
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session
    
    def close(self, session_id: str) -> bool:
        """Close and forget a session."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.close()
        return True


# Global registry instance
_registry = None


def get_registry() -> SessionRegistry:
    """Get or create the global session registry."""
    global _registry
    if _registry is None:
        _registry = SessionRegistry(logger=logging.getLogger("pdfslice"))
    return _registry

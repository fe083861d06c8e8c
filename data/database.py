"""
Database connection and session management.

Provides utilities for creating the settings database engine, sessions,
and table initialization.
"""
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from config.settings import settings
from .db_models import Base


class DatabaseManager:
    """Manages database connections and sessions."""
    
    def __init__(self, database_url: str = None):
        """
        Initialize database manager.
        
        Args:
            database_url: SQLAlchemy database URL. If None, uses the
                         DATABASE_URL setting.
        """
        self.database_url = database_url or settings.database_url
        
        # SQLite connections are shared with FastAPI's worker threads
        if self.database_url.startswith('sqlite'):
            self.engine = create_engine(
                self.database_url,
                connect_args={'check_same_thread': False},
                echo=False
            )
        else:
            self.engine = create_engine(self.database_url, echo=False)
        
        # Create session factory
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )
    
    def create_tables(self):
        """Create all database tables."""
        Base.metadata.create_all(bind=self.engine)
        print(f"✓ Database tables created at: {self.database_url}")
    
    def drop_tables(self):
        """Drop all database tables. Use with caution!"""
        Base.metadata.drop_all(bind=self.engine)
        print(f"✗ Database tables dropped from: {self.database_url}")
    
    def get_session(self) -> Session:
        """
        Get a new database session.
        
        Remember to close the session when done, or use the session
        context manager instead.
        """
        return self.SessionLocal()
    
    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions.
        
        Automatically commits on success and rolls back on exception.
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


# Global database manager instance
_db_manager = None


def get_db_manager(database_url: str = None) -> DatabaseManager:
    """
    Get or create global database manager instance.
    
    Args:
        database_url: Optional database URL. Only used on first call.
    
    Returns:
        DatabaseManager instance
    """
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager(database_url)
    return _db_manager


def init_database(database_url: str = None):
    """
    Initialize database by creating all tables.
    
    Args:
        database_url: Optional database URL
    """
    db_manager = get_db_manager(database_url)
    db_manager.create_tables()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Context manager for database sessions using global manager.
    
    Usage:
        with session_scope() as session:
            SettingsRepository(session).get('pdfslice_model_id')
    """
    with get_db_manager().session() as session:
        yield session


"""Data access layer - Database models and connections."""

from .db_models import Base, AppSetting
from .database import (
    DatabaseManager,
    get_db_manager,
    session_scope,
    init_database
)
from .repositories import SettingsRepository

__all__ = [
    # Models
    'Base',
    'AppSetting',
    
    # Database
    'DatabaseManager',
    'get_db_manager',
    'session_scope',
    'init_database',
    
    # Repositories
    'SettingsRepository'
]

"""
Repository pattern for data access.

Provides clean separation between data access and business logic.
"""
from typing import Dict, Optional
from sqlalchemy.orm import Session

from data.db_models import AppSetting


class SettingsRepository:
    """Repository for AppSetting operations."""
    
    def __init__(self, session: Session):
        self.session = session
    
    def get(self, key: str) -> Optional[str]:
        """Get a setting value, or None if it was never saved."""
        setting = self.session.query(AppSetting).filter(
            AppSetting.key == key
        ).first()
        return setting.value if setting else None
    
    def get_all(self) -> Dict[str, str]:
        """Get all settings as a dictionary."""
        return {
            setting.key: setting.value
            for setting in self.session.query(AppSetting).order_by(AppSetting.key).all()
        }
    
    def set(self, key: str, value: str) -> AppSetting:
        """Create or update a setting."""
        setting = self.session.query(AppSetting).filter(
            AppSetting.key == key
        ).first()
        if setting:
            setting.value = value
        else:
            setting = AppSetting(key=key, value=value)
            self.session.add(setting)
        self.session.commit()
        self.session.refresh(setting)
        return setting
    
    def delete(self, key: str) -> bool:
        """Delete a setting."""
        setting = self.session.query(AppSetting).filter(
            AppSetting.key == key
        ).first()
        if setting:
            self.session.delete(setting)
            self.session.commit()
            return True
        return False

"""
Assistant Settings Service

Loads and saves the assistant's model id and API credential in the
key-value settings store.
"""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from config.settings import settings
from core.constants import AVAILABLE_MODELS, SETTING_KEYS
from data.repositories import SettingsRepository


@dataclass
class AssistantSettings:
    """Persisted assistant configuration."""
    model_id: str
    api_key: str = ""
    
    @property
    def has_api_key(self) -> bool:
        """Check whether a credential has been saved."""
        return bool(self.api_key)


class AssistantSettingsService:
    """Service for reading and writing assistant settings."""
    
    def __init__(self, session: Session, default_model: Optional[str] = None):
        """
        Initialize settings service.
        
        Args:
            session: SQLAlchemy database session
            default_model: Model id used when nothing valid is saved
        """
        self.repository = SettingsRepository(session)
        self.default_model = default_model or settings.default_assistant_model
    
    def load(self) -> AssistantSettings:
        """
        Load saved settings.
        
        A saved model id that is no longer offered falls back to the default.
        
        Returns:
            AssistantSettings instance
        """
        saved = self.repository.get_all()
        model_id = saved.get(SETTING_KEYS['model_id'])
        if model_id not in AVAILABLE_MODELS:
            model_id = self.default_model
        
        return AssistantSettings(
            model_id=model_id,
            api_key=saved.get(SETTING_KEYS['api_key']) or ""
        )
    
    def save(self, model_id: str, api_key: str) -> AssistantSettings:
        """
        Persist settings.
        
        Args:
            model_id: One of AVAILABLE_MODELS
            api_key: Assistant API credential; blank removes the saved one
        
        Returns:
            The saved settings
        
        Raises:
            ValueError: If the model id is not offered
        """
        if model_id not in AVAILABLE_MODELS:
            raise ValueError(f"Unknown model: {model_id}")
        
        self.repository.set(SETTING_KEYS['model_id'], model_id)
        api_key = api_key.strip()
        if api_key:
            self.repository.set(SETTING_KEYS['api_key'], api_key)
        else:
            self.repository.delete(SETTING_KEYS['api_key'])
        return self.load()

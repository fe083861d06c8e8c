"""
Database models for persisted application settings.

Stores a small key-value table (assistant model id, API key).
"""
from datetime import datetime

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.ext.declarative import declarative_base

Base = declarative_base()


class AppSetting(Base):
    """A single persisted setting."""
    
    __tablename__ = 'app_settings'
    
    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    
    def __repr__(self):
        return f"<AppSetting(key={self.key})>"

"""
Unit tests for data.db_models module.
"""
import pytest
from datetime import datetime
from data.db_models import AppSetting


class TestAppSetting:
    """Tests for AppSetting model."""
    
    def test_create_setting(self, test_db_session):
        """Test creating a setting."""
        setting = AppSetting(key="pdfslice_model_id", value="gemini-2.5-flash")
        
        test_db_session.add(setting)
        test_db_session.commit()
        
        stored = test_db_session.query(AppSetting).filter(
            AppSetting.key == "pdfslice_model_id"
        ).first()
        assert stored.value == "gemini-2.5-flash"
    
    def test_timestamps(self, test_db_session):
        """Test created_at and updated_at are set."""
        setting = AppSetting(key="k", value="v")
        
        test_db_session.add(setting)
        test_db_session.commit()
        
        assert isinstance(setting.created_at, datetime)
        assert isinstance(setting.updated_at, datetime)
    
    def test_repr(self):
        """Test string representation names the key."""
        assert "pdfslice_api_key" in repr(AppSetting(key="pdfslice_api_key", value=""))

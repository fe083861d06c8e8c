"""
Configuration management using Pydantic Settings.

Environment variables:
- DATABASE_URL: SQLAlchemy database URL for the settings store
- DEFAULT_ASSISTANT_MODEL: Model id used when none has been saved
- MAX_UPLOAD_MB: Largest PDF accepted by the API
- MAX_OPEN_DOCUMENTS: Open documents kept before the least recently used is closed
"""
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Database Configuration
    database_url: str = Field(
        default="sqlite:///pdfslice_settings.db",
        env="DATABASE_URL"
    )
    
    # Assistant Configuration
    default_assistant_model: str = Field(default="gemini-2.5-flash", env="DEFAULT_ASSISTANT_MODEL")
    
    # API Configuration
    max_upload_mb: int = Field(default=200, env="MAX_UPLOAD_MB")
    max_open_documents: int = Field(default=16, env="MAX_OPEN_DOCUMENTS")
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
    
    @property
    def max_upload_bytes(self) -> int:
        """Upload limit in bytes."""
        return self.max_upload_mb * 1024 * 1024


# Global settings instance
settings = Settings()

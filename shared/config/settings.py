"""
Application settings and configuration.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings
from dotenv import find_dotenv
from pydantic import ConfigDict

# Find .env file automatically
ENV_FILE = find_dotenv(usecwd=True) or ".env"

# MongoDB caps a single document at 16MB, keep inline payloads just under it
DEFAULT_MAX_UPLOAD_SIZE_BYTES: int = 15 * 1024 * 1024

class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    api_title: str = "PDF Upload Service"
    api_description: str = "Upload, list and download PDF documents"
    api_version: str = "1.0"
    environment: str = "development"
    debug: bool = False

    #Logging Configuration
    log_level: str = "INFO"
    log_file: str = "logs/file-upload-api.log"
    log_to_console: bool = True

    repository_type: str = "mongo"  # Options: in_memory, mongo
    storage_mode: str = "blob"  # Options: blob, disk

    # MongoDB
    mongo_uri: str = "mongodb://127.0.0.1:27017/xiaoyu_investment"
    mongo_database: str = "xiaoyu_investment"  # used when the URI names no database
    files_collection_name: str = "investmentfiles"
    mongo_server_selection_timeout_ms: int = 5000

    # Uploads
    upload_dir: str = "uploads"
    upload_field_name: str = "pdfFile"
    allowed_content_types: list[str] = ["application/pdf"]
    max_upload_size_bytes: int = DEFAULT_MAX_UPLOAD_SIZE_BYTES

    # API Configuration
    api_host: str = "0.0.0.0"
    port: int = 3000
    api_reload: bool = False

    model_config = ConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
        )

    @property
    def is_disk_mode(self) -> bool:
        return self.storage_mode.lower() == "disk"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings instance
    """
    return Settings()

settings = get_settings()

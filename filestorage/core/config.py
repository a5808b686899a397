"""
Application configuration management using Pydantic Settings.
Reads environment variables and an optional .env file.
"""

from typing import Optional
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


STORAGE_BACKENDS = ("azure_blob", "local")


class AzureBlobSettings(BaseSettings):
    """Azure Blob Storage configuration settings."""

    connection_string: Optional[str] = Field(
        default=None,
        description="Storage account connection string"
    )
    container: str = Field(default="files", description="Blob container name")
    sas_expiry_hours: float = Field(
        default=1.0,
        description="Lifetime of generated download URLs in hours"
    )

    model_config = SettingsConfigDict(env_prefix="AZURE_BLOB_")


class LocalStorageSettings(BaseSettings):
    """Local filesystem storage configuration."""

    base_path: str = Field(default="./file_storage", description="Root directory for stored files")

    model_config = SettingsConfigDict(env_prefix="LOCAL_STORAGE_")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format"
    )
    file_path: Optional[str] = Field(default=None, description="Log file path")
    max_file_size: int = Field(default=10_000_000, description="Max log file size in bytes")
    backup_count: int = Field(default=5, description="Number of backup log files")

    # Structured logging
    use_json: bool = Field(default=False, description="Use JSON logging format")

    model_config = SettingsConfigDict(env_prefix="LOGGING_")


class Settings(BaseSettings):
    """Main application settings."""

    app_name: str = Field(default="File Storage", description="Application name")
    environment: str = Field(default="development", description="Environment (development, production, testing)")
    storage_backend: str = Field(default="azure_blob", description="Storage backend (azure_blob, local)")

    # Component settings
    azure_blob: AzureBlobSettings = Field(default_factory=AzureBlobSettings)
    local_storage: LocalStorageSettings = Field(default_factory=LocalStorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        allowed = ["development", "production", "testing"]
        if v not in allowed:
            raise ValueError(f"Environment must be one of {allowed}")
        return v

    @field_validator("storage_backend")
    @classmethod
    def validate_storage_backend(cls, v):
        if v not in STORAGE_BACKENDS:
            raise ValueError(f"Storage backend must be one of {list(STORAGE_BACKENDS)}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Application settings instance
    """
    return Settings()


def reload_settings() -> Settings:
    """Drop the cached settings and load them again from the environment."""
    get_settings.cache_clear()
    return get_settings()


"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bizintel.shared import EnumEnvironment, EnumLogLevel
from bizintel.shared.consts import (
    DOCUMENT_CALL_TIMEOUT,
    STANDARD_CALL_TIMEOUT,
    STATUS_PROBE_TIMEOUT,
)
from bizintel.shared.env import load_secret_file_variables  # noqa: F401


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    mongo_uri: str = Field(
        default="mongodb://localhost:27017/?replicaSet=rs0",
        description="MongoDB connection URI (a replica set is required for transactions)",
    )
    database_name: str = Field(
        default="bizintel", description="Name of the MongoDB database"
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_", case_sensitive=False, extra="ignore"
    )


class ServiceSettings(BaseSettings):
    """HTTP service configuration settings."""

    title: str = Field(default="Business Intelligence API", description="API title")
    description: str = Field(
        default="Business intelligence and decision pipeline: churn scoring, "
        "sales forecasting, analytics and operational alerts",
        description="API description",
    )
    version: str = Field(default="1.0.0", description="API version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("APP_GIT_COMMIT", "GIT_COMMIT"),
    )
    build_time: str = Field(
        default="unknown",
        description="Build timestamp",
        validation_alias=AliasChoices("APP_BUILD_TIME", "BUILD_TIME"),
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    host: str = Field(default="0.0.0.0", description="Interface to bind the server")
    port: int = Field(default=8080, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_", case_sensitive=False, extra="ignore"
    )


class AIServiceSettings(BaseSettings):
    """External AI service configuration settings."""

    base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the AI service",
        validation_alias=AliasChoices("AI_BASE_URL", "AI_SERVICES_URL"),
    )
    timeout: float = Field(
        default=STANDARD_CALL_TIMEOUT, gt=0, description="Standard call timeout (s)"
    )
    document_timeout: float = Field(
        default=DOCUMENT_CALL_TIMEOUT, gt=0, description="Document call timeout (s)"
    )
    status_timeout: float = Field(
        default=STATUS_PROBE_TIMEOUT, gt=0, description="Status probe timeout (s)"
    )

    model_config = SettingsConfigDict(
        env_prefix="AI_", case_sensitive=False, extra="ignore"
    )


class UploadSettings(BaseSettings):
    """Document upload configuration settings."""

    max_file_size: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Maximum accepted document size in bytes",
        validation_alias=AliasChoices("UPLOAD_MAX_FILE_SIZE", "MAX_FILE_SIZE"),
    )
    allowed_mime_types: List[str] = Field(
        default_factory=lambda: ["image/jpeg", "image/png", "application/pdf"],
        description="MIME types accepted for document extraction",
    )
    allowed_extensions: List[str] = Field(
        default_factory=lambda: ["jpeg", "jpg", "png", "pdf"],
        description="File name extensions accepted for document extraction",
    )

    model_config = SettingsConfigDict(
        env_prefix="UPLOAD_", case_sensitive=False, extra="ignore"
    )


class BusinessSettings(BaseSettings):
    """Business rules configuration settings."""

    tax_rate: float = Field(
        default=0.10, ge=0, le=1, description="Tax rate applied to order quotes"
    )

    model_config = SettingsConfigDict(
        env_prefix="BUSINESS_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    service: ServiceSettings = Field(default_factory=ServiceSettings)
    ai: AIServiceSettings = Field(default_factory=AIServiceSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    business: BusinessSettings = Field(default_factory=BusinessSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()

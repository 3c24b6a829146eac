"""
Configuration settings for the nullresults.club backend.

This module handles all configuration settings including the database
connection, the base URL the pages use to reach the experiments API, and
logging.
"""

import logging
from typing import Optional, Dict, Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings with environment variable support.
    """

    # FastAPI Configuration
    app_name: str = Field(
        default="nullresults.club",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # API Configuration
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=8000,
        description="API server port"
    )

    # CORS Configuration
    cors_origins: str = Field(
        default="*",
        description="Comma-separated CORS origins"
    )

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./nullresults.db",
        description="SQLAlchemy database URL; empty disables persistence"
    )
    database_echo: bool = Field(
        default=False,
        description="Echo SQL statements to the log"
    )

    # Page client Configuration
    api_base_url: Optional[str] = Field(
        default=None,
        description="Base URL of the experiments API used by the pages (None = in-process)"
    )
    client_timeout: float = Field(
        default=10.0,
        description="Timeout for calls from the pages to the experiments API (seconds)"
    )
    display_timezone: str = Field(
        default="UTC",
        description="IANA time zone used when rendering timestamps"
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional log file path"
    )

    @field_validator('client_timeout')
    def validate_client_timeout(cls, v):
        """Validate client timeout is positive."""
        if v <= 0:
            raise ValueError('Client timeout must be positive')
        return v

    @field_validator('display_timezone')
    def validate_display_timezone(cls, v):
        """Validate display time zone is a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f'Unknown time zone: {v}')
        return v

    @field_validator('log_level')
    def validate_log_level(cls, v):
        """Validate log level is valid."""
        valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if v.upper() not in valid_levels:
            raise ValueError(f'Log level must be one of: {valid_levels}')
        return v.upper()

    @property
    def cors_origin_list(self) -> list[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def initialize_logging(settings: Optional[Settings] = None) -> None:
    """Initialize logging configuration based on settings."""
    settings = settings or get_settings()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )

    # Set specific loggers
    logging.getLogger('uvicorn').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)

    if settings.debug:
        logging.getLogger('sqlalchemy.engine').setLevel(logging.INFO)


def get_system_info(settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Get system configuration information for debugging.

    Returns:
        Dictionary with system configuration details
    """
    settings = settings or get_settings()
    return {
        "app_name": settings.app_name,
        "app_version": settings.app_version,
        "debug": settings.debug,
        "log_level": settings.log_level,
        "api_host": settings.api_host,
        "api_port": settings.api_port,
        "database_configured": bool(settings.database_url),
        "api_base_url": settings.api_base_url or "in-process",
        "display_timezone": settings.display_timezone,
    }

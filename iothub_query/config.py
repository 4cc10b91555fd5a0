"""Configuration management for the IoT Hub query client."""

import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client settings with environment variable support."""

    # Paging settings
    default_page_size: int = Field(default=100, ge=1)
    request_timeout: float = Field(default=30.0, gt=0)
    api_version: str = "2021-04-12"

    # Non-text queries send a fixed "select * from devices" body when enabled
    legacy_select_all_body: bool = True

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Emulator settings
    emulator_host: str = "127.0.0.1"
    emulator_port: int = 8080
    emulator_token: Optional[str] = None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    model_config = {
        "env_prefix": "IOTHUB_QUERY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
        "env_parse_none_str": "None",
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get client settings."""
    return settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=settings.log_format
    )
    logging.getLogger().setLevel(getattr(logging, settings.log_level))

# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to the document store credential, run options and logging config

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DOC_STORE_URL = "https://upp-prod-delivery-eu.upp.ft.com/__document-store-api/content/"


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="IMAGE_INSPECTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Document store access
    auth: str = Field(default="", description="Base64 encoded basic auth for the delivery cluster")
    doc_store_url: str = Field(
        default=DEFAULT_DOC_STORE_URL, description="Document store content endpoint, the content id is appended"
    )
    request_id_prefix: str = Field(
        default="tid_ftimageinspector_", description="Prefix of the X-Request-Id header sent with every lookup"
    )

    # Verification behaviour
    provenance_marker: str = Field(
        default="tid_", description="Substring the publishReference of every record must contain; deployment specific"
    )
    print_only: bool = Field(default=False, description="Skip provenance/structural checks and only list content")
    delay_ms: int = Field(default=1000, ge=0, description="Pause between seed identifiers in milliseconds")

    # Input and output files
    uuid_file: Path = Field(default=Path("uuids.json"), description="JSON array of seed content ids")
    broken_file: Path = Field(default=Path("broken-images"), description="Report of failing ids, one per line")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance

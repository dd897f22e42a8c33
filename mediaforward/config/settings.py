"""
Configuration management with Pydantic settings.
Supports environment variables, a .env file and secure credential handling.
"""
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BANNER_URL = "https://raw.githubusercontent.com/afrinode-dev/UserBot/refs/heads/main/bot.png"


class Settings(BaseSettings):
    """Application settings with validation and type safety."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Telegram API Configuration
    api_id: int = Field(..., description="Telegram API ID from my.telegram.org")
    api_hash: str = Field(..., min_length=1, description="Telegram API Hash from my.telegram.org")

    # Forwarding Configuration
    dest_chat: str = Field(..., min_length=1, description="Destination chat ID or username")
    admin_id: str = Field(..., min_length=1, description="User ID allowed to run admin commands")
    banner_url: str = Field(default=DEFAULT_BANNER_URL, description="Image attached to the /menu message")
    sources: str = Field(
        default="",
        description="Comma-separated source chat IDs, used only when no sources file exists",
    )

    # Storage Configuration
    session_file_path: Path = Field(
        default=Path(".session"),
        validation_alias="session_file",
        description="File holding the Telethon string session",
    )
    sources_file_path: Path = Field(
        default=Path("sources.json"),
        validation_alias="sources_file",
        description="JSON file holding the source registry",
    )
    messages_file_path: Optional[Path] = Field(
        default=None,
        validation_alias="messages_file",
        description="Optional JSON file overriding reply templates",
    )

    # Behaviour Configuration
    notify_unauthorized_callbacks: bool = Field(default=False)
    forward_retry_attempts: int = Field(default=0, ge=0, le=10)
    flood_wait_multiplier: float = Field(default=1.0, ge=1.0, le=5.0)
    max_flood_wait: int = Field(default=300, ge=0)
    connection_retries: int = Field(default=5, ge=0)

    # Logging Configuration
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_file: Optional[Path] = Field(default=None)
    debug_mode: bool = Field(default=False)

    @field_validator("api_hash", "dest_chat", "admin_id", "banner_url", mode="before")
    @classmethod
    def strip_strings(cls, v):
        """Normalize identifiers read from the environment."""
        if isinstance(v, (str, int)):
            return str(v).strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def initial_sources(self) -> List[str]:
        """Parse the comma-separated SOURCES variable, dropping blanks."""
        return [x.strip() for x in self.sources.split(",") if x.strip()]


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get application settings instance, building it on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def is_admin(settings: Settings, user_id) -> bool:
    """Check if a sender or user ID matches the configured admin."""
    if user_id is None:
        return False
    return str(user_id).strip() == settings.admin_id

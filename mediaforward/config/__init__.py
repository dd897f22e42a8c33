"""Configuration module for the media forwarding userbot."""

from .settings import Settings, get_settings, is_admin, DEFAULT_BANNER_URL

__all__ = [
    "Settings",
    "get_settings",
    "is_admin",
    "DEFAULT_BANNER_URL"
]

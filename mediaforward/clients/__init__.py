"""Telegram client management."""

from .user_client import UserClientManager, to_peer

__all__ = [
    "UserClientManager",
    "to_peer"
]

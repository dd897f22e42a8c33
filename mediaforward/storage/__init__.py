"""File-backed persistence for the source registry and the client session."""

from .json_store import JsonFileStore
from .session_store import SessionStore

__all__ = [
    "JsonFileStore",
    "SessionStore"
]

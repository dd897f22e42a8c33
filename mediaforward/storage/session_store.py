"""
Session persistence for the Telethon user client.
Stores the serialized StringSession as plain text.
"""
import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class SessionStore:
    """Loads and saves the string session of the user account."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> str:
        """Return the saved session string, or an empty string for a new session."""
        try:
            return self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            logger.info("No session file found, creating new session")
            return ""
        except OSError as e:
            logger.error(f"Error reading session file {self.path}: {e}")
            return ""

    def save(self, session_string: str) -> bool:
        """Persist the session string. Failures are logged, never raised."""
        try:
            if not self.path.parent.exists():
                self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(session_string, encoding="utf-8")
            logger.info("Session saved successfully")
            return True
        except OSError as e:
            logger.error(f"Error saving session: {e}")
            return False

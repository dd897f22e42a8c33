"""
User client manager using Telethon for MTProto access.
Handles the user session, authentication and the send/forward operations.
"""
from typing import Callable, List, Optional, Union

import structlog
from telethon import TelegramClient
from telethon.sessions import StringSession

from mediaforward.config import Settings
from mediaforward.exceptions import ClientNotRunningError
from mediaforward.storage import SessionStore

logger = structlog.get_logger(__name__)

Peer = Union[int, str]


def to_peer(chat_id: Union[int, str]) -> Peer:
    """Numeric IDs become ints for Telethon; usernames and links stay strings."""
    if isinstance(chat_id, int):
        return chat_id
    value = str(chat_id).strip()
    if value.lstrip("-").isdigit():
        return int(value)
    return value


class UserClientManager:
    """Manages the Telethon user client for MTProto operations."""

    def __init__(self, settings: Settings, session_store: Optional[SessionStore] = None):
        self.settings = settings
        self.session_store = session_store or SessionStore(settings.session_file_path)
        self.client: Optional[TelegramClient] = None
        self._is_running = False

    def initialize(self) -> None:
        """Create the Telethon client from the saved string session."""
        logger.info("Initializing Telethon user client...")

        saved = self.session_store.load()
        try:
            session = StringSession(saved or None)
        except ValueError as e:
            logger.error("Saved session is invalid, creating new session", error=str(e))
            session = StringSession()

        self.client = TelegramClient(
            session,
            self.settings.api_id,
            self.settings.api_hash,
            connection_retries=self.settings.connection_retries,
            device_model="Media Forward Userbot",
            app_version="1.0.0"
        )
        logger.info("Telethon user client initialized")

    async def start(self) -> None:
        """Connect and log in, prompting on the terminal on first run.

        Raises if the account cannot be authorized.
        """
        if not self.client:
            self.initialize()

        logger.info("Starting Telethon user client...")
        await self.client.start()

        if not await self.client.is_user_authorized():
            raise RuntimeError("User client not authorized")

        self._is_running = True
        self.save_session()

        me = await self.client.get_me()
        logger.info("Client initialized and connected",
                    user_id=me.id, first_name=me.first_name, username=me.username)

    def save_session(self) -> bool:
        if not self.client:
            return False
        return self.session_store.save(self.client.session.save())

    async def stop(self) -> None:
        """Disconnect the client. Errors are logged, not raised."""
        if not self.client:
            return

        logger.info("Stopping Telethon user client...")
        try:
            await self.client.disconnect()
            logger.info("Telethon user client stopped")
        except Exception as e:
            logger.error("Error disconnecting user client", error=str(e))
        finally:
            self._is_running = False

    def add_event_handler(self, callback: Callable, event) -> None:
        if not self.client:
            self.initialize()
        self.client.add_event_handler(callback, event)

    def _require_running(self) -> TelegramClient:
        if not self.client or not self._is_running:
            raise ClientNotRunningError("User client not running")
        return self.client

    async def send_message(self, chat_id: Union[int, str], text: str,
                           file: Optional[str] = None, buttons: Optional[List] = None):
        """Send a message, optionally with a file and inline buttons."""
        client = self._require_running()
        return await client.send_message(to_peer(chat_id), text, file=file, buttons=buttons)

    async def forward_message(self, destination: Union[int, str],
                              source_chat: Union[int, str], message_id: int):
        """Forward one message. Errors propagate to the caller."""
        client = self._require_running()
        return await client.forward_messages(
            to_peer(destination), message_id, from_peer=to_peer(source_chat)
        )

    @property
    def disconnected(self):
        """Future resolved when the connection is lost for good."""
        return self.client.disconnected if self.client else None

    @property
    def is_running(self) -> bool:
        """Check if user client is currently running."""
        return self._is_running

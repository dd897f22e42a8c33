"""
Read-only views of the Telethon events the userbot reacts to.
Routing and command logic only ever sees these, never raw Telethon objects.
"""
from dataclasses import dataclass
from typing import Optional


def _normalize_id(value) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip()


@dataclass(frozen=True)
class InboundMessageEvent:
    """A new message seen by the user account."""
    chat_id: str
    message_id: int
    sender_id: Optional[str] = None
    text: Optional[str] = None
    has_photo: bool = False
    has_video: bool = False
    has_audio: bool = False
    has_document: bool = False

    @property
    def has_media(self) -> bool:
        return self.has_photo or self.has_video or self.has_audio or self.has_document

    @classmethod
    def from_telethon(cls, event) -> "InboundMessageEvent":
        """Build a view from a ``telethon.events.NewMessage.Event``."""
        message = event.message
        return cls(
            chat_id=_normalize_id(event.chat_id),
            message_id=message.id,
            sender_id=_normalize_id(event.sender_id),
            text=message.message or None,
            has_photo=bool(message.photo),
            has_video=bool(message.video),
            has_audio=bool(message.audio),
            has_document=bool(message.document),
        )


@dataclass(frozen=True)
class InboundCallbackEvent:
    """An inline button press."""
    user_id: str
    chat_id: str
    data: str

    @classmethod
    def from_telethon(cls, event) -> "InboundCallbackEvent":
        """Build a view from a ``telethon.events.CallbackQuery.Event``."""
        data = event.data or b""
        if isinstance(data, bytes):
            data = data.decode("utf-8", errors="replace")
        return cls(
            user_id=_normalize_id(event.sender_id),
            chat_id=_normalize_id(event.chat_id),
            data=data,
        )

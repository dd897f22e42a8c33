"""
Reply actions produced by the command dispatcher.
They describe what to send; the handler registry performs the I/O.
"""
from dataclasses import dataclass
from typing import Union

from mediaforward.ui.keyboards import KeyboardSpec


@dataclass(frozen=True)
class Reply:
    """Reply to the message that carried the command."""
    text: str


@dataclass(frozen=True)
class SendMenu:
    """Send the menu (banner, caption, inline keyboard) to a chat."""
    chat_id: str
    caption: str
    banner_url: str
    keyboard: KeyboardSpec


@dataclass(frozen=True)
class SendToChat:
    chat_id: str
    text: str


@dataclass(frozen=True)
class AnswerCallback:
    """Answer the pressed button with a short notification."""
    text: str


ReplyAction = Union[Reply, SendMenu, SendToChat, AnswerCallback]

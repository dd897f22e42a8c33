"""Event handlers for admin commands and forwarding."""

from .actions import AnswerCallback, Reply, ReplyAction, SendMenu, SendToChat
from .command_dispatcher import CommandDispatcher
from .handler_registry import HandlerRegistry

__all__ = [
    "AnswerCallback",
    "Reply",
    "ReplyAction",
    "SendMenu",
    "SendToChat",
    "CommandDispatcher",
    "HandlerRegistry"
]

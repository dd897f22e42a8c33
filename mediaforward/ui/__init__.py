"""UI components for the admin interface."""

from .keyboards import (
    CallbackAction, KeyboardBuilder, MenuKeyboard, KeyboardSpec, to_telethon_buttons
)
from .menus import MenuFormatter
from .messages import MessageTemplates

__all__ = [
    "CallbackAction",
    "KeyboardBuilder",
    "MenuKeyboard",
    "KeyboardSpec",
    "to_telethon_buttons",
    "MenuFormatter",
    "MessageTemplates"
]

"""
Inline keyboard components for the admin menu.
Rows are described as (label, callback data) pairs and turned into Telethon buttons.
"""
from enum import Enum
from typing import List, Sequence, Tuple

from telethon import Button

from mediaforward.ui.messages import MessageTemplates

ButtonSpec = Tuple[str, str]
KeyboardSpec = Tuple[Tuple[ButtonSpec, ...], ...]


class CallbackAction(Enum):
    """Callback payloads carried by the menu buttons."""
    ADD_SOURCE = "add_source"
    REMOVE_SOURCE = "remove_source"
    LIST_SOURCES = "list_sources"
    TOGGLE_FORWARD = "toggle_forward"


class KeyboardBuilder:
    """Builder for creating inline keyboards with consistent layout."""

    def __init__(self):
        self.buttons: List[List[ButtonSpec]] = []
        self.current_row: List[ButtonSpec] = []

    def add_button(self, text: str, callback_data: str) -> 'KeyboardBuilder':
        """Add a button to the current row."""
        self.current_row.append((text, callback_data))
        return self

    def new_row(self) -> 'KeyboardBuilder':
        """Start a new row of buttons."""
        if self.current_row:
            self.buttons.append(self.current_row)
            self.current_row = []
        return self

    def add_row(self, buttons: Sequence[ButtonSpec]) -> 'KeyboardBuilder':
        """Add a complete row of buttons. Each tuple is (text, callback_data)."""
        self.new_row()
        for text, callback_data in buttons:
            self.add_button(text, callback_data)
        return self

    def build(self) -> KeyboardSpec:
        """Build an immutable description of the keyboard."""
        self.new_row()
        return tuple(tuple(row) for row in self.buttons)


def to_telethon_buttons(keyboard: KeyboardSpec) -> List[List[Button]]:
    """Convert a keyboard description to Telethon inline buttons."""
    return [
        [Button.inline(text, data=callback_data.encode("utf-8")) for text, callback_data in row]
        for row in keyboard
    ]


class MenuKeyboard:
    """Two-row admin menu keyboard."""

    @staticmethod
    def create(templates: MessageTemplates, forwarding_enabled: bool) -> KeyboardSpec:
        toggle_label = (
            templates.button_stop_forward if forwarding_enabled
            else templates.button_start_forward
        )
        builder = KeyboardBuilder()
        builder.add_row([
            (templates.button_add_source, CallbackAction.ADD_SOURCE.value),
            (templates.button_remove_source, CallbackAction.REMOVE_SOURCE.value)
        ])
        builder.add_row([
            (templates.button_list_sources, CallbackAction.LIST_SOURCES.value),
            (toggle_label, CallbackAction.TOGGLE_FORWARD.value)
        ])
        return builder.build()

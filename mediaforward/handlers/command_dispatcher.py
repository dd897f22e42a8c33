"""
Command dispatcher for admin text commands and menu button presses.
Only the configured admin can trigger anything; other senders get no reply.
"""
from typing import Awaitable, Callable, Dict, List, Optional

import structlog

from mediaforward.config import Settings, is_admin
from mediaforward.core import (
    ForwardingGate, ForwardStats, InboundCallbackEvent, InboundMessageEvent, SourceRegistry
)
from mediaforward.exceptions import (
    InvalidSourceError, SourceAlreadyExistsError, SourceNotFoundError
)
from mediaforward.ui import CallbackAction, MenuFormatter, MessageTemplates

from .actions import AnswerCallback, Reply, ReplyAction, SendMenu, SendToChat

logger = structlog.get_logger(__name__)

CommandHandler = Callable[[InboundMessageEvent, List[str]], Awaitable[Optional[ReplyAction]]]


class CommandDispatcher:
    """Maps admin commands and button payloads to registry/gate operations."""

    def __init__(self, settings: Settings, registry: SourceRegistry, gate: ForwardingGate,
                 templates: Optional[MessageTemplates] = None,
                 stats: Optional[ForwardStats] = None):
        self.settings = settings
        self.registry = registry
        self.gate = gate
        self.templates = templates or MessageTemplates()
        self.formatter = MenuFormatter(self.templates)
        self.stats = stats or ForwardStats()

        self._commands: Dict[str, CommandHandler] = {
            "/menu": self._handle_menu,
            "/addsource": self._handle_add_source,
            "/removesource": self._handle_remove_source,
            "/listsources": self._handle_list_sources,
            "/startforward": self._handle_start_forward,
            "/stopforward": self._handle_stop_forward,
            "/status": self._handle_status,
        }

    @property
    def commands(self) -> List[str]:
        return list(self._commands)

    async def dispatch(self, event: InboundMessageEvent) -> Optional[ReplyAction]:
        """Run the command in ``event`` if the sender is the admin.

        The first whitespace-separated token must equal a known command;
        anything else yields None.
        """
        if not is_admin(self.settings, event.sender_id):
            return None
        if not event.text:
            return None

        tokens = event.text.split()
        if not tokens:
            return None

        handler = self._commands.get(tokens[0])
        if handler is None:
            return None

        logger.info("Admin command", command=tokens[0], chat_id=event.chat_id)
        return await handler(event, tokens[1:])

    async def dispatch_callback(self, event: InboundCallbackEvent) -> Optional[ReplyAction]:
        """Handle a menu button press, matched exactly on its payload."""
        if not is_admin(self.settings, event.user_id):
            logger.warning("Callback from unauthorized user", user_id=event.user_id)
            if self.settings.notify_unauthorized_callbacks:
                return AnswerCallback(self.templates.unauthorized)
            return None

        try:
            action = CallbackAction(event.data)
        except ValueError:
            logger.debug("Unknown callback data", data=event.data)
            return None

        logger.info("Admin callback", action=action.value, chat_id=event.chat_id)

        if action == CallbackAction.ADD_SOURCE:
            return AnswerCallback(self.templates.hint_addsource)
        elif action == CallbackAction.REMOVE_SOURCE:
            return AnswerCallback(self.templates.hint_removesource)
        elif action == CallbackAction.LIST_SOURCES:
            return SendToChat(event.chat_id, self.formatter.format_sources_list(self.registry.list()))
        elif action == CallbackAction.TOGGLE_FORWARD:
            enabled = self.gate.toggle()
            return AnswerCallback(self.formatter.format_forwarding_state(enabled))
        return None

    # Command handlers
    async def _handle_menu(self, event: InboundMessageEvent, args: List[str]) -> ReplyAction:
        caption, keyboard = self.formatter.format_menu(self.gate.is_enabled)
        return SendMenu(
            chat_id=event.chat_id,
            caption=caption,
            banner_url=self.settings.banner_url,
            keyboard=keyboard
        )

    async def _handle_add_source(self, event: InboundMessageEvent, args: List[str]) -> ReplyAction:
        if not args:
            return Reply(self.templates.usage_addsource)

        source_id = args[0]
        try:
            await self.registry.add(source_id)
        except SourceAlreadyExistsError:
            return Reply(self.templates.source_exists)
        except InvalidSourceError:
            return Reply(self.templates.usage_addsource)
        return Reply(self.templates.render("source_added", source_id=source_id))

    async def _handle_remove_source(self, event: InboundMessageEvent, args: List[str]) -> ReplyAction:
        if not args:
            return Reply(self.templates.usage_removesource)

        source_id = args[0]
        try:
            await self.registry.remove(source_id)
        except SourceNotFoundError:
            return Reply(self.templates.source_not_found)
        except InvalidSourceError:
            return Reply(self.templates.usage_removesource)
        return Reply(self.templates.render("source_removed", source_id=source_id))

    async def _handle_list_sources(self, event: InboundMessageEvent, args: List[str]) -> ReplyAction:
        return Reply(self.formatter.format_sources_list(self.registry.list()))

    async def _handle_start_forward(self, event: InboundMessageEvent, args: List[str]) -> ReplyAction:
        self.gate.enable()
        return Reply(self.templates.forward_started)

    async def _handle_stop_forward(self, event: InboundMessageEvent, args: List[str]) -> ReplyAction:
        self.gate.disable()
        return Reply(self.templates.forward_stopped)

    async def _handle_status(self, event: InboundMessageEvent, args: List[str]) -> ReplyAction:
        return Reply(self.formatter.format_status(
            self.gate.is_enabled,
            len(self.registry),
            self.settings.dest_chat,
            self.stats.as_dict()
        ))

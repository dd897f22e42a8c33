"""
Handler registry wiring Telethon events to the router and the dispatcher.
Each handler is an isolated unit of failure: errors are logged, never raised.
"""
import structlog
from telethon import events

from mediaforward.clients import UserClientManager
from mediaforward.core import InboundCallbackEvent, InboundMessageEvent, MessageRouter
from mediaforward.ui import to_telethon_buttons

from .actions import AnswerCallback, Reply, ReplyAction, SendMenu, SendToChat
from .command_dispatcher import CommandDispatcher

logger = structlog.get_logger(__name__)


class HandlerRegistry:
    """Registers the userbot's event handlers on the user client."""

    def __init__(self, user_client: UserClientManager, router: MessageRouter,
                 dispatcher: CommandDispatcher):
        self.user_client = user_client
        self.router = router
        self.dispatcher = dispatcher
        self._registered = False

    def register_handlers(self) -> None:
        """Register all handlers with the user client."""
        if self._registered:
            return

        self.user_client.add_event_handler(self.handle_forwarding, events.NewMessage())
        self.user_client.add_event_handler(self.handle_command, events.NewMessage())
        self.user_client.add_event_handler(self.handle_callback_query, events.CallbackQuery())

        self._registered = True
        logger.info("Event handlers registered", commands=self.dispatcher.commands)

    async def handle_forwarding(self, event) -> None:
        """Forward qualifying media messages from source chats."""
        try:
            await self.router.process(InboundMessageEvent.from_telethon(event))
        except Exception as e:
            logger.error("Error handling new message", error=str(e), exc_info=True)

    async def handle_command(self, event) -> None:
        """Run admin text commands."""
        try:
            action = await self.dispatcher.dispatch(InboundMessageEvent.from_telethon(event))
            if action is not None:
                await self.execute(action, event)
        except Exception as e:
            logger.error("Error handling command", error=str(e), exc_info=True)

    async def handle_callback_query(self, event) -> None:
        """Handle presses on the menu's inline buttons."""
        try:
            action = await self.dispatcher.dispatch_callback(InboundCallbackEvent.from_telethon(event))
            if action is not None:
                await self.execute(action, event)
                if not isinstance(action, AnswerCallback):
                    # Stop the button spinner on the admin's client
                    await event.answer()
        except Exception as e:
            logger.error("Error handling callback query", error=str(e), exc_info=True)

    async def execute(self, action: ReplyAction, event) -> None:
        """Perform the I/O described by a reply action."""
        if isinstance(action, Reply):
            await event.reply(action.text)
        elif isinstance(action, SendMenu):
            await self.user_client.send_message(
                action.chat_id,
                action.caption,
                file=action.banner_url,
                buttons=to_telethon_buttons(action.keyboard)
            )
        elif isinstance(action, SendToChat):
            await self.user_client.send_message(action.chat_id, action.text)
        elif isinstance(action, AnswerCallback):
            await event.answer(action.text)
        else:
            raise TypeError(f"Unsupported reply action: {action!r}")

"""
Main application entry point for the media forwarding userbot.

Builds the service object owning the source registry, the forwarding gate and
the Telethon user client, registers the event handlers and runs until a
shutdown signal arrives.
"""
import asyncio
import logging
import signal
import sys
from typing import Optional

import structlog
from pydantic import ValidationError
from pydantic_settings import SettingsError

from mediaforward.clients import UserClientManager
from mediaforward.config import Settings, get_settings
from mediaforward.core import ForwardingGate, ForwardStats, MessageRouter, SourceRegistry
from mediaforward.handlers import CommandDispatcher, HandlerRegistry
from mediaforward.storage import JsonFileStore, SessionStore
from mediaforward.ui import MessageTemplates

logger = structlog.get_logger(__name__)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure structlog over the stdlib logging module."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(ensure_ascii=False)
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = logging.INFO
    handlers = [logging.StreamHandler()]
    if settings is not None:
        level = logging.DEBUG if settings.debug_mode else getattr(logging, settings.log_level)
        if settings.log_file:
            handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=handlers,
        force=True
    )
    # Telethon is chatty at INFO
    logging.getLogger("telethon").setLevel(logging.WARNING)


class MediaForwardApp:
    """Service object owning all runtime state of the userbot."""

    def __init__(self, settings: Settings, user_client: Optional[UserClientManager] = None):
        self.settings = settings
        self.templates = MessageTemplates.load(settings.messages_file_path)
        self.stats = ForwardStats()
        self.gate = ForwardingGate()
        self.registry = SourceRegistry(
            JsonFileStore(settings.sources_file_path),
            default_sources=settings.initial_sources
        )
        self.user_client = user_client or UserClientManager(
            settings, SessionStore(settings.session_file_path)
        )
        self.router = MessageRouter(
            self.registry,
            self.gate,
            self.user_client,
            settings.dest_chat,
            stats=self.stats,
            retry_attempts=settings.forward_retry_attempts,
            flood_wait_multiplier=settings.flood_wait_multiplier,
            max_flood_wait=settings.max_flood_wait
        )
        self.dispatcher = CommandDispatcher(
            settings, self.registry, self.gate, templates=self.templates, stats=self.stats
        )
        self.handler_registry = HandlerRegistry(self.user_client, self.router, self.dispatcher)
        self._shutdown_event = asyncio.Event()
        self.disconnect_error: Optional[BaseException] = None

    async def initialize(self) -> None:
        """Load sources, create the client and register handlers."""
        logger.info("Initializing userbot...")

        self.registry.load()
        self.user_client.initialize()
        self.handler_registry.register_handlers()

        logger.info("Userbot initialization complete",
                    sources=len(self.registry), destination=self.settings.dest_chat)

    async def start(self) -> None:
        """Start the client and wait for shutdown or disconnection."""
        await self.user_client.start()
        logger.info("Userbot started, forwarding is enabled")

        self._install_signal_handlers()

        shutdown_waiter = asyncio.ensure_future(self._shutdown_event.wait())
        disconnected = self.user_client.disconnected
        waiters = [shutdown_waiter]
        if disconnected is not None:
            waiters.append(disconnected)

        await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        if not shutdown_waiter.done():
            shutdown_waiter.cancel()

        if disconnected is not None and disconnected.done() and not disconnected.cancelled():
            self.disconnect_error = disconnected.exception()

    def _install_signal_handlers(self) -> None:
        # Installed after login so Ctrl+C still interrupts the interactive prompt
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, self.request_shutdown, sig)
            except NotImplementedError:
                signal.signal(sig, lambda signum, frame: self.request_shutdown(signum))

    async def shutdown(self) -> None:
        """Disconnect the client. Registry and gate state are discarded."""
        logger.info("Shutting down...")
        await self.user_client.stop()
        logger.info("Shutdown complete")

    @property
    def shutdown_requested(self) -> bool:
        return self._shutdown_event.is_set()

    def request_shutdown(self, signum: Optional[int] = None) -> None:
        """Handle shutdown signals."""
        logger.info("Received signal, initiating shutdown", signal=signum)
        self._shutdown_event.set()


async def main(settings: Optional[Settings] = None) -> int:
    """Run the userbot and return the process exit code."""
    if settings is None:
        try:
            settings = get_settings()
        except ValidationError as e:
            configure_logging()
            logger.error("Invalid configuration", errors=[
                {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
                for err in e.errors(include_url=False, include_input=False)
            ])
            return 1
        except SettingsError as e:
            configure_logging()
            logger.error("Invalid configuration", error=str(e))
            return 1

    configure_logging(settings)
    app = MediaForwardApp(settings)

    exit_code = 0
    try:
        await app.initialize()
        await app.start()
        if not app.shutdown_requested:
            error = app.disconnect_error
            if error is not None:
                logger.error("Connection to Telegram lost", error=str(error), exc_info=error)
            else:
                logger.error("Connection to Telegram lost")
            exit_code = 1
    except Exception as e:
        logger.error("Fatal error in main application", error=str(e), exc_info=e)
        exit_code = 1
    finally:
        await app.shutdown()

    return exit_code


def run() -> None:
    """Console script entry point."""
    try:
        exit_code = asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Application terminated by user")
        exit_code = 0
    sys.exit(exit_code)


if __name__ == "__main__":
    run()

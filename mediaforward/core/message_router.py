"""
Message router deciding which inbound messages are forwarded.
A message qualifies when forwarding is on, it comes from a registered source
and it carries a photo, video, audio file or document.
"""
import asyncio
from dataclasses import dataclass
from typing import Optional, Protocol, Union

import structlog
from telethon.errors import FloodWaitError

from mediaforward.core.events import InboundMessageEvent
from mediaforward.core.forwarding_gate import ForwardingGate
from mediaforward.core.source_registry import SourceRegistry
from mediaforward.core.stats import ForwardStats

logger = structlog.get_logger(__name__)


class Forwarder(Protocol):
    async def forward_message(self, destination: str, source_chat: str, message_id: int):
        ...


@dataclass(frozen=True)
class Forward:
    destination: str
    source_id: str
    message_id: int


@dataclass(frozen=True)
class Ignore:
    reason: str


RouteDecision = Union[Forward, Ignore]

IGNORE_DISABLED = Ignore("forwarding_disabled")
IGNORE_NOT_A_SOURCE = Ignore("not_a_source")
IGNORE_NO_MEDIA = Ignore("no_media")


class MessageRouter:
    """Routes qualifying media messages to the destination chat."""

    def __init__(self, registry: SourceRegistry, gate: ForwardingGate,
                 forwarder: Forwarder, destination: str,
                 stats: Optional[ForwardStats] = None,
                 retry_attempts: int = 0,
                 flood_wait_multiplier: float = 1.0,
                 max_flood_wait: int = 300):
        self.registry = registry
        self.gate = gate
        self.forwarder = forwarder
        self.destination = destination
        self.stats = stats or ForwardStats()
        self.retry_attempts = retry_attempts
        self.flood_wait_multiplier = flood_wait_multiplier
        self.max_flood_wait = max_flood_wait

    def route(self, event: InboundMessageEvent) -> RouteDecision:
        """Decide what to do with a message, checks short-circuit in order."""
        if not self.gate.is_enabled:
            return IGNORE_DISABLED
        if event.chat_id not in self.registry:
            return IGNORE_NOT_A_SOURCE
        if not event.has_media:
            return IGNORE_NO_MEDIA
        return Forward(self.destination, event.chat_id, event.message_id)

    async def process(self, event: InboundMessageEvent) -> RouteDecision:
        """Route a message and issue the forward call when it qualifies.

        Forward failures are logged and counted, never raised.
        """
        decision = self.route(event)
        if isinstance(decision, Ignore):
            self.stats.record_ignored()
            return decision

        await self._forward(decision)
        return decision

    async def _forward(self, decision: Forward) -> bool:
        log = logger.bind(
            destination=decision.destination,
            source_id=decision.source_id,
            message_id=decision.message_id
        )
        attempt = 0
        while True:
            attempt += 1
            try:
                await self.forwarder.forward_message(
                    decision.destination, decision.source_id, decision.message_id
                )
            except FloodWaitError as e:
                if attempt > self.retry_attempts:
                    self._drop(log, e, attempt)
                    return False
                delay = min(e.seconds * self.flood_wait_multiplier, self.max_flood_wait)
                log.warning("FloodWait on forward, retrying", seconds=e.seconds,
                            delay=delay, attempt=attempt)
                await asyncio.sleep(delay)
            except Exception as e:
                self._drop(log, e, attempt)
                return False
            else:
                self.stats.record_success()
                log.info("Forwarded message", attempt=attempt)
                return True

    def _drop(self, log, error: BaseException, attempts: int) -> None:
        self.stats.record_failure(error)
        log.error("forward_dropped", error=str(error),
                  error_type=type(error).__name__, attempts=attempts)

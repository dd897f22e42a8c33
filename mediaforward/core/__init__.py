"""Core forwarding logic: source registry, gate and message router."""

from .events import InboundMessageEvent, InboundCallbackEvent
from .forwarding_gate import ForwardingGate
from .source_registry import SourceRegistry
from .stats import ForwardStats
from .message_router import MessageRouter, Forward, Ignore, RouteDecision

__all__ = [
    "InboundMessageEvent",
    "InboundCallbackEvent",
    "ForwardingGate",
    "SourceRegistry",
    "ForwardStats",
    "MessageRouter",
    "Forward",
    "Ignore",
    "RouteDecision"
]

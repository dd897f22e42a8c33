"""Global on/off switch for forwarding."""
import structlog

logger = structlog.get_logger(__name__)


class ForwardingGate:
    """Boolean switch consulted before every forward. Not persisted."""

    def __init__(self, enabled: bool = True):
        self._enabled = enabled

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True
        logger.info("Forwarding enabled")

    def disable(self) -> None:
        self._enabled = False
        logger.info("Forwarding disabled")

    def toggle(self) -> bool:
        """Flip the gate and return the new state."""
        if self._enabled:
            self.disable()
        else:
            self.enable()
        return self._enabled

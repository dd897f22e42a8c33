"""
Exception hierarchy for the forwarding userbot.
"""


class MediaForwardError(Exception):
    """Base class for application errors."""


class SourceRegistryError(MediaForwardError):
    """Raised when a source registry mutation is rejected."""

    def __init__(self, source_id: str, message: str):
        self.source_id = source_id
        super().__init__(message)


class SourceAlreadyExistsError(SourceRegistryError):
    def __init__(self, source_id: str):
        super().__init__(source_id, f"Source {source_id} is already registered")


class SourceNotFoundError(SourceRegistryError):
    def __init__(self, source_id: str):
        super().__init__(source_id, f"Source {source_id} is not registered")


class InvalidSourceError(SourceRegistryError):
    def __init__(self, source_id: str):
        super().__init__(source_id, f"Invalid source identifier: {source_id!r}")


class ClientNotRunningError(MediaForwardError):
    """Raised when the Telegram client is used before start() or after stop()."""

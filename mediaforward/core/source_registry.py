"""
Source registry: the ordered set of chats whose media is forwarded.
Backed by a JSON file that is rewritten after every mutation.
"""
import asyncio
from typing import Iterable, List

import structlog

from mediaforward.exceptions import (
    InvalidSourceError, SourceAlreadyExistsError, SourceNotFoundError
)
from mediaforward.storage import JsonFileStore

logger = structlog.get_logger(__name__)


class SourceRegistry:
    """Duplicate-free, insertion-ordered list of source chat identifiers."""

    def __init__(self, store: JsonFileStore, default_sources: Iterable[str] = ()):
        self._store = store
        self._default_sources = self._dedupe(default_sources)
        self._sources: List[str] = []
        self._lock = asyncio.Lock()

    @staticmethod
    def _dedupe(values: Iterable) -> List[str]:
        seen = set()
        result = []
        for value in values:
            source_id = str(value).strip()
            if source_id and source_id not in seen:
                seen.add(source_id)
                result.append(source_id)
        return result

    def load(self) -> List[str]:
        """Load persisted sources, falling back to the configured defaults.

        Never raises. When the store is missing, unreadable or holds
        something other than a JSON list, the defaults are used and written
        back once.
        """
        if not self._store.exists():
            logger.info("No sources file found, using configured sources",
                        sources=self._default_sources)
            self._use_defaults()
            return self.list()

        try:
            data = self._store.read()
            if not isinstance(data, list):
                raise ValueError(f"expected a JSON list, got {type(data).__name__}")
            self._sources = self._dedupe(data)
            logger.info("Sources loaded", sources=self._sources, path=str(self._store.path))
        except (OSError, ValueError) as e:
            logger.error("Unreadable sources file, using configured sources",
                         error=str(e), path=str(self._store.path))
            self._use_defaults()
        return self.list()

    def _use_defaults(self) -> None:
        self._sources = list(self._default_sources)
        self._persist()

    def _persist(self) -> bool:
        try:
            self._store.write(self._sources)
            logger.info("Sources saved", sources=self._sources)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error saving sources", error=str(e), path=str(self._store.path))
            return False

    async def add(self, source_id: str) -> None:
        """Append a source and persist.

        Raises SourceAlreadyExistsError if it is already registered. A failed
        write is logged and the in-memory list keeps the new entry.
        """
        source_id = str(source_id).strip()
        if not source_id:
            raise InvalidSourceError(source_id)

        async with self._lock:
            if source_id in self._sources:
                raise SourceAlreadyExistsError(source_id)
            self._sources.append(source_id)
            self._persist()

        logger.info("Source added", source_id=source_id)

    async def remove(self, source_id: str) -> None:
        """Remove a source, keeping the order of the others, and persist."""
        source_id = str(source_id).strip()
        if not source_id:
            raise InvalidSourceError(source_id)

        async with self._lock:
            if source_id not in self._sources:
                raise SourceNotFoundError(source_id)
            self._sources.remove(source_id)
            self._persist()

        logger.info("Source removed", source_id=source_id)

    def list(self) -> List[str]:
        """Return a copy of the registered sources in insertion order."""
        return list(self._sources)

    def __contains__(self, source_id) -> bool:
        if source_id is None:
            return False
        return str(source_id).strip() in self._sources

    def __len__(self) -> int:
        return len(self._sources)

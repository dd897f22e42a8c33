"""Shared fixtures: settings on a temp directory and fake Telegram collaborators."""
from types import SimpleNamespace

import pytest

from mediaforward.config import Settings
from mediaforward.core import ForwardingGate, ForwardStats, SourceRegistry
from mediaforward.storage import JsonFileStore

ADMIN_ID = "111"
DEST_CHAT = "-100999"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        api_id=12345,
        api_hash="0123456789abcdef",
        dest_chat=DEST_CHAT,
        admin_id=ADMIN_ID,
        sources="100, 200",
        session_file=tmp_path / ".session",
        sources_file=tmp_path / "sources.json",
    )


class CountingStore(JsonFileStore):
    """JSON store recording write attempts, optionally failing them."""

    def __init__(self, path, fail_writes=False):
        super().__init__(path)
        self.fail_writes = fail_writes
        self.writes = []

    def write(self, data):
        self.writes.append(list(data))
        if self.fail_writes:
            raise OSError("disk full")
        super().write(data)


@pytest.fixture
def store(tmp_path):
    return CountingStore(tmp_path / "sources.json")


@pytest.fixture
def registry(store):
    registry = SourceRegistry(store, default_sources=["100", "200"])
    registry.load()
    return registry


@pytest.fixture
def gate():
    return ForwardingGate()


@pytest.fixture
def stats():
    return ForwardStats()


class FakeForwarder:
    """Records forward calls; raises queued errors in order."""

    def __init__(self, errors=None):
        self.calls = []
        self.errors = list(errors or [])

    async def forward_message(self, destination, source_chat, message_id):
        self.calls.append((destination, source_chat, message_id))
        if self.errors:
            raise self.errors.pop(0)
        return SimpleNamespace(id=1000 + len(self.calls))


@pytest.fixture
def forwarder():
    return FakeForwarder()


class FakeUserClient(FakeForwarder):
    """Stand-in for UserClientManager used by the application and handlers."""

    def __init__(self, errors=None):
        super().__init__(errors)
        self.handlers = []
        self.sent = []
        self.initialized = False
        self.started = False
        self.stopped = False
        self.disconnected = None

    def initialize(self):
        self.initialized = True

    def add_event_handler(self, callback, event):
        self.handlers.append((callback, event))

    async def start(self):
        self.started = True

    async def stop(self):
        self.stopped = True

    async def send_message(self, chat_id, text, file=None, buttons=None):
        self.sent.append({"chat_id": chat_id, "text": text, "file": file, "buttons": buttons})


@pytest.fixture
def user_client():
    return FakeUserClient()


def make_message_event(chat_id="100", message_id=1, sender_id=ADMIN_ID, text=None,
                       photo=None, video=None, audio=None, document=None):
    """Build an object shaped like telethon's NewMessage.Event."""
    replies = []

    async def reply(text):
        replies.append(text)

    message = SimpleNamespace(
        id=message_id, message=text, photo=photo, video=video, audio=audio, document=document
    )
    return SimpleNamespace(
        chat_id=int(chat_id) if chat_id.lstrip("-").isdigit() else chat_id,
        sender_id=int(sender_id) if sender_id is not None else None,
        message=message,
        reply=reply,
        replies=replies,
    )


def make_callback_event(data, sender_id=ADMIN_ID, chat_id="555"):
    """Build an object shaped like telethon's CallbackQuery.Event."""
    answers = []

    async def answer(message=None):
        answers.append(message)

    return SimpleNamespace(
        data=data.encode("utf-8") if isinstance(data, str) else data,
        sender_id=int(sender_id),
        chat_id=int(chat_id),
        answer=answer,
        answers=answers,
    )

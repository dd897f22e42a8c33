"""Telegram userbot forwarding media from watched chats to one destination."""

__version__ = "1.0.0"

"""
Main entry point for the media forwarding userbot.

Loads configuration from the environment, restores the Telethon session and
forwards media from the registered source chats until interrupted.
"""
from mediaforward.main import run


if __name__ == "__main__":
    run()

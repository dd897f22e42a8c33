#!/usr/bin/env python3
"""
Management script for the media forwarding userbot.
Provides a CLI for source administration, configuration checks and login.
"""
import argparse
import asyncio
import sys
from typing import List, Optional

from pydantic import ValidationError
from pydantic_settings import SettingsError

from mediaforward.clients import UserClientManager
from mediaforward.config import Settings, get_settings
from mediaforward.core import SourceRegistry
from mediaforward.exceptions import SourceRegistryError
from mediaforward.main import configure_logging
from mediaforward.storage import JsonFileStore, SessionStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Media forwarding userbot management CLI")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Source commands
    sources_parser = subparsers.add_parser('sources', help='Source chat management')
    sources_subparsers = sources_parser.add_subparsers(dest='sources_action')

    sources_subparsers.add_parser('list', help='List registered sources')

    add_parser = sources_subparsers.add_parser('add', help='Register a source chat')
    add_parser.add_argument('chat_id', help='Source chat ID')

    remove_parser = sources_subparsers.add_parser('remove', help='Unregister a source chat')
    remove_parser.add_argument('chat_id', help='Source chat ID')

    # Config commands
    config_parser = subparsers.add_parser('config', help='Configuration commands')
    config_subparsers = config_parser.add_subparsers(dest='config_action')
    config_subparsers.add_parser('check', help='Validate configuration and print a summary')

    # Login
    subparsers.add_parser('login', help='Log in interactively and save the session')

    return parser


def mask(value: str, visible: int = 4) -> str:
    if len(value) <= visible:
        return "*" * len(value)
    return value[:visible] + "*" * (len(value) - visible)


def open_registry(settings: Settings) -> SourceRegistry:
    registry = SourceRegistry(
        JsonFileStore(settings.sources_file_path),
        default_sources=settings.initial_sources
    )
    registry.load()
    return registry


async def handle_sources_commands(args, settings: Settings) -> int:
    """Handle source-related commands."""
    registry = open_registry(settings)

    if args.sources_action == 'list':
        sources = registry.list()
        if not sources:
            print("No sources configured")
        for index, source_id in enumerate(sources, start=1):
            print(f"{index}. {source_id}")
        return 0

    elif args.sources_action == 'add':
        try:
            await registry.add(args.chat_id)
        except SourceRegistryError as e:
            print(f"❌ {e}")
            return 1
        print(f"✅ Source {args.chat_id} added")
        return 0

    elif args.sources_action == 'remove':
        try:
            await registry.remove(args.chat_id)
        except SourceRegistryError as e:
            print(f"❌ {e}")
            return 1
        print(f"✅ Source {args.chat_id} removed")
        return 0

    print("Usage: manage.py sources {list,add,remove}")
    return 1


def handle_config_check(settings: Settings) -> int:
    print("Configuration loaded successfully!")
    print(f"API_ID: {settings.api_id}")
    print(f"API_HASH: {mask(settings.api_hash)}")
    print(f"Destination: {settings.dest_chat}")
    print(f"Admin ID: {settings.admin_id}")
    print(f"Initial sources: {', '.join(settings.initial_sources) or 'none'}")
    print(f"Sources file: {settings.sources_file_path}")
    print(f"Session file: {settings.session_file_path}")
    return 0


async def handle_login(settings: Settings) -> int:
    """Run the interactive Telethon login and persist the session."""
    manager = UserClientManager(settings, SessionStore(settings.session_file_path))
    try:
        await manager.start()
    except Exception as e:
        print(f"❌ Login failed: {e}")
        return 1
    finally:
        await manager.stop()
    print(f"✅ Session saved to {settings.session_file_path}")
    return 0


async def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if settings is None:
        try:
            settings = get_settings()
        except (ValidationError, SettingsError) as e:
            print(f"Configuration failed: {e}")
            return 1

    configure_logging(settings)

    try:
        if args.command == 'sources':
            return await handle_sources_commands(args, settings)
        elif args.command == 'config':
            return handle_config_check(settings)
        elif args.command == 'login':
            return await handle_login(settings)
        else:
            print(f"Unknown command: {args.command}")
            return 1

    except KeyboardInterrupt:
        print("\n⏹️  Operation cancelled by user")
        return 1


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()

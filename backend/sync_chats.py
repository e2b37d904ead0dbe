#!/usr/bin/env python3
"""
Chat cache maintenance from the command line.

Lists the chats of an owner (server first, local cache as fallback) or
pushes the local cache to the server.

Usage:
    python sync_chats.py list --owner USER_ID --token TOKEN
    python sync_chats.py sync --owner USER_ID --token TOKEN
    python sync_chats.py sync --owner USER_ID --token TOKEN --cache-dir ./cache

Configuration:
    AGENTIC_API_BASE_URL and AGENTIC_LOCAL_CACHE_DIR provide the defaults.
"""

import argparse
import asyncio
import sys

from rich.console import Console
from rich.table import Table

from modules.chats import ChatPersistenceCoordinator, FileChatCache, RemoteChatStore
from shared.config import get_settings
from shared.log_config import configure_logging

console = Console()


def build_coordinator(args: argparse.Namespace) -> ChatPersistenceCoordinator:
    settings = get_settings()
    remote = RemoteChatStore(
        args.api_url or settings.api_base_url,
        args.token,
        timeout=settings.remote_timeout_seconds,
    )
    cache = FileChatCache(args.cache_dir or settings.local_cache_dir)
    return ChatPersistenceCoordinator(remote, cache)


async def list_chats(args: argparse.Namespace) -> int:
    coordinator = build_coordinator(args)
    threads = await coordinator.list_threads(args.owner)

    table = Table(title=f"Chats for {args.owner}")
    table.add_column("Chat ID")
    table.add_column("Title")
    table.add_column("Messages", justify="right")
    table.add_column("Last updated")
    for thread in threads:
        table.add_row(
            thread.chat_id,
            thread.title,
            str(len(thread.messages)),
            thread.last_updated.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)
    return 0


async def sync_chats(args: argparse.Namespace) -> int:
    coordinator = build_coordinator(args)
    result = await coordinator.reconcile(args.owner)

    console.print(f"[green]Synced:[/green] {len(result.synced)}")
    if result.failed:
        console.print(f"[red]Failed and dropped from cache:[/red] {', '.join(result.failed)}")
        return 1
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Chat cache maintenance")
    parser.add_argument("command", choices=["list", "sync"])
    parser.add_argument("--owner", required=True, help="Owner (user) ID")
    parser.add_argument("--token", required=True, help="Session token")
    parser.add_argument("--api-url", type=str, help="Server base URL")
    parser.add_argument("--cache-dir", type=str, help="Local cache directory")
    args = parser.parse_args()

    configure_logging()

    handler = list_chats if args.command == "list" else sync_chats
    return asyncio.run(handler(args))


if __name__ == "__main__":
    sys.exit(main())

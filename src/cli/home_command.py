"""CLI command for home directory inspection."""

from __future__ import annotations

from typing import Any

from store.index_sdk import IndexClient


def add_home_command(subparsers: Any) -> None:
    """Register home subcommand."""
    subparsers.add_parser("home", help="Show resolved home directory paths")


def run_home_command(client: IndexClient) -> int:
    """Print resolved home paths as key=value rows."""
    config = client.config
    print(f"home={config.home}")
    print(f"config={config.config_file}")
    print(f"logs={config.logs_dir}")
    print(f"plugins={config.plugins_dir}")
    print(f"index={client.index_path}")
    return 0

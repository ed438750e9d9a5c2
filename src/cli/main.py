"""Bundle index CLI entry points.
This module exposes commands for resolving, recording and merging bundles.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from cli.home_command import add_home_command, run_home_command
from core.config import BundleHomeConfig
from core.errors import BundleError
from core.logging_config import configure_logging
from store.index_sdk import IndexClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="bundle-index", description="Bundle index CLI")
    parser.add_argument("--home", help="Override BUNDLE_INDEX_HOME for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_get_command(subparsers)
    _add_has_command(subparsers)
    _add_add_command(subparsers)
    _add_merge_command(subparsers)
    _add_list_command(subparsers)
    add_home_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the bundle index CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        client = _build_client(args.home)
        return _dispatch(parser, client, args)
    except BundleError as error:
        print(f"error={error}")
        return 1


def _dispatch(
    parser: argparse.ArgumentParser,
    client: IndexClient,
    args: argparse.Namespace,
) -> int:
    """Route parsed arguments to a command handler."""
    if args.command == "get":
        return _run_get_command(client, args)
    if args.command == "has":
        return _run_has_command(client, args)
    if args.command == "add":
        return _run_add_command(client, args)
    if args.command == "merge":
        return _run_merge_command(client, args)
    if args.command == "list":
        return _run_list_command(client, args)
    if args.command == "home":
        return run_home_command(client)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(home: str | None) -> IndexClient:
    """Build SDK client with optional home override.

    Args:
        home: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = BundleHomeConfig.from_env()
    if home:
        config = replace(config, home=Path(home).expanduser())
    configure_logging(config.log_level)
    return IndexClient(config)


def _run_get_command(client: IndexClient, args: argparse.Namespace) -> int:
    """Handle get command."""
    digest = client.resolve(args.name, args.constraint, latest=args.latest)
    print(digest)
    return 0


def _run_has_command(client: IndexClient, args: argparse.Namespace) -> int:
    """Handle has command."""
    found = client.has(args.name, args.version)
    print("true" if found else "false")
    return 0 if found else 1


def _run_add_command(client: IndexClient, args: argparse.Namespace) -> int:
    """Handle add command."""
    entry = client.add(args.name, args.version, args.digest)
    print(f"{entry.name}\t{entry.version}\t{entry.digest}")
    return 0


def _run_merge_command(client: IndexClient, args: argparse.Namespace) -> int:
    """Handle merge command."""
    added = client.merge_file(args.source)
    print(f"added={added}")
    return 0


def _run_list_command(client: IndexClient, args: argparse.Namespace) -> int:
    """Handle list command."""
    for entry in client.list_entries(args.name):
        print(f"{entry.name}\t{entry.version}\t{entry.digest}")
    return 0


def _add_get_command(subparsers: Any) -> None:
    """Register get subcommand."""
    parser = subparsers.add_parser("get", help="Resolve a bundle version to its digest")
    parser.add_argument("name", help="Bundle name")
    parser.add_argument(
        "constraint",
        nargs="?",
        default="",
        help="Version constraint, e.g. ^1.2.0 (default: any version)",
    )
    parser.add_argument(
        "--latest",
        action="store_true",
        help="Pick the highest matching version instead of the first found",
    )


def _add_has_command(subparsers: Any) -> None:
    """Register has subcommand."""
    parser = subparsers.add_parser("has", help="Check whether a bundle version is indexed")
    parser.add_argument("name", help="Bundle name")
    parser.add_argument("version", help="Version or constraint")


def _add_add_command(subparsers: Any) -> None:
    """Register add subcommand."""
    parser = subparsers.add_parser("add", help="Record a bundle version digest")
    parser.add_argument("name", help="Bundle name")
    parser.add_argument("version", help="Semantic version, e.g. 1.0.0")
    parser.add_argument("digest", help="Content digest, e.g. sha256:...")


def _add_merge_command(subparsers: Any) -> None:
    """Register merge subcommand."""
    parser = subparsers.add_parser(
        "merge",
        help="Add entries from another index file without overwriting existing ones",
    )
    parser.add_argument("source", help="Index file to merge from")


def _add_list_command(subparsers: Any) -> None:
    """Register list subcommand."""
    parser = subparsers.add_parser("list", help="List indexed bundle versions")
    parser.add_argument("name", nargs="?", help="Optional bundle name")

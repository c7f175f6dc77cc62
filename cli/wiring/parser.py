"""Argument parser for the snapper-tui entrypoint."""

from __future__ import annotations

import argparse


def build_parser(*, version: str) -> argparse.ArgumentParser:
    """Configure top-level CLI parser and subcommands."""
    parser = argparse.ArgumentParser(
        prog="snapper-tui",
        description="Browse and manage snapper snapshots",
        epilog="Without a command the desktop UI is started.",
    )
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {version}")
    parser.add_argument("--sudo", action="store_true", help="Run snapper through non-interactive sudo (configs, list, get-config)")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log warnings and errors")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging (every external command)")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("ui", help="Start the desktop UI (default)")
    subparsers.add_parser("configs", help="List snapper configurations")

    list_parser = subparsers.add_parser("list", help="List snapshots of a configuration")
    list_parser.add_argument("config", help="Configuration name (e.g. root)")
    list_parser.add_argument("--filter", default="", help="Only show snapshots matching this text")

    get_config_parser = subparsers.add_parser("get-config", help="Show configuration key/value pairs")
    get_config_parser.add_argument("config", help="Configuration name (e.g. root)")

    return parser

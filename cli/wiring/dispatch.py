"""CLI command dispatch wiring."""

from __future__ import annotations

import argparse
from typing import Any, Callable

from cli import handlers
from snapper_tui.logging import configure_logging


def dispatch_command(parser: argparse.ArgumentParser, args: Any) -> int:
    """Dispatch parsed CLI args to the matching command handler."""
    configure_logging(quiet=getattr(args, "quiet", False), verbose=getattr(args, "verbose", False))

    dispatch: dict[str, Callable[[Any], int]] = {
        "ui": handlers.handle_ui,
        "configs": handlers.handle_configs,
        "list": handlers.handle_list,
        "get-config": handlers.handle_get_config,
    }
    handler = dispatch.get(args.command or "ui")
    if handler is None:
        parser.print_help()
        return 2
    return handler(args)

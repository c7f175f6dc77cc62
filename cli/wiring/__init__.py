"""Parser construction and command dispatch for the snapper-tui entrypoint."""

from .dispatch import dispatch_command
from .parser import build_parser

__all__ = ["dispatch_command", "build_parser"]

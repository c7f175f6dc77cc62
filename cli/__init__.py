"""Command-line front-end for snapper-tui.

Importing the package has no side effects; the Qt shell is only imported by
the `ui` command.
"""

__all__ = []

"""PySide6 desktop shell for snapper-tui."""

"""snapper-tui: interactive front-end for snapper snapshots."""

__version__ = "0.4.0"

"""Entrypoint for the snapper-tui Qt shell."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from snapper_qt.ui.main_window import MainWindow
from snapper_tui.app import App
from snapper_tui.config import AppConfig, load_app_config


def main(app_config: AppConfig | None = None) -> int:
    qt_app = QApplication.instance() or QApplication(sys.argv)
    state = App(app_config=app_config or load_app_config())
    win = MainWindow(state)
    win.show()
    state.start()
    return qt_app.exec()


if __name__ == "__main__":
    raise SystemExit(main())

"""Main window: renders App state and relays keyboard, wheel and timer events."""

from __future__ import annotations

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QKeyEvent, QWheelEvent
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QListWidget,
    QMainWindow,
    QPlainTextEdit,
    QSplitter,
    QStackedWidget,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from snapper_tui.app import App, MouseEvent, MouseKind
from snapper_tui.app.modes import Focus
from snapper_tui.logging import get_logger

from .key_mapping import translate_key
from .main_window_helpers import (
    FOOTER_HINTS,
    SNAPSHOT_HEADERS,
    config_labels,
    overlay,
    snapshot_rows,
    status_line,
    userdata_line,
)

logger = get_logger("snapper_qt")

_PAGE_LISTS = 0
_PAGE_OVERLAY = 1


class MainWindow(QMainWindow):
    """Thin shell over the state machine: all decisions happen in `App`."""

    def __init__(self, app: App) -> None:
        super().__init__()
        self._app = app
        self.setWindowTitle("snapper-tui")
        self.resize(1100, 700)
        self._build_ui()
        self._tick_timer = QTimer(self)
        self._tick_timer.setInterval(app.app_config.tick_interval_ms)
        self._tick_timer.timeout.connect(self._on_tick)
        self._tick_timer.start()
        self.render()

    @property
    def app(self) -> App:
        return self._app

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)

        self.stack = QStackedWidget()
        root_layout.addWidget(self.stack, 1)

        lists = QWidget()
        lists_layout = QHBoxLayout(lists)
        lists_layout.setContentsMargins(0, 0, 0, 0)
        self.splitter = QSplitter(Qt.Orientation.Horizontal)
        self.configs_list = QListWidget()
        self.snapshots_table = QTableWidget(0, len(SNAPSHOT_HEADERS))
        self.snapshots_table.setHorizontalHeaderLabels(list(SNAPSHOT_HEADERS))
        self.snapshots_table.horizontalHeader().setSectionResizeMode(
            len(SNAPSHOT_HEADERS) - 1, QHeaderView.ResizeMode.Stretch
        )
        self.snapshots_table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.snapshots_table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.snapshots_table.verticalHeader().setVisible(False)
        for widget in (self.configs_list, self.snapshots_table):
            widget.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        self.splitter.addWidget(self.configs_list)
        self.splitter.addWidget(self.snapshots_table)
        self.splitter.setStretchFactor(1, 4)
        lists_layout.addWidget(self.splitter)
        self.stack.addWidget(lists)

        overlay_page = QWidget()
        overlay_layout = QVBoxLayout(overlay_page)
        self.overlay_title = QLabel()
        self.overlay_text = QPlainTextEdit()
        self.overlay_text.setReadOnly(True)
        self.overlay_text.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        overlay_layout.addWidget(self.overlay_title)
        overlay_layout.addWidget(self.overlay_text, 1)
        self.stack.addWidget(overlay_page)

        self.userdata_label = QLabel()
        root_layout.addWidget(self.userdata_label)
        self.status_label = QLabel()
        root_layout.addWidget(self.status_label)
        self.footer_label = QLabel(FOOTER_HINTS)
        self.footer_label.setWordWrap(True)
        root_layout.addWidget(self.footer_label)

    # -- events -------------------------------------------------------------

    def _on_tick(self) -> None:
        self._app.on_tick()
        self.render()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        ctrl = bool(event.modifiers() & Qt.KeyboardModifier.ControlModifier)
        translated = translate_key(event.key(), event.text(), ctrl=ctrl)
        if translated is None:
            super().keyPressEvent(event)
            return
        self._app.on_key(translated)
        self.render()

    def wheelEvent(self, event: QWheelEvent) -> None:
        dy = event.angleDelta().y()
        if dy == 0:
            return
        kind = MouseKind.SCROLL_UP if dy > 0 else MouseKind.SCROLL_DOWN
        self._app.on_mouse(MouseEvent(kind))
        self.render()

    def closeEvent(self, event: QCloseEvent) -> None:
        self._tick_timer.stop()
        self._app.persist()
        super().closeEvent(event)

    # -- rendering ----------------------------------------------------------

    def render(self) -> None:
        app = self._app
        if not app.running:
            logger.debug("quit requested")
            self.close()
            return
        self._render_configs()
        self._render_snapshots()
        modal = overlay(app)
        if modal is None:
            self.stack.setCurrentIndex(_PAGE_LISTS)
        else:
            title, body, line = modal
            self.overlay_title.setText(title)
            if self.overlay_text.toPlainText() != body:
                self.overlay_text.setPlainText(body)
            self.overlay_text.verticalScrollBar().setValue(line)
            self.stack.setCurrentIndex(_PAGE_OVERLAY)
        self.userdata_label.setVisible(app.show_userdata)
        if app.show_userdata:
            self.userdata_label.setText(userdata_line(app))
        self.status_label.setText(status_line(app))

    def _render_configs(self) -> None:
        app = self._app
        self.configs_list.setVisible(not app.fullscreen)
        labels = config_labels(app)
        current = [self.configs_list.item(i).text() for i in range(self.configs_list.count())]
        if current != labels:
            self.configs_list.clear()
            self.configs_list.addItems(labels)
        if app.config_index is not None:
            self.configs_list.setCurrentRow(app.config_index)
        self.configs_list.setEnabled(app.focus is Focus.CONFIGS or not labels)

    def _render_snapshots(self) -> None:
        app = self._app
        rows = snapshot_rows(app)
        table = self.snapshots_table
        if table.rowCount() != len(rows) or self._table_rows() != rows:
            table.setRowCount(len(rows))
            for r, row in enumerate(rows):
                for c, value in enumerate(row):
                    table.setItem(r, c, QTableWidgetItem(value))
        if app.snapshot_index is not None:
            table.selectRow(app.snapshot_index)
        else:
            table.clearSelection()

    def _table_rows(self) -> list[tuple[str, ...]]:
        table = self.snapshots_table
        rows = []
        for r in range(table.rowCount()):
            rows.append(
                tuple(
                    table.item(r, c).text() if table.item(r, c) is not None else ""
                    for c in range(table.columnCount())
                )
            )
        return rows

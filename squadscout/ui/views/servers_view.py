from __future__ import annotations

import logging

from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QProgressBar,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from core.scan.coordinator import ScanCoordinator
from core.scan.models import ServerRecord
from i18n.i18n import get_i18n, tr
from ui.components.ev_page_header import EVPageHeader


class ServersView(QWidget):
    settings_requested = Signal()

    POLL_INTERVAL_MS = 100
    LOAD_MORE_THRESHOLD = 5
    _FULL_COLOR = QColor(220, 60, 60)
    _OPEN_COLOR = QColor(60, 180, 90)
    _COUNTRY_COLOR = QColor(255, 165, 0)

    def __init__(self, coordinator: ScanCoordinator, logger: logging.Logger) -> None:
        super().__init__()
        self._coordinator = coordinator
        self._logger = logger

        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(16, 16, 16, 16)
        root_layout.setSpacing(12)

        self._header = EVPageHeader()
        self._settings_button = QPushButton()
        self._settings_button.setProperty("variant", "secondary")
        self._settings_button.clicked.connect(self.settings_requested.emit)
        self._header.add_action(self._settings_button)
        root_layout.addWidget(self._header)

        action_row = QHBoxLayout()
        action_row.setSpacing(12)

        self._scan_button = QPushButton()
        self._scan_button.setProperty("variant", "primary")
        self._scan_button.setMinimumSize(140, 40)
        self._scan_button.clicked.connect(self.start_scan)
        action_row.addWidget(self._scan_button)

        self._busy_indicator = QProgressBar()
        self._busy_indicator.setRange(0, 0)
        self._busy_indicator.setMaximumWidth(120)
        self._busy_indicator.setTextVisible(False)
        self._busy_indicator.hide()
        action_row.addWidget(self._busy_indicator)

        self._status_label = QLabel()
        self._status_label.setObjectName("infoBar")
        action_row.addWidget(self._status_label, 1)
        root_layout.addLayout(action_row)

        self._table = QTableWidget(0, 4)
        self._table.setObjectName("EVTable")
        self._table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self._table.setSelectionMode(QTableWidget.SelectionMode.SingleSelection)
        self._table.setAlternatingRowColors(True)
        self._table.verticalHeader().setVisible(False)
        self._table.setSortingEnabled(False)

        header = self._table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        header.setSectionResizeMode(2, QHeaderView.ResizeMode.ResizeToContents)
        header.setSectionResizeMode(3, QHeaderView.ResizeMode.ResizeToContents)

        self._empty_label = QLabel()
        self._empty_label.setObjectName("infoBar")
        self._empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._empty_label.hide()

        root_layout.addWidget(self._table, 1)
        root_layout.addWidget(self._empty_label)

        self._coordinator.scan_started.connect(self._on_scan_started)
        self._coordinator.scan_finished.connect(self._on_scan_finished)

        self._poll_timer = QTimer(self)
        self._poll_timer.setInterval(self.POLL_INTERVAL_MS)
        self._poll_timer.timeout.connect(self._on_tick)
        self._poll_timer.start()

        get_i18n().language_changed.connect(self.retranslate_ui)
        self.retranslate_ui()

    def start_scan(self) -> None:
        self._coordinator.request_scan(fresh=True)

    def stop_polling(self) -> None:
        self._poll_timer.stop()

    def _on_tick(self) -> None:
        self._coordinator.poll()
        self._maybe_load_more()

    def _maybe_load_more(self) -> None:
        if self._coordinator.is_running or not self._coordinator.has_more:
            return

        row_count = self._table.rowCount()
        if row_count == 0:
            return

        last_visible = self._table.rowAt(self._table.viewport().height() - 1)
        if last_visible < 0:
            last_visible = row_count - 1

        if last_visible >= row_count - self.LOAD_MORE_THRESHOLD:
            self._coordinator.request_more()

    def _on_scan_started(self, fresh: bool) -> None:
        if fresh:
            self._table.setRowCount(0)
        self._busy_indicator.show()
        self._empty_label.hide()
        self._refresh_status()

    def _on_scan_finished(self, _appended: int) -> None:
        self._busy_indicator.hide()
        self._append_rows(self._coordinator.visible_results[self._table.rowCount() :])

        for warning in self._coordinator.last_warnings:
            self._logger.warning(warning)

        self._empty_label.setVisible(self._table.rowCount() == 0)
        self.retranslate_ui()

    def _append_rows(self, records: tuple[ServerRecord, ...]) -> None:
        start_row = self._table.rowCount()
        self._table.setRowCount(start_row + len(records))

        for offset, record in enumerate(records):
            row = start_row + offset
            values = [
                f"[{record.country}]",
                record.name,
                f"{record.map_name} | {record.mode_name}",
                f"{record.players}/{record.max_players}",
            ]
            for column, value in enumerate(values):
                item = QTableWidgetItem(value)
                if column == 0:
                    item.setForeground(self._COUNTRY_COLOR)
                if column == 3:
                    item.setForeground(self._FULL_COLOR if record.is_nearly_full else self._OPEN_COLOR)
                    item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
                self._table.setItem(row, column, item)

    def _refresh_status(self) -> None:
        if self._coordinator.is_running:
            key = "servers.status.scanning" if self._table.rowCount() == 0 else "servers.status.loading_more"
            self._status_label.setText(tr(key))
        elif self._coordinator.has_completed_scan:
            self._status_label.setText(tr("servers.status.found", count=self._table.rowCount()))
        else:
            self._status_label.setText("")

    def retranslate_ui(self, _language: str | None = None) -> None:
        self._header.set_title(tr("app.window.title"))
        self._settings_button.setText(tr("servers.settings"))
        self._scan_button.setText(
            tr("servers.refresh") if self._coordinator.has_completed_scan else tr("servers.start")
        )
        self._table.setHorizontalHeaderLabels(
            [
                tr("servers.column.country"),
                tr("servers.column.name"),
                tr("servers.column.map_mode"),
                tr("servers.column.players"),
            ]
        )
        self._empty_label.setText(tr("servers.empty"))
        self._refresh_status()

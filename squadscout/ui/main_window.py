from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QSplitter, QVBoxLayout, QWidget

from core.config import AppConfig
from core.logging import LogEmitter
from core.scan.coordinator import ScanCoordinator
from i18n.i18n import get_i18n, tr
from ui.views.servers_view import ServersView
from ui.widgets.log_console import LogConsole
from ui.widgets.settings_dialog import SettingsDialog


class MainWindow(QMainWindow):
    def __init__(
        self,
        config: AppConfig,
        coordinator: ScanCoordinator,
        logger: logging.Logger,
        log_emitter: LogEmitter,
    ) -> None:
        super().__init__()
        self._config = config
        self._coordinator = coordinator
        self._logger = logger

        self.setMinimumSize(520, 600)
        self.resize(650, 850)

        central_widget = QWidget()
        central_widget.setObjectName("AppRoot")
        self.setCentralWidget(central_widget)

        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        splitter = QSplitter(Qt.Orientation.Vertical)
        self._servers_view = ServersView(coordinator=coordinator, logger=logger)
        self._servers_view.settings_requested.connect(self._open_settings)
        splitter.addWidget(self._servers_view)

        self._log_console = LogConsole(log_emitter)
        splitter.addWidget(self._log_console)
        splitter.setStretchFactor(0, 4)
        splitter.setStretchFactor(1, 1)
        layout.addWidget(splitter)

        get_i18n().language_changed.connect(self.retranslate_ui)
        self.retranslate_ui()

    def closeEvent(self, event: QCloseEvent) -> None:
        self._servers_view.stop_polling()
        self._coordinator.shutdown()
        super().closeEvent(event)

    def _open_settings(self) -> None:
        dialog = SettingsDialog(config=self._config, parent=self)
        dialog.language_selected.connect(self._on_language_selected)
        if dialog.exec():
            self._logger.info(tr("settings.saved"))
        dialog.deleteLater()

    def _on_language_selected(self, language_code: str) -> None:
        self._config.set_language(language_code)
        get_i18n().set_language(language_code)
        language_name = tr(f"settings.language.{language_code}")
        self._logger.info(tr("startup.language.changed", language=language_name))

    def retranslate_ui(self, _language: str | None = None) -> None:
        self.setWindowTitle(tr("app.window.title"))

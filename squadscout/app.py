from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from core.config import AppConfig
from core.logging import setup_logging
from core.paths import ensure_runtime_directories
from core.scan.coordinator import ScanCoordinator
from core.scan.fetcher import ServerListFetcher
from i18n.i18n import initialize_i18n, tr
from ui.main_window import MainWindow


def main() -> int:
    ensure_runtime_directories()

    app = QApplication(sys.argv)

    config = AppConfig()
    initialize_i18n(config.get_language())

    logger, log_emitter = setup_logging(config.get_log_level())
    logger.info(tr("startup.config.loaded", path=config.path))

    fetcher = ServerListFetcher(timeout_s=config.get_request_timeout(), logger=logger.getChild("scan"))
    coordinator = ScanCoordinator(
        fetcher=fetcher,
        criteria_provider=config.filter_criteria,
        logger=logger.getChild("coordinator"),
    )

    window = MainWindow(config=config, coordinator=coordinator, logger=logger, log_emitter=log_emitter)
    window.show()

    logger.info(tr("startup.ready"))

    app.aboutToQuit.connect(coordinator.shutdown)
    app.aboutToQuit.connect(config.save)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())

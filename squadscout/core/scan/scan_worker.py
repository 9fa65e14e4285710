from __future__ import annotations

import logging
from typing import Protocol

from PySide6.QtCore import QObject, Signal, Slot

from core.scan.channel import ResultChannel
from core.scan.models import FilterCriteria, ScanBatch
from i18n.i18n import tr


class ScanRunner(Protocol):
    def run_scan(self, criteria: FilterCriteria, continuation: str | None = None) -> ScanBatch: ...


class ScanWorker(QObject):
    finished = Signal(object)
    failed = Signal(str)

    def __init__(
        self,
        fetcher: ScanRunner,
        criteria: FilterCriteria,
        continuation: str | None,
        channel: ResultChannel,
        logger: logging.Logger,
    ) -> None:
        super().__init__()
        self._fetcher = fetcher
        self._criteria = criteria
        self._continuation = continuation
        self._channel = channel
        self._logger = logger

    @Slot()
    def run(self) -> None:
        try:
            batch = self._fetcher.run_scan(self._criteria, self._continuation)
        except Exception as error:
            self._logger.exception("Scan worker crashed")
            self._channel.put(ScanBatch(records=(), warnings=(tr("scan.warning.crashed", error=error),)))
            self.failed.emit(str(error))
            return

        self._channel.put(batch)
        self.finished.emit(batch)

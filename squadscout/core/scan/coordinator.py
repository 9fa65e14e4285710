from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from PySide6.QtCore import QObject, Qt, QThread, Signal

from core.scan.channel import ResultChannel
from core.scan.models import FilterCriteria, ScanState, ServerRecord
from core.scan.scan_worker import ScanRunner, ScanWorker


class ScanCoordinator(QObject):
    """Owns the scan lifecycle and the visible result set on the GUI thread.

    ``request_scan`` starts at most one background run. The presentation loop
    calls ``poll`` on every tick; it never blocks and appends a finished
    batch to the visible results when one is available.
    """

    scan_started = Signal(bool)
    scan_finished = Signal(int)

    def __init__(
        self,
        fetcher: ScanRunner,
        criteria_provider: Callable[[], FilterCriteria] | None = None,
        logger: logging.Logger | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._fetcher = fetcher
        self._criteria_provider = criteria_provider or FilterCriteria
        self._logger = logger or logging.getLogger("squadscout.coordinator")

        self._state = ScanState.IDLE
        self._results: list[ServerRecord] = []
        self._seen_ids: set[str] = set()
        self._next_url = ""
        self._last_warnings: tuple[str, ...] = ()
        self._has_completed_scan = False
        self._channel: ResultChannel | None = None
        self._threads: list[tuple[QThread, ScanWorker]] = []

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is ScanState.RUNNING

    @property
    def has_more(self) -> bool:
        return self._next_url != ""

    @property
    def next_url(self) -> str:
        return self._next_url

    @property
    def visible_results(self) -> tuple[ServerRecord, ...]:
        return tuple(self._results)

    @property
    def last_warnings(self) -> tuple[str, ...]:
        return self._last_warnings

    @property
    def has_completed_scan(self) -> bool:
        return self._has_completed_scan

    def request_scan(self, fresh: bool = True, criteria: FilterCriteria | None = None) -> bool:
        if self._state is ScanState.RUNNING:
            self._logger.debug("Scan request ignored, a scan is already running")
            return False

        continuation: str | None = None
        if not fresh:
            if self._next_url == "":
                return False
            continuation = self._next_url

        if fresh:
            self._results.clear()
            self._seen_ids.clear()
            self._next_url = ""
            self._last_warnings = ()

        snapshot = self._snapshot(criteria if criteria is not None else self._criteria_provider())
        channel = ResultChannel()

        self._prune_finished_threads()
        thread = QThread(self)
        worker = ScanWorker(
            fetcher=self._fetcher,
            criteria=snapshot,
            continuation=continuation,
            channel=channel,
            logger=self._logger,
        )
        worker.moveToThread(thread)

        thread.started.connect(worker.run)
        # quit() is thread-safe; a direct connection lets the thread end without the GUI event loop.
        worker.finished.connect(thread.quit, Qt.ConnectionType.DirectConnection)
        worker.failed.connect(thread.quit, Qt.ConnectionType.DirectConnection)
        thread.finished.connect(worker.deleteLater)

        self._channel = channel
        self._threads.append((thread, worker))
        self._state = ScanState.RUNNING
        self._logger.info("Scan started: fresh=%s", fresh)
        thread.start()

        self.scan_started.emit(fresh)
        return True

    def request_more(self) -> bool:
        if self.is_running or not self.has_more:
            return False
        return self.request_scan(fresh=False)

    def poll(self) -> int | None:
        if self._channel is None or self._channel.delivered:
            return None

        batch = self._channel.try_receive()
        if batch is None:
            return None

        appended = 0
        for record in batch.records:
            # Records without an upstream id cannot be matched and are always kept.
            if record.server_id:
                if record.server_id in self._seen_ids:
                    continue
                self._seen_ids.add(record.server_id)
            self._results.append(record)
            appended += 1

        self._next_url = batch.next_url
        self._last_warnings = batch.warnings
        self._has_completed_scan = True
        self._state = ScanState.IDLE
        self._prune_finished_threads()

        self._logger.info(
            "Scan batch received: appended=%s total=%s more=%s",
            appended,
            len(self._results),
            self.has_more,
        )
        self.scan_finished.emit(appended)
        return appended

    def shutdown(self, timeout_ms: int = 5000) -> bool:
        finished = True
        for thread, _worker in self._threads:
            if not thread.wait(timeout_ms):
                self._logger.warning("Scan thread did not finish within %s ms", timeout_ms)
                finished = False
        self._prune_finished_threads()

        if self._channel is not None and not self._channel.delivered:
            self._logger.warning("Shutting down with an undelivered scan batch")
        return finished

    def _snapshot(self, criteria: FilterCriteria) -> FilterCriteria:
        return replace(
            criteria,
            banned_countries=frozenset(criteria.banned_countries),
            name_bans={country: tuple(words) for country, words in criteria.name_bans.items()},
        )

    def _prune_finished_threads(self) -> None:
        alive: list[tuple[QThread, ScanWorker]] = []
        for thread, worker in self._threads:
            if thread.isFinished():
                thread.deleteLater()
            else:
                alive.append((thread, worker))
        self._threads = alive

from __future__ import annotations

import logging

from PySide6.QtCore import QCoreApplication

from core.scan.channel import ResultChannel
from core.scan.models import FilterCriteria, ScanBatch, ServerRecord
from core.scan.scan_worker import ScanWorker

LOGGER = logging.getLogger("squadscout.tests")


class StaticFetcher:
    def __init__(self, batch: ScanBatch) -> None:
        self._batch = batch
        self.calls: list[tuple[FilterCriteria, str | None]] = []

    def run_scan(self, criteria: FilterCriteria, continuation: str | None = None) -> ScanBatch:
        self.calls.append((criteria, continuation))
        return self._batch


class ExplodingFetcher:
    def run_scan(self, criteria: FilterCriteria, continuation: str | None = None) -> ScanBatch:
        raise KeyError("attributes")


def test_worker_delivers_batch_through_channel(qt_app: QCoreApplication) -> None:
    record = ServerRecord("One", 1, 2, "Narva", "RAAS", "DE")
    batch = ScanBatch(records=(record,), next_url="next")
    fetcher = StaticFetcher(batch)
    channel = ResultChannel()
    criteria = FilterCriteria(min_players=3)
    worker = ScanWorker(fetcher, criteria, "https://example/next", channel, LOGGER)
    emitted: list[object] = []
    worker.finished.connect(lambda value: emitted.append(value))

    worker.run()

    assert fetcher.calls == [(criteria, "https://example/next")]
    assert channel.try_receive() is batch
    assert emitted == [batch]


def test_worker_failure_still_delivers_an_empty_batch(qt_app: QCoreApplication) -> None:
    channel = ResultChannel()
    worker = ScanWorker(ExplodingFetcher(), FilterCriteria(), None, channel, LOGGER)
    failures: list[str] = []
    worker.failed.connect(lambda message: failures.append(message))

    worker.run()

    batch = channel.try_receive()
    assert batch is not None
    assert batch.records == ()
    assert batch.next_url == ""
    assert len(batch.warnings) == 1
    assert len(failures) == 1

from __future__ import annotations

import queue

from core.scan.models import ScanBatch


class ChannelFull(RuntimeError):
    pass


class ResultChannel:
    """One-shot handoff of a single ScanBatch from a worker thread to the GUI thread.

    Neither side blocks: the producer writes exactly once, the consumer asks on
    every tick and gets ``None`` until the batch has arrived.
    """

    def __init__(self) -> None:
        self._slot: queue.Queue[ScanBatch] = queue.Queue(maxsize=1)
        self._written = False
        self._delivered = False

    @property
    def delivered(self) -> bool:
        return self._delivered

    def put(self, batch: ScanBatch) -> None:
        if self._written:
            raise ChannelFull("result channel already received its batch")
        try:
            self._slot.put_nowait(batch)
        except queue.Full as error:
            raise ChannelFull("result channel already holds a batch") from error
        self._written = True

    def try_receive(self) -> ScanBatch | None:
        try:
            batch = self._slot.get_nowait()
        except queue.Empty:
            return None
        self._delivered = True
        return batch

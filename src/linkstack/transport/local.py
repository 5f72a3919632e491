"""In-process transport.

Every actor sharing a :class:`LocalTransport` lives in the same process;
this is the equivalent of a link message between scripts in one object.
Messages are queued on send and delivered one at a time, each run to
completion before the next is taken off the queue.
"""

from __future__ import annotations

import queue
import threading
from typing import Optional

import structlog

from .base import Transport


logger = structlog.get_logger(__name__)


class LocalTransport(Transport):
    """Queue-backed transport for actors in a single process.

    Delivery happens either synchronously, via :meth:`run_pending`, or on a
    background thread started with :meth:`start`. Do not mix the two.
    """

    poll_interval = 0.1

    def __init__(self):
        super().__init__()

        self._queue = queue.SimpleQueue()

        self.shutdown = False
        self.thread: Optional[threading.Thread] = None

    def send(self, target: str, slot: int, payload: str, token: Optional[str] = None) -> None:
        self._queue.put((target, int(slot), payload, token))

    def pending(self) -> int:
        return self._queue.qsize()

    def _deliver_one(self, item) -> None:
        target, slot, payload, token = item
        logger.debug("delivering", target=target, slot=slot)

        try:
            self._deliver(slot, payload, token)
        except Exception:
            logger.exception("listener failed", slot=slot)

    def run_pending(self, limit: Optional[int] = None) -> int:
        """Deliver queued messages until the queue is empty.

        Messages sent by listeners during delivery are delivered too, so a
        whole pipeline runs before this returns. *limit* caps the number of
        deliveries, for pipelines that loop. Returns the number delivered.
        """

        delivered = 0

        while limit is None or delivered < limit:
            try:
                item = self._queue.get(block=False)
            except queue.Empty:
                break

            self._deliver_one(item)
            delivered += 1

        return delivered

    def start(self) -> None:
        if self.thread is not None:
            return

        self.shutdown = False
        self.thread = threading.Thread(target=self.run, daemon=True)
        self.thread.start()

    def stop(self) -> None:
        self.shutdown = True
        thread = self.thread
        if thread is not None:
            thread.join()
        self.thread = None

    def run(self) -> None:
        while not self.shutdown:
            try:
                item = self._queue.get(timeout=self.poll_interval)
            except queue.Empty:
                continue

            self._deliver_one(item)

    def close(self) -> None:
        self.stop()

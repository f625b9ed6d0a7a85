"""Logging handler that mirrors console output into the log store.

Records may arrive on any thread. ``emit`` only queues a ``ConsoleLogEntry``;
the store is touched by ``drain()``, which the store's owner calls from its
own thread (``Instrumentation.tick`` does this once per host frame).
"""

from __future__ import annotations

import logging
import queue
from datetime import UTC, datetime

from instrumentation.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable
from instrumentation.logs.entries import ConsoleLogEntry
from instrumentation.logs.store import LogStore

# Records from this namespace describe the store itself and are never captured.
INTERNAL_LOGGER_PREFIX = "instrumentation"

_LOG = logging.getLogger("instrumentation.capture")


class ConsoleCaptureHandler(logging.Handler):
    """Queue every received record for the store's console log."""

    def __init__(self, store: LogStore, level: int = logging.NOTSET) -> None:
        super().__init__(level=level)
        self._store = store
        self._pending: queue.SimpleQueue[ConsoleLogEntry] = queue.SimpleQueue()
        self._draining = False
        self.setFormatter(logging.Formatter("%(message)s"))

    @property
    def pending(self) -> int:
        return self._pending.qsize()

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == INTERNAL_LOGGER_PREFIX or name.startswith(f"{INTERNAL_LOGGER_PREFIX}."):
            return False
        return bool(super().filter(record))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = ConsoleLogEntry(
                timestamp=datetime.fromtimestamp(record.created, tz=UTC),
                log=self.format(record),
                level=record.levelname.lower(),
                logger_name=record.name,
            )
        except RECOVERABLE_RUNTIME_ERRORS:
            self.handleError(record)
            return
        self._pending.put(entry)

    def drain(self) -> int:
        """Move queued entries into the store; call from the store's owning thread.

        Only entries queued before the call are moved. Records logged by a
        console subscriber during the drain wait for the next one.
        """
        if self._draining:
            return 0
        self._draining = True
        moved = 0
        try:
            for _ in range(self._pending.qsize()):
                try:
                    entry = self._pending.get_nowait()
                except queue.Empty:
                    break
                moved += 1
                try:
                    self._store.add_console_log(entry)
                except RECOVERABLE_RUNTIME_ERRORS:
                    log_recoverable(_LOG, "console_subscriber_failed", level=logging.WARNING)
        finally:
            self._draining = False
        return moved

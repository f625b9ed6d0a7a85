"""Explicitly owned instrumentation state: log store, console capture and sampling."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from types import TracebackType

from instrumentation.logs.codec import write_store_snapshot
from instrumentation.logs.entries import DeviceLogEntry, EventLogEntry, EventType, utc_now
from instrumentation.logs.store import Clock, LogStore
from instrumentation.runtime.config import InstrumentationConfig, load_instrumentation_config
from instrumentation.runtime.console_capture import ConsoleCaptureHandler
from instrumentation.runtime.device_probe import DeviceSampler, DeviceStateProbe

_LOG = logging.getLogger("instrumentation.runtime")


class Instrumentation:
    """Owns one log store for the lifetime of the host application.

    Construct at application start, call ``start()`` to attach console capture,
    drive ``tick()`` from the host loop on the owning thread, and call
    ``shutdown()`` at exit. Console records logged between ticks become
    visible in the store on the next ``tick()`` or at ``shutdown()``.
    """

    def __init__(
        self,
        config: InstrumentationConfig | None = None,
        *,
        clock: Clock | None = None,
        probe: DeviceStateProbe | None = None,
    ) -> None:
        self._config = config if config is not None else load_instrumentation_config()
        self._clock: Clock = clock or utc_now
        self._store = LogStore(oldest_log_age_s=self._config.oldest_log_age_s, clock=self._clock)
        self._sampler = DeviceSampler(
            store=self._store,
            probe=probe if probe is not None else DeviceStateProbe(disk_path=self._config.disk_path),
            interval_s=self._config.device_sample_interval_s,
            clock=self._clock,
        )
        self._capture_handler = ConsoleCaptureHandler(
            self._store,
            level=getattr(logging, self._config.console_capture_level, logging.DEBUG),
        )
        self._captured_logger: logging.Logger | None = None

    @property
    def config(self) -> InstrumentationConfig:
        return self._config

    @property
    def logger(self) -> LogStore:
        return self._store

    @property
    def sampler(self) -> DeviceSampler:
        return self._sampler

    @property
    def started(self) -> bool:
        return self._captured_logger is not None

    def start(self, logger: logging.Logger | None = None) -> None:
        if not self._config.enabled or self._captured_logger is not None:
            return
        target = logger if logger is not None else logging.getLogger()
        if self._config.console_capture_enabled:
            target.addHandler(self._capture_handler)
        self._captured_logger = target
        _LOG.info(
            "instrumentation_started",
            extra={
                "oldest_log_age_s": self._config.oldest_log_age_s,
                "console_capture": self._config.console_capture_enabled,
            },
        )

    def shutdown(self) -> None:
        target = self._captured_logger
        if target is None:
            return
        target.removeHandler(self._capture_handler)
        self._capture_handler.drain()
        self._captured_logger = None
        _LOG.info("instrumentation_stopped")

    def tick(self, now: datetime | None = None) -> DeviceLogEntry | None:
        """Drain captured console output and sample device state when due.

        Call from the thread that owns the store, usually once per host frame.
        """
        if not self._config.enabled:
            return None
        self._capture_handler.drain()
        return self._sampler.tick(now)

    def record_memory_warning(self) -> EventLogEntry | None:
        if not self._config.enabled:
            return None
        entry = EventLogEntry(timestamp=self._clock(), type=EventType.DID_RECEIVE_MEMORY_WARNING)
        self._store.add_event_log(entry)
        _LOG.warning("instrumentation_memory_warning")
        return entry

    def write_snapshot(self, path: Path | None = None) -> Path:
        if path is None:
            stamp = self._clock().strftime("%Y%m%dT%H%M%S")
            path = Path(self._config.snapshot_dir) / f"instrumentation_logs_{stamp}.json"
        return write_store_snapshot(self._store, path)

    def __enter__(self) -> Instrumentation:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()

"""Device state probing and periodic sampling into the log store."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from instrumentation.errors import RECOVERABLE_RUNTIME_ERRORS, log_recoverable
from instrumentation.logs.entries import BatteryState, DeviceLogEntry, utc_now
from instrumentation.logs.store import Clock, LogStore

_LOG = logging.getLogger("instrumentation.device")


@dataclass(slots=True)
class DeviceStateProbe:
    """Read memory, disk and battery state, preferring psutil when importable."""

    disk_path: str = "/"
    provider: str | None = None
    psutil_mod: Any | None = None

    def read(self, *, timestamp: datetime | None = None) -> DeviceLogEntry:
        self._resolve_provider()
        free_memory, total_memory = self._read_memory()
        free_disk, total_disk = self._read_disk()
        battery_level, battery_state = self._read_battery()
        return DeviceLogEntry(
            timestamp=timestamp if timestamp is not None else utc_now(),
            bytes_of_free_memory=free_memory,
            bytes_of_total_memory=total_memory,
            bytes_of_free_disk_space=free_disk,
            bytes_of_total_disk_space=total_disk,
            battery_level=battery_level,
            battery_state=battery_state,
        )

    def _resolve_provider(self) -> None:
        if self.provider is not None:
            return
        try:
            import psutil  # type: ignore

            self.psutil_mod = psutil
            self.provider = "psutil"
        except RECOVERABLE_RUNTIME_ERRORS:
            self.psutil_mod = None
            self.provider = "none"
            log_recoverable(_LOG, "device_probe_psutil_unavailable")

    def _read_memory(self) -> tuple[int, int]:
        if self.provider == "psutil" and self.psutil_mod is not None:
            try:
                memory = self.psutil_mod.virtual_memory()
                return int(memory.available), int(memory.total)
            except RECOVERABLE_RUNTIME_ERRORS:
                log_recoverable(_LOG, "device_probe_memory_failed")
        return 0, 0

    def _read_disk(self) -> tuple[int, int]:
        if self.provider == "psutil" and self.psutil_mod is not None:
            try:
                usage = self.psutil_mod.disk_usage(self.disk_path)
                return int(usage.free), int(usage.total)
            except RECOVERABLE_RUNTIME_ERRORS:
                log_recoverable(_LOG, "device_probe_disk_psutil_failed")
        try:
            usage = shutil.disk_usage(self.disk_path)
            return int(usage.free), int(usage.total)
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, "device_probe_disk_failed")
            return 0, 0

    def _read_battery(self) -> tuple[float, BatteryState]:
        if self.provider != "psutil" or self.psutil_mod is None:
            return -1.0, BatteryState.UNKNOWN
        sensors_battery = getattr(self.psutil_mod, "sensors_battery", None)
        if not callable(sensors_battery):
            return -1.0, BatteryState.UNKNOWN
        try:
            battery = sensors_battery()
        except RECOVERABLE_RUNTIME_ERRORS:
            log_recoverable(_LOG, "device_probe_battery_failed")
            return -1.0, BatteryState.UNKNOWN
        if battery is None:
            return -1.0, BatteryState.UNKNOWN
        level = max(0.0, min(1.0, float(battery.percent) / 100.0))
        plugged = getattr(battery, "power_plugged", None)
        if plugged is None:
            return level, BatteryState.UNKNOWN
        if not plugged:
            return level, BatteryState.UNPLUGGED
        if level >= 1.0:
            return level, BatteryState.FULL
        return level, BatteryState.CHARGING


class DeviceSampler:
    """Host-driven periodic device snapshots."""

    def __init__(
        self,
        *,
        store: LogStore,
        probe: DeviceStateProbe,
        interval_s: float = 1.0,
        clock: Clock | None = None,
    ) -> None:
        if interval_s <= 0.0:
            raise ValueError("interval_s must be > 0")
        self._store = store
        self._probe = probe
        self._interval_s = float(interval_s)
        self._clock: Clock = clock or utc_now
        self._last_sample_at: datetime | None = None

    @property
    def interval_s(self) -> float:
        return self._interval_s

    @property
    def last_sample_at(self) -> datetime | None:
        return self._last_sample_at

    def sample(self, now: datetime | None = None) -> DeviceLogEntry:
        current = now if now is not None else self._clock()
        entry = self._probe.read(timestamp=current)
        self._store.add_device_log(entry)
        self._last_sample_at = current
        return entry

    def tick(self, now: datetime | None = None) -> DeviceLogEntry | None:
        """Sample if at least ``interval_s`` elapsed since the previous sample."""
        current = now if now is not None else self._clock()
        last = self._last_sample_at
        if last is not None and (current - last).total_seconds() < self._interval_s:
            return None
        return self.sample(current)

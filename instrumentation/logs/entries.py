"""Log entry records kept by the instrumentation log store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum


def utc_now() -> datetime:
    """Return the current aware UTC time."""
    return datetime.now(tz=UTC)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware datetime; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class BatteryState(StrEnum):
    """Charging state reported alongside the battery level."""

    UNKNOWN = "UNKNOWN"
    UNPLUGGED = "UNPLUGGED"
    CHARGING = "CHARGING"
    FULL = "FULL"


class EventType(StrEnum):
    """Notable application events drawn as markers on the graphs."""

    DID_RECEIVE_MEMORY_WARNING = "DID_RECEIVE_MEMORY_WARNING"


@dataclass(slots=True, kw_only=True)
class LogEntry:
    """Base entry: a creation timestamp, the ordering key of every log."""

    timestamp: datetime = field(default_factory=utc_now)


@dataclass(slots=True, kw_only=True)
class DeviceLogEntry(LogEntry):
    """Snapshot of memory, disk and battery state."""

    bytes_of_free_memory: int = 0
    bytes_of_total_memory: int = 0
    bytes_of_free_disk_space: int = 0
    bytes_of_total_disk_space: int = 0
    battery_level: float = -1.0
    battery_state: BatteryState = BatteryState.UNKNOWN


@dataclass(slots=True, kw_only=True)
class ConsoleLogEntry(LogEntry):
    """Text written to the console."""

    log: str = ""
    level: str = "info"
    logger_name: str = ""


@dataclass(slots=True, kw_only=True)
class EventLogEntry(LogEntry):
    type: EventType = EventType.DID_RECEIVE_MEMORY_WARNING

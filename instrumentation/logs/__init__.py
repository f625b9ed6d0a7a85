"""Instrumentation log entries, store and export helpers."""

from instrumentation.logs.codec import (
    dumps_store,
    entry_from_dict,
    entry_to_dict,
    loads_store,
    store_from_payload,
    store_to_payload,
    write_store_snapshot,
)
from instrumentation.logs.entries import (
    BatteryState,
    ConsoleLogEntry,
    DeviceLogEntry,
    EventLogEntry,
    EventType,
    LogEntry,
    as_utc,
    utc_now,
)
from instrumentation.logs.schema import LOG_STORE_SCHEMA_VERSION
from instrumentation.logs.store import DEFAULT_OLDEST_LOG_AGE_S, LogStore

__all__ = [
    "BatteryState",
    "ConsoleLogEntry",
    "DEFAULT_OLDEST_LOG_AGE_S",
    "DeviceLogEntry",
    "EventLogEntry",
    "EventType",
    "LOG_STORE_SCHEMA_VERSION",
    "LogEntry",
    "LogStore",
    "as_utc",
    "dumps_store",
    "entry_from_dict",
    "entry_to_dict",
    "loads_store",
    "store_from_payload",
    "store_to_payload",
    "utc_now",
    "write_store_snapshot",
]

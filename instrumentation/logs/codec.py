"""Structural (de)serialization of log store snapshots."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from instrumentation.errors import LogDecodeError
from instrumentation.json_codec import dumps_bytes, dumps_text, loads
from instrumentation.logs.entries import (
    BatteryState,
    ConsoleLogEntry,
    DeviceLogEntry,
    EventLogEntry,
    EventType,
    LogEntry,
    as_utc,
)
from instrumentation.logs.schema import LOG_STORE_SCHEMA_VERSION
from instrumentation.logs.store import Clock, LogStore


def entry_to_dict(entry: LogEntry) -> dict[str, Any]:
    timestamp = entry.timestamp.isoformat(timespec="microseconds")
    if isinstance(entry, DeviceLogEntry):
        return {
            "kind": "device",
            "timestamp": timestamp,
            "bytes_of_free_memory": int(entry.bytes_of_free_memory),
            "bytes_of_total_memory": int(entry.bytes_of_total_memory),
            "bytes_of_free_disk_space": int(entry.bytes_of_free_disk_space),
            "bytes_of_total_disk_space": int(entry.bytes_of_total_disk_space),
            "battery_level": float(entry.battery_level),
            "battery_state": str(entry.battery_state),
        }
    if isinstance(entry, ConsoleLogEntry):
        return {
            "kind": "console",
            "timestamp": timestamp,
            "log": entry.log,
            "level": entry.level,
            "logger_name": entry.logger_name,
        }
    if isinstance(entry, EventLogEntry):
        return {
            "kind": "event",
            "timestamp": timestamp,
            "type": str(entry.type),
        }
    raise TypeError(f"unsupported log entry type: {type(entry).__name__}")


def entry_from_dict(payload: dict[str, Any]) -> LogEntry:
    if not isinstance(payload, dict):
        raise LogDecodeError(f"log entry must be an object, got {type(payload).__name__}")
    kind = payload.get("kind")
    try:
        timestamp = _parse_timestamp(payload["timestamp"])
        if kind == "device":
            return DeviceLogEntry(
                timestamp=timestamp,
                bytes_of_free_memory=int(payload.get("bytes_of_free_memory", 0)),
                bytes_of_total_memory=int(payload.get("bytes_of_total_memory", 0)),
                bytes_of_free_disk_space=int(payload.get("bytes_of_free_disk_space", 0)),
                bytes_of_total_disk_space=int(payload.get("bytes_of_total_disk_space", 0)),
                battery_level=float(payload.get("battery_level", -1.0)),
                battery_state=BatteryState(payload.get("battery_state", BatteryState.UNKNOWN)),
            )
        if kind == "console":
            return ConsoleLogEntry(
                timestamp=timestamp,
                log=str(payload.get("log", "")),
                level=str(payload.get("level", "info")),
                logger_name=str(payload.get("logger_name", "")),
            )
        if kind == "event":
            return EventLogEntry(timestamp=timestamp, type=EventType(payload["type"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise LogDecodeError(f"malformed {kind} log entry: {exc}") from exc
    raise LogDecodeError(f"unknown log entry kind: {kind!r}")


def store_to_payload(store: LogStore) -> dict[str, Any]:
    return {
        "schema_version": LOG_STORE_SCHEMA_VERSION,
        "oldest_log_age_s": store.oldest_log_age_s,
        "device_logs": [entry_to_dict(entry) for entry in store.device_logs.snapshot()],
        "console_logs": [entry_to_dict(entry) for entry in store.console_logs.snapshot()],
        "event_logs": [entry_to_dict(entry) for entry in store.event_logs.snapshot()],
    }


def store_from_payload(payload: dict[str, Any], *, clock: Clock | None = None) -> LogStore:
    if not isinstance(payload, dict):
        raise LogDecodeError("log store payload must be an object")
    version = payload.get("schema_version")
    if version != LOG_STORE_SCHEMA_VERSION:
        raise LogDecodeError(f"unsupported log store schema version: {version!r}")
    try:
        oldest_log_age_s = float(payload.get("oldest_log_age_s", 60.0))
    except (TypeError, ValueError) as exc:
        raise LogDecodeError(f"invalid oldest_log_age_s: {exc}") from exc
    if oldest_log_age_s < 0.0:
        raise LogDecodeError("oldest_log_age_s must be >= 0")
    return LogStore.from_entries(
        device=_decode_list(payload, "device_logs", DeviceLogEntry),
        console=_decode_list(payload, "console_logs", ConsoleLogEntry),
        event=_decode_list(payload, "event_logs", EventLogEntry),
        oldest_log_age_s=oldest_log_age_s,
        clock=clock,
    )


def dumps_store(store: LogStore, *, pretty: bool = False) -> bytes:
    return dumps_bytes(store_to_payload(store), pretty=pretty)


def loads_store(raw: bytes | str, *, clock: Clock | None = None) -> LogStore:
    try:
        payload = loads(raw)
    except ValueError as exc:
        raise LogDecodeError(f"invalid log store JSON: {exc}") from exc
    return store_from_payload(payload, clock=clock)


def write_store_snapshot(store: LogStore, path: Path) -> Path:
    """Write a pretty JSON bundle of the whole store to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_text(store_to_payload(store), pretty=True), encoding="utf-8")
    return path


def _decode_list[E: LogEntry](payload: dict[str, Any], key: str, expected: type[E]) -> list[E]:
    raw_entries = payload.get(key, [])
    if not isinstance(raw_entries, list):
        raise LogDecodeError(f"{key} must be a list")
    out: list[E] = []
    for raw in raw_entries:
        entry = entry_from_dict(raw)
        if not isinstance(entry, expected):
            raise LogDecodeError(f"{key} holds a {type(entry).__name__}")
        out.append(entry)
    return out


def _parse_timestamp(raw: Any) -> datetime:
    if not isinstance(raw, str):
        raise TypeError("timestamp must be an ISO-8601 string")
    return as_utc(datetime.fromisoformat(raw))

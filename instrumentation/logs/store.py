"""Time-windowed log store backing the overview pages."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import datetime

from instrumentation.logs.entries import (
    ConsoleLogEntry,
    DeviceLogEntry,
    EventLogEntry,
    LogEntry,
    as_utc,
    utc_now,
)
from instrumentation.structures.linked_list import OrderedList, OrderedListView

Clock = Callable[[], datetime]
ConsoleSubscriber = Callable[[ConsoleLogEntry], None]

DEFAULT_OLDEST_LOG_AGE_S = 60.0

_LOG = logging.getLogger("instrumentation.logs")


class LogStore:
    """Historical device, console and event logs in increasing time order.

    Device and event logs are pruned to ``oldest_log_age_s`` before each
    admission. Console logs are never pruned.
    Naive timestamps are taken to be UTC and normalized on admission.

    Entries must be added in non-decreasing timestamp order per log; pruning
    only ever inspects the head of a log.
    """

    def __init__(
        self,
        *,
        oldest_log_age_s: float = DEFAULT_OLDEST_LOG_AGE_S,
        clock: Clock | None = None,
    ) -> None:
        self._device_logs: OrderedList[DeviceLogEntry] = OrderedList()
        self._console_logs: OrderedList[ConsoleLogEntry] = OrderedList()
        self._event_logs: OrderedList[EventLogEntry] = OrderedList()
        self._oldest_log_age_s = _validated_age(oldest_log_age_s)
        self._clock: Clock = clock or utc_now
        self._subscribers: dict[int, ConsoleSubscriber] = {}
        self._next_subscriber_id = 1

    @classmethod
    def from_entries(
        cls,
        *,
        device: Iterable[DeviceLogEntry] = (),
        console: Iterable[ConsoleLogEntry] = (),
        event: Iterable[EventLogEntry] = (),
        oldest_log_age_s: float = DEFAULT_OLDEST_LOG_AGE_S,
        clock: Clock | None = None,
    ) -> LogStore:
        """Build a store holding the given entries verbatim, without pruning."""
        store = cls(oldest_log_age_s=oldest_log_age_s, clock=clock)
        store._device_logs.extend(_normalized(device))
        store._console_logs.extend(_normalized(console))
        store._event_logs.extend(_normalized(event))
        return store

    @property
    def oldest_log_age_s(self) -> float:
        return self._oldest_log_age_s

    @oldest_log_age_s.setter
    def oldest_log_age_s(self, value: float) -> None:
        self._oldest_log_age_s = _validated_age(value)

    @property
    def device_logs(self) -> OrderedListView[DeviceLogEntry]:
        return OrderedListView(self._device_logs)

    @property
    def console_logs(self) -> OrderedListView[ConsoleLogEntry]:
        return OrderedListView(self._console_logs)

    @property
    def event_logs(self) -> OrderedListView[EventLogEntry]:
        return OrderedListView(self._event_logs)

    def add_device_log(self, entry: DeviceLogEntry) -> None:
        """Prune expired device entries, then append ``entry``."""
        entry.timestamp = as_utc(entry.timestamp)
        self._prune(self._device_logs, now=as_utc(self._clock()), log_name="device")
        self._device_logs.append(entry)

    def add_event_log(self, entry: EventLogEntry) -> None:
        """Prune expired event entries, then append ``entry``."""
        entry.timestamp = as_utc(entry.timestamp)
        self._prune(self._event_logs, now=as_utc(self._clock()), log_name="event")
        self._event_logs.append(entry)

    def add_console_log(self, entry: ConsoleLogEntry) -> None:
        """Append ``entry`` and notify subscribers. Console history is never pruned."""
        entry.timestamp = as_utc(entry.timestamp)
        self._console_logs.append(entry)
        for callback in tuple(self._subscribers.values()):
            callback(entry)

    def prune(self, now: datetime | None = None) -> int:
        """Apply the age window to device and event logs without admitting anything."""
        current = as_utc(now if now is not None else self._clock())
        removed = self._prune(self._device_logs, now=current, log_name="device")
        removed += self._prune(self._event_logs, now=current, log_name="event")
        return removed

    def clear(self) -> None:
        self._device_logs.clear()
        self._console_logs.clear()
        self._event_logs.clear()

    def subscribe(self, callback: ConsoleSubscriber) -> int:
        token = self._next_subscriber_id
        self._next_subscriber_id += 1
        self._subscribers[token] = callback
        return token

    def unsubscribe(self, token: int) -> None:
        self._subscribers.pop(token, None)

    def _prune[E: LogEntry](self, logs: OrderedList[E], *, now: datetime, log_name: str) -> int:
        removed = 0
        head = logs.first
        while head is not None and (now - head.timestamp).total_seconds() > self._oldest_log_age_s:
            logs.remove_first()
            removed += 1
            head = logs.first
        if removed:
            _LOG.debug(
                "logstore_pruned",
                extra={"log": log_name, "removed": removed, "remaining": len(logs)},
            )
        return removed


def _normalized[E: LogEntry](entries: Iterable[E]) -> Iterator[E]:
    for entry in entries:
        entry.timestamp = as_utc(entry.timestamp)
        yield entry


def _validated_age(value: float) -> float:
    age = float(value)
    if age < 0.0:
        raise ValueError("oldest_log_age_s must be >= 0")
    return age

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from instrumentation.logs.entries import BatteryState, DeviceLogEntry

BASE_TIME = datetime(2026, 1, 1, tzinfo=UTC)


def at(seconds: float) -> datetime:
    return BASE_TIME + timedelta(seconds=seconds)


class FakeClock:
    def __init__(self, seconds: float = 0.0) -> None:
        self.now = at(seconds)

    def __call__(self) -> datetime:
        return self.now

    def set(self, seconds: float) -> None:
        self.now = at(seconds)

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@dataclass(slots=True)
class FakeProbe:
    free_memory: int = 512
    reads: list[datetime] = field(default_factory=list)

    def read(self, *, timestamp: datetime | None = None) -> DeviceLogEntry:
        stamp = timestamp if timestamp is not None else BASE_TIME
        self.reads.append(stamp)
        return DeviceLogEntry(
            timestamp=stamp,
            bytes_of_free_memory=self.free_memory,
            bytes_of_total_memory=1024,
            bytes_of_free_disk_space=10,
            bytes_of_total_disk_space=100,
            battery_level=0.5,
            battery_state=BatteryState.UNPLUGGED,
        )


class CountingValue:
    """Value whose equality checks are counted, to observe list traversal."""

    comparisons = 0

    def __init__(self, key: int) -> None:
        self.key = key

    def __eq__(self, other: object) -> bool:
        CountingValue.comparisons += 1
        return isinstance(other, CountingValue) and other.key == self.key

    __hash__ = None  # type: ignore[assignment]

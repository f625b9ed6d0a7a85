"""In-app instrumentation: ordered log buffers for a debug overlay."""

from instrumentation.errors import (
    ConcurrentMutationError,
    InstrumentationError,
    LogDecodeError,
    StaleLocationError,
)
from instrumentation.logs import (
    BatteryState,
    ConsoleLogEntry,
    DeviceLogEntry,
    EventLogEntry,
    EventType,
    LogEntry,
    LogStore,
)
from instrumentation.runtime import Instrumentation, InstrumentationConfig
from instrumentation.structures import Location, OrderedList, OrderedListView

__all__ = [
    "BatteryState",
    "ConcurrentMutationError",
    "ConsoleLogEntry",
    "DeviceLogEntry",
    "EventLogEntry",
    "EventType",
    "Instrumentation",
    "InstrumentationConfig",
    "InstrumentationError",
    "Location",
    "LogDecodeError",
    "LogEntry",
    "LogStore",
    "OrderedList",
    "OrderedListView",
    "StaleLocationError",
]

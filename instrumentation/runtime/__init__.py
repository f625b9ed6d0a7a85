"""Instrumentation runtime: configuration, logging, capture and sampling."""

from instrumentation.runtime.config import (
    InstrumentationConfig,
    load_instrumentation_config,
    resolve_log_level_name,
)
from instrumentation.runtime.console_capture import ConsoleCaptureHandler
from instrumentation.runtime.device_probe import DeviceSampler, DeviceStateProbe
from instrumentation.runtime.instrumentation import Instrumentation
from instrumentation.runtime.logging import (
    configure_logging,
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "ConsoleCaptureHandler",
    "DeviceSampler",
    "DeviceStateProbe",
    "Instrumentation",
    "InstrumentationConfig",
    "configure_logging",
    "get_logger",
    "load_instrumentation_config",
    "resolve_log_level_name",
    "setup_logging",
    "shutdown_logging",
]

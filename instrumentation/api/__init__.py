"""Public instrumentation API contracts."""

from instrumentation.api.logging import JsonFormatter, LoggingConfig

__all__ = ["JsonFormatter", "LoggingConfig"]

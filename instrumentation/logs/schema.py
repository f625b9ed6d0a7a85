"""Log export schema version constants."""

from __future__ import annotations

LOG_STORE_SCHEMA_VERSION = "iai.logstore.v1"
LOG_ENTRY_KINDS: tuple[str, ...] = ("device", "console", "event")

"""Instrumentation configuration from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from instrumentation.runtime_profile import resolve_runtime_profile


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip()
    return value if value else default


def _default_disk_path() -> str:
    return os.path.abspath(os.sep)


@dataclass(frozen=True, slots=True)
class InstrumentationConfig:
    enabled: bool = True
    oldest_log_age_s: float = 60.0
    device_sample_interval_s: float = 1.0
    console_capture_enabled: bool = True
    console_capture_level: str = "DEBUG"
    disk_path: str = field(default_factory=_default_disk_path)
    snapshot_dir: str = "appdata/instrumentation"


def resolve_log_level_name(default: str | None = None) -> str:
    """Resolve runtime log level with instrumentation-prefixed override.

    Without either variable the active runtime profile's ``log_level`` applies.
    """
    if default is None:
        default = resolve_runtime_profile().log_level
    value = os.getenv("IAI_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def load_instrumentation_config() -> InstrumentationConfig:
    profile = resolve_runtime_profile()
    level = _str("IAI_CONSOLE_LEVEL", profile.console_capture_level).upper()
    if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        level = profile.console_capture_level
    return InstrumentationConfig(
        enabled=_flag("IAI_ENABLED", profile.enabled),
        oldest_log_age_s=max(0.0, _float("IAI_OLDEST_LOG_AGE_S", profile.oldest_log_age_s)),
        device_sample_interval_s=max(
            0.1, _float("IAI_DEVICE_SAMPLE_INTERVAL_S", profile.device_sample_interval_s)
        ),
        console_capture_enabled=_flag("IAI_CONSOLE_CAPTURE", profile.console_capture_enabled),
        console_capture_level=level,
        disk_path=_str("IAI_DISK_PATH", _default_disk_path()),
        snapshot_dir=_str("IAI_SNAPSHOT_DIR", "appdata/instrumentation"),
    )

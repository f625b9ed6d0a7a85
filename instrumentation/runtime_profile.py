"""Runtime profile presets for instrumentation behavior."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

type RuntimeProfileName = Literal["dev-debug", "dev-fast", "release-like"]


@dataclass(frozen=True, slots=True)
class RuntimeProfile:
    """Resolved runtime profile defaults."""

    name: RuntimeProfileName
    log_level: str
    enabled: bool
    oldest_log_age_s: float
    device_sample_interval_s: float
    console_capture_enabled: bool
    console_capture_level: str


_PROFILE_PRESETS: dict[RuntimeProfileName, RuntimeProfile] = {
    "dev-debug": RuntimeProfile(
        name="dev-debug",
        log_level="DEBUG",
        enabled=True,
        oldest_log_age_s=60.0,
        device_sample_interval_s=1.0,
        console_capture_enabled=True,
        console_capture_level="DEBUG",
    ),
    "dev-fast": RuntimeProfile(
        name="dev-fast",
        log_level="INFO",
        enabled=True,
        oldest_log_age_s=30.0,
        device_sample_interval_s=2.0,
        console_capture_enabled=True,
        console_capture_level="INFO",
    ),
    "release-like": RuntimeProfile(
        name="release-like",
        log_level="WARNING",
        enabled=False,
        oldest_log_age_s=60.0,
        device_sample_interval_s=5.0,
        console_capture_enabled=False,
        console_capture_level="WARNING",
    ),
}


def resolve_runtime_profile_name(default: RuntimeProfileName = "dev-debug") -> RuntimeProfileName:
    """Resolve normalized runtime profile name from environment."""
    raw = os.getenv("IAI_RUNTIME_PROFILE")
    if raw is None:
        return default
    normalized = raw.strip().lower()
    alias_map: dict[str, RuntimeProfileName] = {
        "dev-debug": "dev-debug",
        "dev_debug": "dev-debug",
        "debug": "dev-debug",
        "dev-fast": "dev-fast",
        "dev_fast": "dev-fast",
        "fast": "dev-fast",
        "release-like": "release-like",
        "release_like": "release-like",
        "release": "release-like",
        "prod": "release-like",
    }
    return alias_map.get(normalized, default)


def resolve_runtime_profile(default: RuntimeProfileName = "dev-debug") -> RuntimeProfile:
    """Return full runtime profile defaults."""
    name = resolve_runtime_profile_name(default=default)
    return _PROFILE_PRESETS[name]


__all__ = ["RuntimeProfile", "RuntimeProfileName", "resolve_runtime_profile", "resolve_runtime_profile_name"]

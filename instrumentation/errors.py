"""Instrumentation error taxonomy and recoverable-error policy helpers."""

from __future__ import annotations

import logging
from typing import TypeAlias


class InstrumentationError(Exception):
    """Base class for instrumentation errors."""


class StaleLocationError(InstrumentationError, LookupError):
    """Location refers to a removed node or to a node owned by another list."""


class ConcurrentMutationError(InstrumentationError, RuntimeError):
    """List was mutated while an iteration over it was still open."""


class LogDecodeError(InstrumentationError, ValueError):
    """Serialized log payload could not be decoded."""


# Explicitly bounded fallback set for probe/backend compatibility paths.
RecoverableRuntimeErrors: TypeAlias = tuple[type[BaseException], ...]
RECOVERABLE_RUNTIME_ERRORS: RecoverableRuntimeErrors = (
    RuntimeError,
    OSError,
    ValueError,
    TypeError,
    AttributeError,
    ImportError,
)


def log_recoverable(
    logger: logging.Logger,
    message: str,
    *,
    level: int = logging.DEBUG,
) -> None:
    """Emit structured observability for tolerated recoverable exceptions."""
    logger.log(level, message, exc_info=True)

from __future__ import annotations

import logging
import threading

import pytest

from instrumentation.logs import ConsoleLogEntry, LogStore
from instrumentation.runtime.console_capture import ConsoleCaptureHandler


def _logger(name: str, handler: logging.Handler) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(handler)
    return logger


def test_capture_handler_appends_console_entries_on_drain() -> None:
    store = LogStore()
    handler = ConsoleCaptureHandler(store)
    logger = _logger("app.capture", handler)
    try:
        logger.info("loaded %d items", 3)
        logger.warning("slow frame")
    finally:
        logger.removeHandler(handler)

    assert len(store.console_logs) == 0
    assert handler.pending == 2
    assert handler.drain() == 2

    entries = store.console_logs.snapshot()
    assert [entry.log for entry in entries] == ["loaded 3 items", "slow frame"]
    assert [entry.level for entry in entries] == ["info", "warning"]
    assert entries[0].logger_name == "app.capture"
    assert entries[0].timestamp <= entries[1].timestamp
    assert handler.pending == 0


def test_capture_handler_respects_level() -> None:
    store = LogStore()
    handler = ConsoleCaptureHandler(store, level=logging.WARNING)
    logger = _logger("app.capture_level", handler)
    try:
        logger.info("ignored")
        logger.error("kept")
    finally:
        logger.removeHandler(handler)
    handler.drain()

    assert [entry.log for entry in store.console_logs] == ["kept"]


def test_capture_handler_ignores_instrumentation_namespace() -> None:
    store = LogStore()
    handler = ConsoleCaptureHandler(store)
    internal = _logger("instrumentation.logs", handler)
    lookalike = _logger("instrumentation_app", handler)
    try:
        internal.debug("logstore_pruned")
        lookalike.info("captured")
    finally:
        internal.removeHandler(handler)
        lookalike.removeHandler(handler)
    handler.drain()

    assert [entry.log for entry in store.console_logs] == ["captured"]


def test_capture_notifies_store_subscribers() -> None:
    store = LogStore()
    seen: list[str] = []
    store.subscribe(lambda entry: seen.append(entry.log))
    handler = ConsoleCaptureHandler(store)
    logger = _logger("app.capture_notify", handler)
    try:
        logger.info("ping")
    finally:
        logger.removeHandler(handler)

    assert seen == []
    handler.drain()
    assert seen == ["ping"]


def test_records_from_worker_thread_reach_store_only_on_drain() -> None:
    store = LogStore()
    handler = ConsoleCaptureHandler(store)
    logger = _logger("app.capture_worker", handler)
    try:
        worker = threading.Thread(target=lambda: [logger.info("worker %d", i) for i in range(50)])
        worker.start()
        worker.join()
    finally:
        logger.removeHandler(handler)

    assert len(store.console_logs) == 0
    assert handler.drain() == 50
    assert [entry.log for entry in store.console_logs] == [f"worker {i}" for i in range(50)]


def test_failing_subscriber_does_not_escape_drain(caplog: pytest.LogCaptureFixture) -> None:
    store = LogStore()

    def _explode(entry: ConsoleLogEntry) -> None:
        raise RuntimeError(f"cannot render {entry.log}")

    store.subscribe(_explode)
    handler = ConsoleCaptureHandler(store)
    logger = _logger("app.capture_failing", handler)
    try:
        logger.info("first")
        logger.info("second")
    finally:
        logger.removeHandler(handler)

    with caplog.at_level(logging.WARNING, logger="instrumentation.capture"):
        assert handler.drain() == 2

    assert [entry.log for entry in store.console_logs] == ["first", "second"]
    assert [record.getMessage() for record in caplog.records].count("console_subscriber_failed") == 2


def test_subscriber_that_logs_is_queued_for_next_drain() -> None:
    store = LogStore()
    handler = ConsoleCaptureHandler(store)
    logger = _logger("app.capture_echo", handler)
    store.subscribe(lambda entry: logger.info("echo %s", entry.log))
    try:
        logger.info("hello")
        assert handler.drain() == 1
        assert [entry.log for entry in store.console_logs] == ["hello"]
        assert handler.pending == 1

        assert handler.drain() == 1
        assert [entry.log for entry in store.console_logs] == ["hello", "echo hello"]
        assert handler.pending == 1
    finally:
        logger.removeHandler(handler)


def test_drain_from_inside_a_subscriber_is_a_no_op() -> None:
    store = LogStore()
    handler = ConsoleCaptureHandler(store)
    nested: list[int] = []
    store.subscribe(lambda entry: nested.append(handler.drain()))
    logger = _logger("app.capture_nested", handler)
    try:
        logger.info("one")
        logger.info("two")
    finally:
        logger.removeHandler(handler)

    assert handler.drain() == 2
    assert nested == [0, 0]
    assert [entry.log for entry in store.console_logs] == ["one", "two"]


def test_unformattable_record_goes_to_handle_error(monkeypatch: pytest.MonkeyPatch) -> None:
    store = LogStore()
    handler = ConsoleCaptureHandler(store)
    failures: list[str] = []
    monkeypatch.setattr(handler, "handleError", lambda record: failures.append(record.msg))
    logger = _logger("app.capture_badformat", handler)
    try:
        logger.info("%d items", "many")
    finally:
        logger.removeHandler(handler)

    assert failures == ["%d items"]
    assert handler.pending == 0

from __future__ import annotations

import threading

import pytest

from class_register.common.observable import TableNotifier
from class_register.common.worker import BackgroundWorker


def test_subscribe_delivers_initial_snapshot():
    notifier = TableNotifier()
    seen = []

    notifier.subscribe(["classes"], lambda: "snapshot", seen.append)

    assert seen == ["snapshot"]


def test_notify_only_reaches_watchers_of_touched_tables():
    notifier = TableNotifier()
    classes, students = [], []
    notifier.subscribe(["classes"], lambda: 1, classes.append)
    notifier.subscribe(["students", "attendance"], lambda: 2, students.append)

    notifier.notify("attendance")
    notifier.notify("classes", "students")

    assert classes == [1, 1]
    assert students == [2, 2, 2]


def test_cancelled_subscription_stops_receiving():
    notifier = TableNotifier()
    seen = []
    sub = notifier.subscribe(["classes"], lambda: "x", seen.append)

    sub.cancel()
    notifier.notify("classes")

    assert seen == ["x"]
    assert sub.active is False
    assert notifier.subscriber_count() == 0


def test_worker_dispatch_runs_queries_off_the_caller_thread():
    worker = BackgroundWorker(name="test-worker")
    notifier = TableNotifier(dispatch=worker.submit)
    threads = []
    try:
        notifier.subscribe(["classes"], lambda: threading.current_thread().name, threads.append)
        notifier.notify("classes")
        worker.flush()
    finally:
        worker.shutdown()

    assert len(threads) == 2
    assert all(name.startswith("test-worker") for name in threads)


def test_worker_run_reraises_job_errors():
    worker = BackgroundWorker()
    try:
        with pytest.raises(ZeroDivisionError):
            worker.run(lambda: 1 / 0)
        assert worker.run(lambda: 2 + 2) == 4
    finally:
        worker.shutdown()


def test_callback_error_is_logged_and_later_refreshes_still_run(caplog):
    notifier = TableNotifier()
    calls = []

    def flaky(value):
        calls.append(value)
        if len(calls) == 2:
            raise ValueError("boom")

    notifier.subscribe(["classes"], lambda: len(calls), flaky)
    notifier.notify("classes")
    notifier.notify("classes")

    assert calls == [0, 1, 2]
    assert "subscription refresh failed" in caplog.text

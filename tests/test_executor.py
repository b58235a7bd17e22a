import threading
import time

import pytest

from cloudinfo.adapter import Level, LogEvent, RecordingLogger, new_logger, new_noop_logger
from cloudinfo.executor import new_periodic_executor


def _wait_for(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_execute_periodically_until_cancelled():
    sink = RecordingLogger()
    calls = []
    lock = threading.Lock()

    def task(stop):
        with lock:
            calls.append(stop)

    stop = threading.Event()
    worker = new_periodic_executor(0.02, new_logger(sink)).execute(stop, task)

    assert _wait_for(lambda: len(calls) >= 3)
    stop.set()
    worker.join(2)

    assert not worker.is_alive()
    assert all(c is stop for c in calls)
    assert sink.last_event() == LogEvent(Level.DEBUG, "stopping periodic execution")


def test_execute_periodically_till_deadline():
    calls = []
    stop = threading.Event()
    timer = threading.Timer(0.15, stop.set)
    timer.start()

    worker = new_periodic_executor(0.02, new_noop_logger()).execute(
        stop, lambda s: calls.append(1)
    )
    worker.join(3)

    assert not worker.is_alive()
    assert stop.is_set()
    assert len(calls) >= 2


def test_task_runs_immediately():
    ran = threading.Event()
    stop = threading.Event()
    new_periodic_executor(60, new_noop_logger()).execute(stop, lambda s: ran.set())

    assert ran.wait(2)
    stop.set()


@pytest.mark.parametrize("interval", [0, -1])
def test_non_positive_interval_rejected(interval):
    with pytest.raises(ValueError):
        new_periodic_executor(interval, new_noop_logger()).execute(
            threading.Event(), lambda s: None
        )
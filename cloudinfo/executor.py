"""Periodic execution of background tasks."""

from __future__ import annotations

import threading
from typing import Callable

from cloudinfo.adapter import Logger

TaskFn = Callable[[threading.Event], None]


class PeriodicExecutor:
    """Runs a task once immediately and then every ``interval`` seconds until stopped."""

    def __init__(self, interval: float, log: Logger) -> None:
        self.interval = interval
        self.log = log

    def execute(self, stop: threading.Event, task: TaskFn) -> threading.Thread:
        """Start running the task; return the thread that drives the periodic calls.

        The task receives the stop event; setting it ends the periodic execution.
        """
        if self.interval <= 0:
            raise ValueError("non-positive interval for periodic execution")

        threading.Thread(target=task, args=(stop,), daemon=True).start()

        def loop() -> None:
            while not stop.wait(self.interval):
                task(stop)
            self.log.debug("stopping periodic execution")

        worker = threading.Thread(target=loop, daemon=True)
        worker.start()
        return worker


def new_periodic_executor(period: float, log: Logger) -> PeriodicExecutor:
    """Create an executor with the given period in seconds."""
    return PeriodicExecutor(period, log)
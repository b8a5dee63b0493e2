"""
bizcal Periodic Reloader

Runs a reload callable on a background daemon thread at a fixed
interval. A failing reload is logged and retried at the next tick; the
thread never dies from it.
"""
from __future__ import annotations

import logging
import threading
from datetime import timedelta
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)


def _seconds(interval: Union[timedelta, float, int]) -> float:
    if isinstance(interval, timedelta):
        return interval.total_seconds()
    return float(interval)


class PeriodicReloader:
    """
    Calls `reload` every `interval` until stopped.

    Attributes:
        name: Thread name, also used in log messages
        interval_seconds: Seconds between two reloads
    """

    def __init__(self, reload: Callable[[], object], interval: Union[timedelta, float, int],
                 name: str = "bizcal-reloader") -> None:
        self.interval_seconds = _seconds(interval)
        if self.interval_seconds <= 0:
            raise ValueError(f"reload interval must be positive: {interval!r}")
        self.name = name
        self._reload = reload
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.info("scheduled reload every %.1fs: %s", self.interval_seconds, self.name)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stopped.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def _run(self) -> None:
        while not self._stopped.wait(self.interval_seconds):
            try:
                self._reload()
            except Exception:
                logger.exception("reload failed: %s", self.name)

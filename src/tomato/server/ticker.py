"""Background ticker driving the passive refresh of the timer."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from tomato.core.timer import Timer

logger = logging.getLogger(__name__)


class Ticker:
    """Call :meth:`Timer.refresh` every *interval* seconds on a daemon thread."""

    def __init__(self, timer: Timer, interval: float) -> None:
        self.timer = timer
        self.interval = interval
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stopped.clear()
        self._thread = threading.Thread(target=self._run, name="tomato-ticker", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 10)
            self._thread = None

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self.timer.refresh()
            except Exception:
                logger.exception("Refresh failed")

"""Timer core — the Pomodoro state machine.

The timer keeps an absolute deadline while running and a remaining-time
snapshot while paused, so reconciling elapsed wall-clock time is a single
subtraction at read time and the clock never has to be stopped.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Protocol

from tomato.core.modes import Mode, RunState, TimerSettings
from tomato.core.status import IconKind, Snapshot, Status, displayed_seconds, project

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class Hooks(Protocol):
    """Side effects fired after a transition has committed."""

    def on_start(self) -> None: ...

    def on_expiry(self) -> None: ...


class Notifier(Protocol):
    """Receiver of every projected display text (fire-and-forget)."""

    def submit(self, text: str, icon: IconKind) -> None: ...


class _NoHooks:
    def on_start(self) -> None:
        pass

    def on_expiry(self) -> None:
        pass


class Timer:
    """A lock-guarded Pomodoro timer cycling through work and break modes.

    All four operations (:meth:`toggle`, :meth:`stop`, :meth:`refresh` and
    :meth:`status`) always succeed and return the projected :class:`Status`.
    Hooks and push notifications run after the lock has been released.
    """

    def __init__(
        self,
        settings: Optional[TimerSettings] = None,
        *,
        clock: Optional[Clock] = None,
        hooks: Optional[Hooks] = None,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self._settings: TimerSettings = settings if settings is not None else TimerSettings()
        self._clock: Clock = clock if clock is not None else time.monotonic
        self._hooks: Hooks = hooks if hooks is not None else _NoHooks()
        self._notifier: Optional[Notifier] = notifier
        self._lock = threading.Lock()

        self._mode: Mode = Mode.WORK
        self._state: RunState = RunState.STOPPED
        self._deadline: float = 0.0
        self._remaining: float = 0.0
        self._count: int = 0

    # -- public interface ----------------------------------------------------

    @property
    def settings(self) -> TimerSettings:
        return self._settings

    def toggle(self) -> Status:
        """Start, resume or pause the current interval.

        A running interval whose deadline has already passed is completed
        first; the toggle is then absorbed and the timer stays stopped.
        """
        started = False
        with self._lock:
            now = self._clock()
            expired = self._expire(now)
            if not expired and self._state is RunState.STOPPED:
                self._begin_running(now, self._settings.duration(self._mode))
                started = True
            elif not expired and self._state is RunState.PAUSED:
                self._begin_running(now, self._remaining)
                started = True
            elif not expired:
                self._remaining = self._deadline - now
                self._state = RunState.PAUSED
            status = self._project(now)

        if expired:
            self._after_expiry(status)
        if started:
            logger.info("Started %s", status.line)
            self._hooks.on_start()
        elif not expired:
            logger.info("Paused %s", status.line)
        self._publish(status)
        return status

    def stop(self) -> Status:
        """Stop the current interval, or switch mode when already stopped.

        Neither stopping nor switching counts as a completed interval, even
        when a running interval is already past its deadline.
        """
        with self._lock:
            now = self._clock()
            if self._state is RunState.STOPPED:
                self._switch_mode()
            else:
                self._state = RunState.STOPPED
            status = self._project(now)

        logger.info("%s", status.line)
        self._publish(status)
        return status

    def refresh(self) -> Status:
        """Complete a running interval whose deadline has passed.

        Called by the background ticker on every tick.
        """
        with self._lock:
            now = self._clock()
            expired = self._expire(now)
            status = self._project(now)

        if expired:
            self._after_expiry(status)
        self._publish(status)
        return status

    def status(self) -> Status:
        """Return the current status, completing an expired interval first."""
        status = self.refresh()
        logger.debug("%s", status.line)
        return status

    def get_mode(self) -> Mode:
        """Return the current mode."""
        with self._lock:
            return self._mode

    def get_state(self) -> RunState:
        """Return the current run state."""
        with self._lock:
            return self._state

    def get_count(self) -> int:
        """Return the number of work intervals completed in this cycle."""
        with self._lock:
            return self._count

    def get_remaining(self) -> float:
        """Return the displayed remaining time in seconds, without refreshing."""
        with self._lock:
            return displayed_seconds(self._snapshot(), self._settings, self._clock())

    # -- private helpers -----------------------------------------------------

    def _begin_running(self, now: float, duration: float) -> None:
        self._deadline = now + duration
        self._state = RunState.RUNNING

    def _expire(self, now: float) -> bool:
        """Stop and advance a running interval that is due.  Lock must be held."""
        if self._state is not RunState.RUNNING or now < self._deadline:
            return False
        self._state = RunState.STOPPED
        self._advance_mode()
        return True

    def _advance_mode(self) -> None:
        """Move to the next mode after an interval completed on its own."""
        if self._mode is Mode.WORK:
            self._count += 1
            self._mode = self._next_break()
        else:
            self._leave_break()

    def _switch_mode(self) -> None:
        """Move to the next mode by hand, leaving the count untouched for work."""
        if self._mode is Mode.WORK:
            self._mode = self._next_break()
        else:
            self._leave_break()

    def _next_break(self) -> Mode:
        if self._count < self._settings.cycle_length:
            return Mode.SHORT_BREAK
        return Mode.LONG_BREAK

    def _leave_break(self) -> None:
        if self._mode is Mode.LONG_BREAK:
            self._count = 0
        self._mode = Mode.WORK

    def _snapshot(self) -> Snapshot:
        return Snapshot(
            mode=self._mode,
            state=self._state,
            deadline=self._deadline,
            remaining=self._remaining,
            count=self._count,
        )

    def _project(self, now: float) -> Status:
        return project(self._snapshot(), self._settings, now)

    def _after_expiry(self, status: Status) -> None:
        logger.info("Interval finished, now %s", status.line)
        self._hooks.on_expiry()

    def _publish(self, status: Status) -> None:
        if self._notifier is not None:
            self._notifier.submit(status.timer, status.icon)

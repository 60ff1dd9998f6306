"""Status projector — read-only rendering of the timer state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from tomato.core.modes import Mode, RunState, TimerSettings

_MAX_MINUTES = 99


class IconKind(Enum):
    """Icon shown next to the countdown by a push widget."""

    WORK = "work"
    BREAK = "break"


@dataclass(frozen=True)
class Snapshot:
    """A consistent copy of the timer fields taken under the timer lock."""

    mode: Mode
    state: RunState
    deadline: float
    remaining: float
    count: int


@dataclass(frozen=True)
class Status:
    """Projected status returned by every timer operation."""

    mode: Mode
    state: RunState
    timer: str
    count: int
    cycle_length: int

    @property
    def line(self) -> str:
        """Compact ``<state> <timer> <i>/<n> <mode>`` line used for logging."""
        return f"{self.state.value} {self.timer} {self.count}/{self.cycle_length} {self.mode.value}"

    @property
    def record(self) -> dict[str, Any]:
        """Structured form of the status for JSON clients."""
        return {
            "mode": self.mode.value,
            "state": self.state.value,
            "timer": self.timer,
            "i": self.count,
            "n": self.cycle_length,
        }

    @property
    def icon(self) -> IconKind:
        return IconKind.BREAK if self.mode.is_break else IconKind.WORK


def format_timer(seconds: float, sep: str = ":") -> str:
    """Format *seconds* as ``MM<sep>SS``.

    Negative values render as zero and minutes are clamped to 99, so both
    components are always exactly two digits.
    """
    total = int(max(seconds, 0.0))
    minutes = min(total // 60, _MAX_MINUTES)
    return f"{minutes:02d}{sep}{total % 60:02d}"


def displayed_seconds(snapshot: Snapshot, settings: TimerSettings, now: float) -> float:
    """Return the time to display for *snapshot* at clock reading *now*."""
    if snapshot.state is RunState.STOPPED:
        return settings.duration(snapshot.mode)
    if snapshot.state is RunState.PAUSED:
        return snapshot.remaining
    return max(snapshot.deadline - now, 0.0)


def project(snapshot: Snapshot, settings: TimerSettings, now: float) -> Status:
    """Project *snapshot* into a :class:`Status` at clock reading *now*."""
    seconds = displayed_seconds(snapshot, settings, now)
    return Status(
        mode=snapshot.mode,
        state=snapshot.state,
        timer=format_timer(seconds, settings.separator(snapshot.mode)),
        count=snapshot.count,
        cycle_length=settings.cycle_length,
    )

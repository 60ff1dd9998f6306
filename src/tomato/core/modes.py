"""Mode and run-state tables for the Pomodoro cycle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    """Phase of the Pomodoro cycle."""

    WORK = "work"
    SHORT_BREAK = "short-break"
    LONG_BREAK = "long-break"

    @property
    def is_break(self) -> bool:
        return self is not Mode.WORK


class RunState(Enum):
    """Run state of the timer, rendered as a short glyph."""

    STOPPED = "[S]"
    RUNNING = "[R]"
    PAUSED = "[P]"


DEFAULT_CYCLE_LENGTH = 4


@dataclass(frozen=True)
class TimerSettings:
    """Per-mode durations (in seconds) and separators plus the cycle length."""

    work: float = 25 * 60.0
    short_break: float = 5 * 60.0
    long_break: float = 15 * 60.0
    cycle_length: int = DEFAULT_CYCLE_LENGTH
    colon: str = ":"
    colon_break: str = ":"

    def __post_init__(self) -> None:
        for name in ("work", "short_break", "long_break"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} duration must be positive")
        if self.cycle_length < 1:
            raise ValueError(f"cycle_length must be at least 1, got {self.cycle_length}")

    def duration(self, mode: Mode) -> float:
        """Return the configured duration of *mode* in seconds."""
        if mode is Mode.WORK:
            return self.work
        if mode is Mode.SHORT_BREAK:
            return self.short_break
        return self.long_break

    def separator(self, mode: Mode) -> str:
        """Return the separator used when rendering a countdown in *mode*."""
        return self.colon_break if mode.is_break else self.colon

"""Validation of the command-line configuration.

Everything here runs before the timer is constructed; any problem is a
:class:`ConfigError` and the process exits.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from tomato.core.modes import DEFAULT_CYCLE_LENGTH, TimerSettings

MIN_CYCLE_LENGTH = 1
MAX_CYCLE_LENGTH = 9
MIN_TICK_MS = 11
MAX_TICK_MS = 999
DEFAULT_LISTEN = ":12321"
BTT_URL = "http://127.0.0.1:{port}/update_touch_bar_widget/"


class ConfigError(Exception):
    """Raised for an invalid combination or value of options."""


@dataclass(frozen=True)
class Config:
    """Validated runtime configuration."""

    settings: TimerSettings
    host: str = "0.0.0.0"
    port: int = 12321
    tick_ms: int = 100
    push_url: Optional[str] = None
    uuid: str = ""
    icon_work: Optional[str] = None
    icon_break: Optional[str] = None
    command: Optional[str] = None
    start_command: Optional[str] = None
    run_async: bool = False


def parse_duration(value: str) -> float:
    """Parse ``25m``, ``300s`` or ``25`` (minutes) into seconds.

    Raises :class:`ConfigError` for empty, non-numeric or non-positive values.
    """
    text = value.strip()
    unit = 60
    if text.endswith("m"):
        text = text[:-1]
    elif text.endswith("s"):
        unit = 1
        text = text[:-1]
    try:
        amount = int(text)
    except ValueError:
        raise ConfigError(f"Invalid duration `{value}`") from None
    if amount <= 0:
        raise ConfigError(f"Invalid duration `{value}`")
    return float(amount * unit)


def parse_listen(value: str) -> tuple[str, int]:
    """Split a ``host:port`` listen address; an empty host listens everywhere."""
    host, sep, port = value.rpartition(":")
    if not sep:
        raise ConfigError(f"Invalid listen address `{value}`")
    try:
        number = int(port)
    except ValueError:
        raise ConfigError(f"Invalid listen address `{value}`") from None
    if not 0 < number < 65536:
        raise ConfigError(f"Invalid listen address `{value}`")
    return host or "0.0.0.0", number


def resolve_push_url(url: Optional[str], port: Optional[str], uuid: Optional[str]) -> Optional[str]:
    """Work out where push updates go, if anywhere."""
    if url and port:
        raise ConfigError("--port and --url can not be used together")
    if bool(port) != bool(uuid):
        raise ConfigError("--port and --uuid must be used together")
    if url:
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise ConfigError(f"Unable to parse url: {exc}") from exc
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise ConfigError(f"Unable to parse url: {url}")
        return url
    if port:
        return BTT_URL.format(port=port)
    return None


def build_config(
    *,
    listen: str = DEFAULT_LISTEN,
    n: int = DEFAULT_CYCLE_LENGTH,
    colon: str = ":",
    colon_alt: str = ":",
    work: str = "25m",
    short: str = "5m",
    long: str = "15m",
    tick: int = 100,
    url: Optional[str] = None,
    port: Optional[str] = None,
    uuid: Optional[str] = None,
    icon1: Optional[str] = None,
    icon2: Optional[str] = None,
    command: Optional[str] = None,
    start_command: Optional[str] = None,
    run_async: bool = False,
) -> Config:
    """Validate raw option values and build a :class:`Config`."""
    if not MIN_TICK_MS <= tick <= MAX_TICK_MS:
        raise ConfigError("Invalid ticker value (must between 10 and 1000)")
    if not MIN_CYCLE_LENGTH <= n <= MAX_CYCLE_LENGTH:
        raise ConfigError(f"Invalid number of intervals ({n})")

    settings = TimerSettings(
        work=parse_duration(work),
        short_break=parse_duration(short),
        long_break=parse_duration(long),
        cycle_length=n,
        colon=colon,
        colon_break=colon_alt,
    )
    host, listen_port = parse_listen(listen)
    return Config(
        settings=settings,
        host=host,
        port=listen_port,
        tick_ms=tick,
        push_url=resolve_push_url(url, port, uuid),
        uuid=uuid or "",
        icon_work=icon1 or None,
        icon_break=icon2 or None,
        command=command or None,
        start_command=start_command or None,
        run_async=run_async,
    )

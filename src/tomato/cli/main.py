"""CLI entry point for tomato.

Uses Click to parse and validate the options, then wires the timer, its
hooks and push notifier into the HTTP server and runs it with uvicorn.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional, TypeVar

import click
import uvicorn

import tomato
from tomato.config import DEFAULT_LISTEN, Config, ConfigError, build_config
from tomato.core.hooks import CommandHooks
from tomato.core.icons import DEFAULT_BREAK_ICON, DEFAULT_WORK_ICON, IconError, load_icon
from tomato.core.modes import Mode
from tomato.core.push import PushError, PushNotifier
from tomato.core.status import IconKind, format_timer
from tomato.core.timer import Timer
from tomato.server.app import create_app
from tomato.server.ticker import Ticker

T = TypeVar("T")

logger = logging.getLogger(__name__)

_EPILOG = """\b
Examples:
  tomato
  tomato -n 3 --colon=: --work=25m --short=300s --long=15m --listen=:12321

\b
Send updates to BetterTouchTool:
  tomato --uuid=UUID --port=12345
  tomato --icon1=PATH_ICON1 --icon2=PATH_ICON2 --uuid=UUID \\
      --url=http://127.0.0.1:12345/update_touch_bar_widget/

\b
Execute a command at the end of timer:
  tomato --command='terminal-notifier -title Pomodoro -message "Hey, time is over!"'
"""


def _run(action: Callable[[], T]) -> T:
    """Execute *action*, converting a startup error into a CLI error.

    On ``ConfigError`` the message is printed to stderr and the process
    exits with code 1.
    """
    try:
        return action()
    except ConfigError as exc:
        click.echo(str(exc), err=True)
        click.echo("Execute `tomato --help` for usage.", err=True)
        sys.exit(1)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_notifier(config: Config) -> Optional[PushNotifier]:
    """Create the push notifier and send the initial work display.

    Raises :class:`ConfigError` when an icon cannot be loaded or the first
    update fails.
    """
    if config.push_url is None:
        return None
    try:
        icons = {
            IconKind.WORK: load_icon(config.icon_work, DEFAULT_WORK_ICON),
            IconKind.BREAK: load_icon(config.icon_break, DEFAULT_BREAK_ICON),
        }
    except IconError as exc:
        raise ConfigError(str(exc)) from exc

    notifier = PushNotifier(config.push_url, uuid=config.uuid, icons=icons)
    settings = config.settings
    text = format_timer(settings.duration(Mode.WORK), settings.separator(Mode.WORK))
    try:
        notifier.notify(text, icons[IconKind.WORK])
    except PushError as exc:
        notifier.close()
        raise ConfigError(f"Error while sending request to {config.push_url}: {exc}") from exc
    return notifier


def _log_startup(config: Config) -> None:
    settings = config.settings
    logger.info(
        "Interval=%ss ShortBreak=%ss LongBreak=%ss N=%s",
        int(settings.work),
        int(settings.short_break),
        int(settings.long_break),
        settings.cycle_length,
    )
    if config.push_url:
        logger.info("Send update every %sms to URL: %s", config.tick_ms, config.push_url)
    if config.command:
        suffix = " (without waiting it to finish)" if config.run_async else ""
        logger.info("Command to run at the end of timer%s: %r", suffix, config.command)
    if config.start_command:
        logger.info("Command to run at the start of timer: %r", config.start_command)


@click.command(epilog=_EPILOG)
@click.version_option(version=tomato.__version__, prog_name="tomato")
@click.option("--listen", default=DEFAULT_LISTEN, show_default=True, help="Address to listen on.")
@click.option("-n", "n", default=4, show_default=True, type=int, help="Number of intervals between long break.")
@click.option("--colon", default=":", show_default=True, help="Custom separator.")
@click.option("--colon-alt", default=":", show_default=True, help="Alternative separator for break modes.")
@click.option("--work", default="25m", show_default=True, help="Work interval.")
@click.option("--short", default="5m", show_default=True, help="Short break interval.")
@click.option("--long", "long_", default="15m", show_default=True, help="Long break interval.")
@click.option("--icon1", default=None, help="Icon for work (default red).")
@click.option("--icon2", default=None, help="Icon for break session (default green).")
@click.option("--command", default=None, help="Execute command at the end of timer.")
@click.option("--start-command", default=None, help="Execute command on start of timer.")
@click.option(
    "--async",
    "run_async",
    is_flag=True,
    help="Execute the command without waiting it to finish (use together with --command).",
)
@click.option("--uuid", default=None, help="UUID of the widget.")
@click.option("--port", default=None, help="BetterTouchTool port.")
@click.option("--url", default=None, help="URL to post update.")
@click.option("--tick", default=100, show_default=True, type=int, help="Duration in ms for sending updates.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(
    listen: str,
    n: int,
    colon: str,
    colon_alt: str,
    work: str,
    short: str,
    long_: str,
    icon1: Optional[str],
    icon2: Optional[str],
    command: Optional[str],
    start_command: Optional[str],
    run_async: bool,
    uuid: Optional[str],
    port: Optional[str],
    url: Optional[str],
    tick: int,
    verbose: bool,
) -> None:
    """Tomato: a Pomodoro timer for touch bar and status bar widgets."""
    _configure_logging(verbose)
    config = _run(
        lambda: build_config(
            listen=listen,
            n=n,
            colon=colon,
            colon_alt=colon_alt,
            work=work,
            short=short,
            long=long_,
            tick=tick,
            url=url,
            port=port,
            uuid=uuid,
            icon1=icon1,
            icon2=icon2,
            command=command,
            start_command=start_command,
            run_async=run_async,
        )
    )
    _log_startup(config)
    notifier = _run(lambda: build_notifier(config))

    hooks = CommandHooks(config.command, config.start_command, config.run_async)
    timer = Timer(config.settings, hooks=hooks, notifier=notifier)
    app = create_app(timer, Ticker(timer, config.tick_ms / 1000.0))

    logger.info("Server listen at %s:%s", config.host, config.port)
    try:
        uvicorn.run(app, host=config.host, port=config.port, log_level="warning")
    finally:
        if notifier is not None:
            notifier.close()

"""Shell command hooks fired when an interval starts or finishes."""

from __future__ import annotations

import logging
import subprocess
import threading
from typing import Optional

logger = logging.getLogger(__name__)

_SHELL = "/bin/sh"
_NOTIFIER_HINT = (
    "Note: You may need to download terminal-notifier at "
    "https://github.com/julienXX/terminal-notifier"
)


class HookError(Exception):
    """Raised when a hook command cannot be launched or exits non-zero."""

    def __init__(self, command: str, message: str, returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode


def run_command(command: str, wait: bool = True) -> Optional[subprocess.Popen]:
    """Run *command* through ``/bin/sh -c``.

    With *wait* the command runs to completion and a non-zero exit raises
    :class:`HookError`.  Without it the started process is returned and the
    caller decides whether to watch it.
    """
    try:
        proc = subprocess.Popen([_SHELL, "-c", command])
    except OSError as exc:
        raise HookError(command, f"unable to start command: {exc}") from exc
    if not wait:
        return proc
    returncode = proc.wait()
    if returncode != 0:
        raise HookError(command, f"exit status {returncode}", returncode)
    return None


class CommandHooks:
    """Run the configured commands on start and on expiry of an interval.

    Failures never propagate: they are logged and the timer carries on.  In
    async mode the command is started and a daemon thread waits on it only to
    log the outcome.
    """

    def __init__(
        self,
        command: Optional[str] = None,
        start_command: Optional[str] = None,
        run_async: bool = False,
    ) -> None:
        self.command = command or None
        self.start_command = start_command or None
        self.run_async = run_async

    def on_start(self) -> None:
        if self.start_command:
            self._execute(self.start_command)

    def on_expiry(self) -> None:
        if self.command:
            self._execute(self.command)

    def _execute(self, command: str) -> None:
        if self.run_async:
            logger.info("Executing command (without waiting it to finish)...")
        try:
            proc = run_command(command, wait=not self.run_async)
        except HookError as exc:
            _log_failure(exc)
            return
        if proc is None:
            logger.info("Command executed")
            return
        threading.Thread(
            target=_watch, args=(command, proc), name="tomato-hook", daemon=True
        ).start()


def _watch(command: str, proc: subprocess.Popen) -> None:
    returncode = proc.wait()
    if returncode != 0:
        _log_failure(HookError(command, f"exit status {returncode}", returncode))
    else:
        logger.info("Command executed")


def _log_failure(exc: HookError) -> None:
    logger.error("Failed to execute command %r: %s", exc.command, exc)
    if exc.returncode == 127 and "terminal-notifier" in exc.command:
        logger.error(_NOTIFIER_HINT)

"""Push updates of the countdown to a touch bar widget over HTTP."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

import httpx

from tomato.core.status import IconKind

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 0.2  # seconds


class PushError(Exception):
    """Raised when the widget endpoint rejects or fails an update."""


class PushNotifier:
    """Send ``(text, icon)`` updates to a widget URL, skipping repeats.

    :meth:`notify` performs the request in the calling thread; :meth:`submit`
    hands it to a single background worker and returns immediately.
    """

    def __init__(
        self,
        url: str,
        uuid: str = "",
        icons: Optional[dict[IconKind, str]] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.url = url
        self.uuid = uuid
        self.icons: dict[IconKind, str] = dict(icons or {})
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tomato-push")
        self._lock = threading.Lock()
        self._last: Optional[tuple[str, str]] = None

    def notify(self, text: str, icon_data: str) -> bool:
        """Send an update unless it equals the previous one.

        Returns ``True`` when a request was made.  Raises :class:`PushError`
        on a transport error or a non-200 response.
        """
        with self._lock:
            if self._last == (text, icon_data):
                return False
            self._last = (text, icon_data)
            params = {"uuid": self.uuid, "text": text, "icon_data": icon_data}
            try:
                resp = self._client.get(self.url, params=params)
            except httpx.HTTPError as exc:
                raise PushError(str(exc)) from exc
        if resp.status_code != httpx.codes.OK:
            raise PushError(f"Response status: {resp.status_code} {resp.reason_phrase}")
        return True

    def submit(self, text: str, icon: IconKind) -> Future:
        """Queue an update for *text* with the icon of *icon* and return at once."""
        return self._executor.submit(self._send, text, self.icons.get(icon, ""))

    def close(self) -> None:
        """Abandon queued updates and close the HTTP client."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._client.close()

    def _send(self, text: str, icon_data: str) -> None:
        try:
            self.notify(text, icon_data)
        except PushError as exc:
            logger.warning("Error while sending request: %s", exc)

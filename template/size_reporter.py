"""
Debounced reporting of the rendered dialog size to the host.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Callable, Optional, Tuple

from shared.message_envelope import METHOD_ON_SIZE, Response
from notification_bridge.notification_bridge import logger as app_logger

AfterFn = Callable[[int, Callable[[], None]], object]
AfterCancelFn = Callable[[object], None]
MeasureFn = Callable[[], Tuple[float, float]]
CallFn = Callable[[str, dict], "Future[Response]"]

DEFAULT_DEBOUNCE_MS = 40
_MIN_DEBOUNCE_MS = 10
_MAX_DEBOUNCE_MS = 100


class SizeReporter:
    """
    Measures the content root once renders settle and reports it via ``onSize``.

    Each render signal restarts one trailing-edge timer, so a burst of
    renders produces a single report carrying the final measurement.
    Reports equal to the last size the host accepted are skipped.
    """

    def __init__(
        self,
        measure: MeasureFn,
        call: CallFn,
        *,
        after: AfterFn,
        after_cancel: AfterCancelFn,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    ) -> None:
        self._logger = app_logger.get_logger()
        self._measure = measure
        self._call = call
        self._after = after
        self._after_cancel = after_cancel
        self.debounce_ms = max(_MIN_DEBOUNCE_MS, min(_MAX_DEBOUNCE_MS, int(debounce_ms)))
        self._handle: object | None = None
        self._last_sent: Optional[Tuple[float, float]] = None
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def last_sent(self) -> Optional[Tuple[float, float]]:
        return self._last_sent

    def notify_rendered(self, *_args: object) -> None:
        if self._closed:
            return
        self._cancel_pending()
        self._handle = self._after(self.debounce_ms, self._flush)

    def close(self) -> None:
        self._closed = True
        self._cancel_pending()

    def _cancel_pending(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is not None:
            self._after_cancel(handle)

    def _flush(self) -> None:
        self._handle = None
        if self._closed:
            return
        width, height = self._measure()
        size = (width, height)
        if size == self._last_sent:
            self._logger.debug("Size {}x{} unchanged; skipping report.", width, height)
            return
        future = self._call(METHOD_ON_SIZE, {"width": width, "height": height})
        future.add_done_callback(lambda done: self._on_reply(size, done))

    def _on_reply(self, size: Tuple[float, float], done: "Future[Response]") -> None:
        if done.cancelled() or done.exception() is not None:
            return
        response = done.result()
        if response.ok:
            self._last_sent = size
        else:
            self._logger.debug("Host rejected size report: {}", response.error)

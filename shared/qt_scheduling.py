"""
Qt adapters for posting work and scheduling timers on the GUI event loop.
"""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, Qt, QTimer, Signal

from notification_bridge.notification_bridge import logger as app_logger

_LOGGER = app_logger.get_logger()


class QtPoster(QObject):
    """Posts callables onto the event loop through a queued signal (FIFO)."""

    _posted = Signal(object)

    def __init__(self, name: str, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.setObjectName(name)
        self._posted.connect(self._run, Qt.ConnectionType.QueuedConnection)  # type: ignore[arg-type]

    def post(self, callback: Callable[[], None]) -> None:
        self._posted.emit(callback)

    def _run(self, callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:
            _LOGGER.exception("Posted callback failed on {}", self.objectName())


def qt_after(delay_ms: int, callback: Callable[[], None]) -> QTimer:
    """Start a single-shot timer; the caller keeps the returned timer alive until it fires."""
    timer = QTimer()
    timer.setSingleShot(True)
    timer.setInterval(max(0, int(delay_ms)))
    timer.timeout.connect(callback)  # type: ignore[arg-type]
    timer.start()
    return timer


def qt_after_cancel(handle: object) -> None:
    if isinstance(handle, QTimer):
        handle.stop()

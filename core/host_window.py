"""
Frameless host window embedding the template view in the bottom-right corner.
"""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QApplication, QHBoxLayout, QWidget

from shared.message_envelope import Rect, Workarea
from notification_bridge.notification_bridge import logger as app_logger


class TemplateHostWindow(QWidget):
    """
    Hosts one content view. Geometry comes only from placement results;
    the window stays hidden until the first one arrives.
    """

    closed = Signal()

    def __init__(self, content: QWidget, *, stay_on_top: bool = True, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._logger = app_logger.get_logger()
        flags = Qt.WindowType.Tool | Qt.WindowType.FramelessWindowHint
        if stay_on_top:
            flags |= Qt.WindowType.WindowStaysOnTopHint
        self.setWindowFlags(flags)
        self.setObjectName("TemplateHostWindow")
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(content)
        self._content = content
        self._revealed = False

    @property
    def revealed(self) -> bool:
        return self._revealed

    def workarea(self) -> Workarea:
        screen = QApplication.primaryScreen()
        if screen is None:
            return Rect(0, 0, 0, 0)
        geometry = screen.availableGeometry()
        return Rect(geometry.x(), geometry.y(), geometry.width(), geometry.height())

    def apply_rect(self, rect: Rect) -> None:
        self.setGeometry(int(rect.x), int(rect.y), round(rect.width), round(rect.height))
        if not self._revealed:
            self._revealed = True
            self._logger.debug("Revealing host window at {}.", rect)
            self.show()

    def request_close(self) -> None:
        self.close()

    def closeEvent(self, event) -> None:  # noqa: N802
        self.closed.emit()
        super().closeEvent(event)

"""
Default notification dialog rendered from the template state.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

from PySide6.QtCore import QSize, Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QStyle,
    QVBoxLayout,
    QWidget,
)

_ICON_PRESETS = {
    "info": QStyle.StandardPixmap.SP_MessageBoxInformation,
    "warning": QStyle.StandardPixmap.SP_MessageBoxWarning,
    "reminder": QStyle.StandardPixmap.SP_BrowserReload,
    "question": QStyle.StandardPixmap.SP_MessageBoxQuestion,
}


class NotificationView(QWidget):
    """
    Renders ``{lang, payload, i18n}`` as a card with title, message and actions.

    ``content_root`` is the only subtree that gets measured for size reports.
    Text comes from ``i18n``; ``payload["actions"]`` lists the buttons as
    ``{"action": ..., "label_key": ...}`` entries.
    """

    rendered = Signal()
    actionTriggered = Signal(dict)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("NotificationView")
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)

        self._container = QWidget(self)
        self._container.setObjectName("PopupCard")
        shadow = QGraphicsDropShadowEffect(self._container)
        shadow.setBlurRadius(24)
        shadow.setColor(QColor(0, 0, 0, 140))
        shadow.setOffset(0, 10)
        self._container.setGraphicsEffect(shadow)

        self._icon_label = QLabel()
        self._icon_label.setFixedSize(48, 48)
        self._icon_label.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)

        self._title_label = QLabel()
        self._title_label.setObjectName("NotificationTitle")
        self._title_label.setStyleSheet("font-weight: bold; font-size: 14px;")

        self._message_label = QLabel()
        self._message_label.setWordWrap(True)
        self._message_label.setObjectName("NotificationMessage")
        self._message_label.setMaximumWidth(360)

        actions_row = QWidget()
        self._actions_layout = QHBoxLayout(actions_row)
        self._actions_layout.setContentsMargins(0, 6, 0, 0)
        self._actions_layout.setSpacing(10)
        self._actions_layout.addStretch()
        self._buttons: List[QPushButton] = []

        text_layout = QVBoxLayout()
        text_layout.setSpacing(4)
        text_layout.addWidget(self._title_label)
        text_layout.addWidget(self._message_label)
        text_layout.addWidget(actions_row)

        base_layout = QHBoxLayout(self)
        base_layout.setContentsMargins(0, 0, 0, 0)
        base_layout.addWidget(self._container)

        layout = QHBoxLayout(self._container)
        layout.addWidget(self._icon_label)
        layout.addLayout(text_layout)
        layout.setContentsMargins(12, 10, 12, 12)
        layout.setSpacing(10)
        self._container.setMinimumWidth(340)
        self._container.setMaximumWidth(460)

        self.setStyleSheet(
            """
            QWidget#PopupCard {
                background-color: rgba(24, 24, 28, 0.92);
                color: white;
                border-radius: 12px;
                border: 1px solid rgba(255, 255, 255, 0.10);
            }
            QWidget#PopupCard QLabel#NotificationTitle {
                color: white;
            }
            QWidget#PopupCard QLabel#NotificationMessage {
                color: rgba(255, 255, 255, 0.85);
                margin-top: 2px;
            }
            QWidget#PopupCard QPushButton {
                padding: 0 14px;
                min-height: 30px;
                border-radius: 10px;
                background-color: rgba(255, 255, 255, 0.12);
                color: white;
                font-weight: 600;
            }
            QWidget#PopupCard QPushButton:hover {
                background-color: rgba(255, 255, 255, 0.22);
            }
            """
        )

    @property
    def content_root(self) -> QWidget:
        return self._container

    def show_state(self, state: Dict[str, Any]) -> None:
        i18n = state.get("i18n") or {}
        payload = state.get("payload") or {}
        self._title_label.setText(str(i18n.get("title", "")))
        self._message_label.setText(str(i18n.get("message", "")))
        self._apply_icon(payload.get("icon"))
        self._rebuild_actions(payload.get("actions"), i18n)
        self._container.adjustSize()
        self.rendered.emit()

    def measure(self) -> Tuple[int, int]:
        """Return the post-layout size of the content root."""
        layout = self._container.layout()
        if layout is not None:
            layout.activate()
        hint: QSize = self._container.sizeHint().expandedTo(self._container.minimumSizeHint())
        width = max(self._container.minimumWidth(), min(self._container.maximumWidth(), hint.width()))
        return width, hint.height()

    def _apply_icon(self, preset: Any) -> None:
        standard_icon = _ICON_PRESETS.get(
            preset if isinstance(preset, str) else "info",
            QStyle.StandardPixmap.SP_MessageBoxInformation,
        )
        self._icon_label.setPixmap(self.style().standardIcon(standard_icon).pixmap(48, 48))

    def _rebuild_actions(self, actions: Any, i18n: Dict[str, Any]) -> None:
        for button in self._buttons:
            self._actions_layout.removeWidget(button)
            button.deleteLater()
        self._buttons = []
        if not isinstance(actions, list):
            return
        for entry in actions:
            if not isinstance(entry, dict) or not isinstance(entry.get("action"), str):
                continue
            label = i18n.get(entry.get("label_key", ""), entry.get("label", entry["action"]))
            button = QPushButton(str(label))
            button.setCursor(Qt.CursorShape.PointingHandCursor)
            button.clicked.connect(lambda _checked=False, data=dict(entry): self.actionTriggered.emit(data))
            self._actions_layout.addWidget(button)
            self._buttons.append(button)

"""
Application coordinator wiring the host window to its template view.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QApplication

from core.action_dispatcher import ActionDispatcher
from core.bridge_transport import BridgeTransport
from core.host_window import TemplateHostWindow
from core.settings import BridgeSettings, BridgeSettingsManager
from core.window_placement import place
from shared.channel import CallChannel, PushChannel
from shared.message_envelope import METHOD_ON_ACTION, METHOD_ON_READY, METHOD_ON_SIZE, Size
from shared.qt_scheduling import QtPoster, qt_after, qt_after_cancel
from shared.template_data import default_template_data
from template.notification_view import NotificationView
from template.runtime import TemplateRuntime
from notification_bridge.notification_bridge import logger as app_logger

APP_NAME = "Notification Bridge"
APP_VERSION = "1.0.0"


class AppCoordinator(QObject):
    """
    Owns both sides of one notification: the host window with its transport,
    placement and action handling, and the template runtime inside the view.
    The two sides only talk through the call and push channels.
    """

    actionForwarded = Signal(dict)

    def __init__(
        self,
        template_data: Optional[Dict[str, Any]] = None,
        settings_manager: Optional[BridgeSettingsManager] = None,
    ) -> None:
        super().__init__()
        self._logger = app_logger.get_logger()
        self.settings_manager = settings_manager or BridgeSettingsManager()
        self._settings: BridgeSettings = self.settings_manager.read_settings()
        self._template_data = template_data or default_template_data()
        self._shutting_down = False

        self._host_loop = QtPoster("host-loop", self)
        self._view_loop = QtPoster("view-loop", self)
        self._calls = CallChannel(post_to_host=self._host_loop.post, post_to_view=self._view_loop.post)
        self._pushes = PushChannel(self._view_loop.post)

        self._view = NotificationView()
        self._runtime = TemplateRuntime(
            self._view,
            submit=self._calls.submit,
            post=self._view_loop.post,
            after=qt_after,
            after_cancel=qt_after_cancel,
            fallback_lang=self._settings.fallback_lang,
            debounce_ms=self._settings.debounce_ms,
        )
        self._pushes.connect(self._runtime.receive)

        self._window = TemplateHostWindow(self._view, stay_on_top=self._settings.stay_on_top)
        self._window.closed.connect(self.shutdown)

        self._transport = BridgeTransport(self._pushes.send)
        self._dispatcher = ActionDispatcher(self._window.request_close, self._forward_action)
        self._transport.register(METHOD_ON_READY, self._on_ready)
        self._transport.register(METHOD_ON_SIZE, self._on_size)
        self._transport.register(METHOD_ON_ACTION, self._dispatcher.dispatch)
        self._calls.bind(self._transport.handle_call)

    def start(self) -> None:
        self._logger.info("Starting {} v{}.", APP_NAME, APP_VERSION)
        # The handshake goes out once the view has had its first layout pass.
        self._view_loop.post(self._runtime.start)

    def shutdown(self) -> None:
        if self._shutting_down:
            return
        self._shutting_down = True
        self._logger.info("Shutting down template bridge.")
        self._runtime.shutdown()
        self._calls.unbind()
        self._pushes.disconnect()
        self._window.hide()
        app = QApplication.instance()
        if app is not None:
            app.quit()

    # ------------------------------------------------------------------
    # Business-logic pushes
    # ------------------------------------------------------------------
    def update(self, patch: Dict[str, Any]) -> None:
        self._transport.push_update(patch)

    def set_lang(self, lang: str) -> None:
        self._transport.push_set_lang(lang)

    def set_i18n(self, patch: Dict[str, str]) -> None:
        self._transport.push_set_i18n(patch)

    # ------------------------------------------------------------------
    # Template call handlers
    # ------------------------------------------------------------------
    def _on_ready(self, payload: Dict[str, Any]) -> None:
        self._logger.info("Template ready (lang={!r}); sending init.", payload["lang"])
        data = self._template_data
        self._transport.push_init(data.get("lang", ""), data.get("i18n", {}), data.get("payload", {}))

    def _on_size(self, payload: Dict[str, Any]) -> None:
        size = Size(width=payload["width"], height=payload["height"])
        rect = place(size, self._window.workarea(), self._settings.margin)
        self._logger.debug("Template reported {}x{}; placing at {}.", size.width, size.height, rect)
        self._window.apply_rect(rect)

    def _forward_action(self, payload: Dict[str, Any]) -> None:
        self.actionForwarded.emit(payload)

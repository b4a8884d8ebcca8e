"""
Maps template ``onAction`` payloads to host effects.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, Optional

from notification_bridge.notification_bridge import logger as app_logger

ACTION_CLOSE = "close_webview"


class ActionDispatcher:
    """
    Closes the window on ``close_webview`` and forwards every other action.

    Forwarded payloads are passed on whole; call-to-action fields are the
    application's business, not the dispatcher's.
    """

    def __init__(
        self,
        request_close: Callable[[], None],
        forward: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> None:
        self._logger = app_logger.get_logger()
        self._request_close = request_close
        self._forward = forward
        self._close_requested = False

    @property
    def close_requested(self) -> bool:
        return self._close_requested

    def dispatch(self, payload: Dict[str, Any]) -> None:
        action = payload.get("action")
        if not isinstance(action, str) or not action:
            self._logger.debug("Ignoring template action without a name: {!r}", payload)
            return
        if action == ACTION_CLOSE:
            self._close()
            return
        self._logger.info("Forwarding template action {!r}.", action)
        if self._forward is not None:
            self._forward(copy.deepcopy(payload))

    def _close(self) -> None:
        if self._close_requested:
            self._logger.debug("Close already in flight; ignoring repeat request.")
            return
        self._close_requested = True
        self._logger.info("Template requested window close.")
        self._request_close()

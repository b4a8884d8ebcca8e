"""
Template-side end of the bridge: inbound host pushes and outbound calls.
"""

from __future__ import annotations

import time
from collections import deque
from concurrent.futures import Future
from typing import Any, Callable, Deque, Dict, Optional, Tuple

from shared.errors import InvalidState, MalformedMessage
from shared.message_envelope import (
    ERROR_TRANSPORT,
    MALFORMED,
    METHOD_ON_READY,
    TYPE_INIT,
    TYPE_SET_I18N,
    TYPE_SET_LANG,
    TYPE_UPDATE,
    HostMessage,
    Response,
    ViewCall,
    parse_host_message,
)
from notification_bridge.notification_bridge import logger as app_logger
from template.state_store import StateStore

Submit = Callable[[ViewCall], "Future[Response]"]


class BridgeClient:
    """
    Dispatches host pushes into the state store and submits template calls.

    Nothing in here raises into the caller: transport problems become a
    ``transport_failure`` response and unusable pushes are dropped.
    """

    def __init__(
        self,
        store: StateStore,
        submit: Optional[Submit] = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._logger = app_logger.get_logger()
        self._store = store
        self._submit = submit
        self._clock = clock
        self._ready_sent = False
        self._held: Deque[Tuple[ViewCall, "Future[Response]"]] = deque()
        self._handlers: Dict[str, Callable[[HostMessage], Dict[str, Any]]] = {
            TYPE_INIT: self._on_init,
            TYPE_SET_LANG: self._on_set_lang,
            TYPE_SET_I18N: self._on_set_i18n,
            TYPE_UPDATE: self._on_update,
        }

    @property
    def ready_sent(self) -> bool:
        return self._ready_sent

    def attach(self, submit: Submit) -> None:
        self._submit = submit

    def close(self) -> None:
        self._submit = None
        while self._held:
            _call, future = self._held.popleft()
            _resolve(future, Response.failure(ERROR_TRANSPORT))

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------
    def handle_message(self, raw: Any) -> None:
        """Single entrypoint for everything the host pushes into the template."""
        message = parse_host_message(raw)
        if message is MALFORMED:
            self._logger.warning("Ignoring {}", MalformedMessage(f"host message {raw!r}"))
            return
        if not self._ready_sent:
            self._logger.warning("Dropping {} received before onReady.", message.type)
            return
        try:
            self._handlers[message.type](message)
        except InvalidState as exc:
            self._logger.warning("Template state fell back to defaults: {}", exc)
        except Exception:
            self._logger.exception("Template failed to apply host message {}.", message.type)

    def _on_init(self, message: HostMessage) -> Dict[str, Any]:
        fields = message.fields
        return self._store.init(fields.get("lang"), fields.get("i18n"), fields.get("payload"))

    def _on_set_lang(self, message: HostMessage) -> Dict[str, Any]:
        return self._store.set_lang(message.fields.get("lang"))

    def _on_set_i18n(self, message: HostMessage) -> Dict[str, Any]:
        return self._store.set_i18n(message.fields.get("i18n"))

    def _on_update(self, message: HostMessage) -> Dict[str, Any]:
        return self._store.update(message.fields.get("payload"))

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------
    def ready(self, lang: Optional[str] = None) -> "Future[Response]":
        """Send the handshake call, then release any calls held back until now."""
        payload = {"lang": lang or self._store.lang, "ts": int(self._clock() * 1000)}
        future = self._send(ViewCall(METHOD_ON_READY, payload))
        self._ready_sent = True
        while self._held:
            call, held_future = self._held.popleft()
            _chain(self._send(call), held_future)
        return future

    def call(self, method: str, payload: Optional[Dict[str, Any]] = None) -> "Future[Response]":
        view_call = ViewCall(method, dict(payload or {}))
        if method == METHOD_ON_READY:
            return self.ready(view_call.payload.get("lang"))
        if not self._ready_sent:
            future: "Future[Response]" = Future()
            self._held.append((view_call, future))
            return future
        return self._send(view_call)

    def _send(self, view_call: ViewCall) -> "Future[Response]":
        submit = self._submit
        if submit is None:
            self._logger.warning("No bridge transport attached; {} not delivered.", view_call.method)
            return _failed()
        try:
            return submit(view_call)
        except Exception as exc:
            self._logger.warning("Bridge call {} failed: {}", view_call.method, exc)
            return _failed()


def _failed() -> "Future[Response]":
    future: "Future[Response]" = Future()
    _resolve(future, Response.failure(ERROR_TRANSPORT))
    return future


def _resolve(future: "Future[Response]", response: Response) -> None:
    if future.set_running_or_notify_cancel():
        future.set_result(response)


def _chain(source: "Future[Response]", target: "Future[Response]") -> None:
    def _copy(done: "Future[Response]") -> None:
        if done.cancelled() or done.exception() is not None:
            _resolve(target, Response.failure(ERROR_TRANSPORT))
        else:
            _resolve(target, done.result())

    source.add_done_callback(_copy)

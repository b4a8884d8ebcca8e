"""
Host-side end of the template bridge.

Answers view-to-host calls and pushes host-to-view messages. Handlers
never see raw template input: payloads are coerced to safe defaults first.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from shared.errors import HandlerFailure, MalformedMessage, ValidationDefault
from shared.message_envelope import (
    ERROR_MALFORMED,
    ERROR_UNKNOWN_METHOD,
    MALFORMED,
    METHOD_ON_ACTION,
    METHOD_ON_READY,
    METHOD_ON_SIZE,
    TYPE_INIT,
    TYPE_SET_I18N,
    TYPE_SET_LANG,
    TYPE_UPDATE,
    VIEW_METHODS,
    HostMessage,
    Response,
    parse_view_call,
)
from notification_bridge.notification_bridge import logger as app_logger

Handler = Callable[[Dict[str, Any]], Any]
Sender = Callable[[HostMessage], None]

_LOGGER = app_logger.get_logger()


class BridgeTransport:
    """Validates template calls, dispatches them, and sends pushes back."""

    def __init__(self, send: Optional[Sender] = None) -> None:
        self._send = send
        self._handlers: Dict[str, Handler] = {}
        self._coercers: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
            METHOD_ON_READY: _coerce_ready,
            METHOD_ON_SIZE: _coerce_size,
            METHOD_ON_ACTION: _coerce_action,
        }

    def attach(self, send: Sender) -> None:
        self._send = send

    def register(self, method: str, handler: Handler) -> None:
        if method not in VIEW_METHODS:
            raise ValueError(f"Unknown template method: {method}")
        self._handlers[method] = handler

    # ------------------------------------------------------------------
    # Inbound
    # ------------------------------------------------------------------
    def handle_call(self, raw: Any) -> Response:
        call = parse_view_call(raw)
        if call is MALFORMED:
            _LOGGER.warning("{}", MalformedMessage(f"unparseable template call {raw!r}"))
            return Response.failure(ERROR_MALFORMED)
        if not call.is_known:
            _LOGGER.warning("{}", MalformedMessage(f"unknown template method {call.method!r}"))
            return Response.failure(ERROR_UNKNOWN_METHOD)

        payload = self._coercers[call.method](call.payload)
        handler = self._handlers.get(call.method)
        if handler is None:
            _LOGGER.debug("No handler registered for {}.", call.method)
            return Response.success()
        try:
            handler(payload)
        except Exception as exc:
            failure = HandlerFailure(f"{call.method} handler raised {exc!r}")
            _LOGGER.opt(exception=exc).error("{}", failure)
        return Response.success()

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------
    def send_to_template(self, message: HostMessage) -> None:
        send = self._send
        if send is None:
            _LOGGER.warning("No template attached; dropping {} push.", message.type)
            return
        try:
            send(message)
        except Exception:
            _LOGGER.exception("Failed to push {} to the template.", message.type)

    def push_init(self, lang: str, i18n: Dict[str, Any], payload: Dict[str, Any]) -> None:
        self.send_to_template(
            HostMessage(TYPE_INIT, {"lang": lang, "i18n": i18n, "payload": payload})
        )

    def push_set_lang(self, lang: str) -> None:
        self.send_to_template(HostMessage(TYPE_SET_LANG, {"lang": lang}))

    def push_set_i18n(self, patch: Dict[str, Any]) -> None:
        self.send_to_template(HostMessage(TYPE_SET_I18N, {"i18n": patch}))

    def push_update(self, patch: Dict[str, Any]) -> None:
        self.send_to_template(HostMessage(TYPE_UPDATE, {"payload": patch}))


def _coerce_number(payload: Dict[str, Any], name: str, *, minimum: Optional[float] = None) -> float:
    value = payload.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value != value:
        _LOGGER.debug("{}", ValidationDefault(name, value, 0))
        return 0
    if minimum is not None and value < minimum:
        _LOGGER.debug("{}", ValidationDefault(name, value, minimum))
        return minimum
    return value


def _coerce_string(payload: Dict[str, Any], name: str) -> str:
    value = payload.get(name)
    if not isinstance(value, str):
        _LOGGER.debug("{}", ValidationDefault(name, value, ""))
        return ""
    return value


def _coerce_ready(payload: Dict[str, Any]) -> Dict[str, Any]:
    coerced = dict(payload)
    coerced["lang"] = _coerce_string(payload, "lang")
    coerced["ts"] = _coerce_number(payload, "ts")
    return coerced


def _coerce_size(payload: Dict[str, Any]) -> Dict[str, Any]:
    coerced = dict(payload)
    coerced["width"] = _coerce_number(payload, "width", minimum=0)
    coerced["height"] = _coerce_number(payload, "height", minimum=0)
    return coerced


def _coerce_action(payload: Dict[str, Any]) -> Dict[str, Any]:
    # Only the action name is normalised; the rest passes through untouched.
    coerced = dict(payload)
    coerced["action"] = _coerce_string(payload, "action")
    return coerced

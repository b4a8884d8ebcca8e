"""
Message-passing lanes connecting the host window and the template view.

Each lane serializes envelopes to JSON before posting them onto the
receiving side's event loop, so neither side ever holds a reference to
the other's objects. Posting is FIFO per lane.
"""

from __future__ import annotations

import json
from concurrent.futures import Future
from typing import Any, Callable, Optional, Union

from shared.errors import TransportFailure
from shared.message_envelope import ERROR_TRANSPORT, HostMessage, Response, ViewCall, encode
from notification_bridge.notification_bridge import logger as app_logger

_LOGGER = app_logger.get_logger()

Poster = Callable[[Callable[[], None]], None]
HostHandler = Callable[[str], Union[Response, dict]]


class PushChannel:
    """Fire-and-forget lane for host-to-view pushes."""

    def __init__(self, post_to_view: Poster) -> None:
        self._post = post_to_view
        self._receiver: Optional[Callable[[str], Any]] = None

    def connect(self, receiver: Callable[[str], Any]) -> None:
        self._receiver = receiver

    def disconnect(self) -> None:
        self._receiver = None

    def send(self, message: Union[HostMessage, dict]) -> None:
        text = encode(message)
        self._post(lambda: self._deliver(text))

    def _deliver(self, text: str) -> None:
        receiver = self._receiver
        if receiver is None:
            _LOGGER.debug("Dropping host push; no template attached.")
            return
        try:
            receiver(text)
        except Exception:
            # No response is owed for pushes; a failing view must not take the host down.
            _LOGGER.exception("Template entrypoint raised while handling a host push.")


class CallChannel:
    """
    Request/response lane for view-to-host calls.

    ``submit`` returns a future that resolves on the view's loop with the
    host's ``Response``. The host handler runs on the host's loop.
    """

    def __init__(self, *, post_to_host: Poster, post_to_view: Poster) -> None:
        self._post_to_host = post_to_host
        self._post_to_view = post_to_view
        self._handler: Optional[HostHandler] = None

    def bind(self, handler: HostHandler) -> None:
        self._handler = handler

    def unbind(self) -> None:
        self._handler = None

    @property
    def bound(self) -> bool:
        return self._handler is not None

    def submit(self, call: ViewCall) -> "Future[Response]":
        if self._handler is None:
            raise TransportFailure("No host handler is bound to the call channel.")
        text = encode(call)
        future: "Future[Response]" = Future()
        self._post_to_host(lambda: self._dispatch(text, future))
        return future

    def _dispatch(self, text: str, future: "Future[Response]") -> None:
        handler = self._handler
        if handler is None:
            reply = encode(Response.failure(ERROR_TRANSPORT))
        else:
            try:
                reply = encode(Response.from_value(handler(text)))
            except Exception:
                _LOGGER.exception("Host handler failed while answering a template call.")
                reply = encode(Response.failure(ERROR_TRANSPORT))
        self._post_to_view(lambda: self._resolve(future, reply))

    @staticmethod
    def _resolve(future: "Future[Response]", reply: str) -> None:
        if not future.set_running_or_notify_cancel():
            return
        future.set_result(Response.from_value(json.loads(reply)))

"""
Template-side composition: state store, bridge client and size reporter for one view.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Dict

from shared.channel import Poster
from shared.message_envelope import METHOD_ON_ACTION, Response
from template.bridge_client import BridgeClient, Submit
from template.size_reporter import DEFAULT_DEBOUNCE_MS, AfterCancelFn, AfterFn, SizeReporter
from template.state_store import DEFAULT_FALLBACK_LANG, StateStore


class TemplateRuntime:
    """
    Owns everything living inside the content view.

    ``view`` renders snapshots (``show_state``), measures its content root
    (``measure``) and exposes ``rendered`` / ``actionTriggered`` signals.
    """

    def __init__(
        self,
        view,
        *,
        submit: Submit,
        post: Poster,
        after: AfterFn,
        after_cancel: AfterCancelFn,
        fallback_lang: str = DEFAULT_FALLBACK_LANG,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    ) -> None:
        self.view = view
        self.store = StateStore(fallback_lang=fallback_lang, schedule_render=post)
        self.client = BridgeClient(self.store, submit)
        self.reporter = SizeReporter(
            view.measure,
            self.client.call,
            after=after,
            after_cancel=after_cancel,
            debounce_ms=debounce_ms,
        )
        self.store.subscribe(view.show_state)
        view.rendered.connect(self.reporter.notify_rendered)
        view.actionTriggered.connect(self.emit_action)

    def receive(self, raw: Any) -> None:
        """Inbound entrypoint handed to the host-to-view channel."""
        self.client.handle_message(raw)

    def start(self) -> "Future[Response]":
        return self.client.ready()

    def emit_action(self, payload: Dict[str, Any]) -> "Future[Response]":
        return self.client.call(METHOD_ON_ACTION, payload)

    def shutdown(self) -> None:
        self.reporter.close()
        self.client.close()

"""
Template-side state holding ``{lang, payload, i18n}``.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Mapping, Optional

from shared.errors import InvalidState
from notification_bridge.notification_bridge import logger as app_logger

DEFAULT_FALLBACK_LANG = "en"

RenderListener = Callable[[Dict[str, Any]], None]
RenderScheduler = Callable[[Callable[[], None]], None]


class StateStore:
    """
    Owns the template state and applies the merges requested by the host.

    Every mutation returns a detached snapshot and schedules a render. Any
    number of mutations made before the scheduled render runs are painted
    by that single render pass.
    """

    def __init__(
        self,
        *,
        fallback_lang: str = DEFAULT_FALLBACK_LANG,
        schedule_render: Optional[RenderScheduler] = None,
    ) -> None:
        self._logger = app_logger.get_logger()
        self.fallback_lang = fallback_lang or DEFAULT_FALLBACK_LANG
        self._schedule_render = schedule_render
        self._lang = self.fallback_lang
        self._i18n: Dict[str, str] = {}
        self._payload: Dict[str, Any] = {}
        self._initialised = False
        self._render_pending = False
        self._listeners: List[RenderListener] = []
        self.substitutions: List[Dict[str, Any]] = []
        self.render_count = 0

    @property
    def initialised(self) -> bool:
        return self._initialised

    @property
    def lang(self) -> str:
        return self._lang

    def snapshot(self) -> Dict[str, Any]:
        return {
            "lang": self._lang,
            "payload": copy.deepcopy(self._payload),
            "i18n": copy.deepcopy(self._i18n),
        }

    def subscribe(self, listener: RenderListener) -> None:
        self._listeners.append(listener)

    def init(self, lang: Any, i18n: Any, payload: Any) -> Dict[str, Any]:
        self._i18n = _copy_mapping(i18n)
        self._payload = _copy_mapping(payload)
        self._initialised = True
        if isinstance(lang, str) and lang:
            self._lang = lang
            self._request_render()
            return self.snapshot()

        self._lang = self.fallback_lang
        self.substitutions.append({"field": "lang", "value": lang, "fallback": self.fallback_lang})
        self._logger.warning(
            "init received unusable lang {!r}; using fallback {!r}.",
            lang,
            self.fallback_lang,
        )
        self._request_render()
        snapshot = self.snapshot()
        raise InvalidState(f"init requires a non-empty string lang, got {lang!r}", snapshot)

    def set_lang(self, lang: Any) -> Dict[str, Any]:
        if isinstance(lang, str) and lang:
            self._lang = lang
        else:
            self._logger.debug("Ignoring setLang with unusable value {!r}.", lang)
        self._request_render()
        return self.snapshot()

    def set_i18n(self, patch: Any) -> Dict[str, Any]:
        self._i18n.update(_copy_mapping(patch))
        self._request_render()
        return self.snapshot()

    def update(self, patch: Any) -> Dict[str, Any]:
        self._payload.update(_copy_mapping(patch))
        self._request_render()
        return self.snapshot()

    def _request_render(self) -> None:
        if self._render_pending:
            return
        self._render_pending = True
        if self._schedule_render is None:
            self._render()
        else:
            self._schedule_render(self._render)

    def _render(self) -> None:
        self._render_pending = False
        self.render_count += 1
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)


def _copy_mapping(value: Any) -> Dict[str, Any]:
    if not isinstance(value, Mapping):
        return {}
    return {str(key): copy.deepcopy(item) for key, item in value.items()}

"""
Message shapes exchanged between the host window and the template view.

Only classification lives here. Field contents are validated by the
transport (host side) and the bridge client (view side).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Final, Optional, Union

METHOD_ON_READY: Final = "template:onReady"
METHOD_ON_SIZE: Final = "template:onSize"
METHOD_ON_ACTION: Final = "template:onAction"
VIEW_METHODS: Final = frozenset({METHOD_ON_READY, METHOD_ON_SIZE, METHOD_ON_ACTION})

TYPE_INIT: Final = "init"
TYPE_SET_LANG: Final = "setLang"
TYPE_SET_I18N: Final = "setI18n"
TYPE_UPDATE: Final = "update"
HOST_TYPES: Final = frozenset({TYPE_INIT, TYPE_SET_LANG, TYPE_SET_I18N, TYPE_UPDATE})

ERROR_UNKNOWN_METHOD: Final = "unknown_method"
ERROR_MALFORMED: Final = "malformed_message"
ERROR_TRANSPORT: Final = "transport_failure"


class _Malformed:
    """Sentinel returned when an inbound value matches no known variant."""

    _instance: Optional["_Malformed"] = None

    def __new__(cls) -> "_Malformed":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MALFORMED"

    def __bool__(self) -> bool:
        return False


MALFORMED: Final = _Malformed()


@dataclass(frozen=True, slots=True)
class ViewCall:
    """A view-to-host request: ``{method, payload}``."""

    method: str
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_known(self) -> bool:
        return self.method in VIEW_METHODS

    def to_dict(self) -> Dict[str, Any]:
        return {"method": self.method, "payload": dict(self.payload)}


@dataclass(frozen=True, slots=True)
class HostMessage:
    """A host-to-view push: ``{type, ...fields}``."""

    type: str
    fields: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_known(self) -> bool:
        return self.type in HOST_TYPES

    def to_dict(self) -> Dict[str, Any]:
        message = {key: value for key, value in self.fields.items() if key != "type"}
        message["type"] = self.type
        return message


@dataclass(frozen=True, slots=True)
class Response:
    ok: bool
    error: Optional[str] = None

    @classmethod
    def success(cls) -> "Response":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> "Response":
        return cls(ok=False, error=error)

    @classmethod
    def from_value(cls, value: Any) -> "Response":
        """Rebuild a response that crossed the boundary as plain data."""
        if isinstance(value, Response):
            return value
        if isinstance(value, dict) and isinstance(value.get("ok"), bool):
            error = value.get("error")
            return cls(ok=value["ok"], error=error if isinstance(error, str) else None)
        return cls.failure(ERROR_TRANSPORT)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"ok": self.ok}
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True, slots=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, other: "Rect") -> bool:
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


# Usable screen bounds share the rectangle shape.
Workarea = Rect


def _as_mapping(raw: Any) -> Optional[Dict[str, Any]]:
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
    if not isinstance(raw, dict):
        return None
    return raw


def parse_view_call(raw: Any) -> Union[ViewCall, _Malformed]:
    """
    Classify an inbound view-to-host value.

    Unknown method names still produce a ``ViewCall`` so the transport can
    answer ``unknown_method``; anything without a string method is malformed.
    """
    data = _as_mapping(raw)
    if data is None:
        return MALFORMED
    method = data.get("method")
    if not isinstance(method, str) or not method:
        return MALFORMED
    payload = data.get("payload")
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return MALFORMED
    return ViewCall(method=method, payload=payload)


def parse_host_message(raw: Any) -> Union[HostMessage, _Malformed]:
    """Classify an inbound host-to-view value into a known push or ``MALFORMED``."""
    data = _as_mapping(raw)
    if data is None:
        return MALFORMED
    message_type = data.get("type")
    if not isinstance(message_type, str) or message_type not in HOST_TYPES:
        return MALFORMED
    fields = {key: value for key, value in data.items() if key != "type"}
    return HostMessage(type=message_type, fields=fields)


def encode(message: Union[ViewCall, HostMessage, Response, Dict[str, Any]]) -> str:
    """Serialize an envelope for transfer across the boundary."""
    if isinstance(message, (ViewCall, HostMessage, Response)):
        message = message.to_dict()
    return json.dumps(message, ensure_ascii=False, separators=(",", ":"))

"""
Error taxonomy shared by both sides of the template bridge.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class BridgeError(Exception):
    """Base class for every error raised inside the bridge."""


class MalformedMessage(BridgeError, ValueError):
    """Raised when an envelope cannot be classified into a known variant."""


class ValidationDefault(BridgeError):
    """Describes a field that was replaced by a safe default value."""

    def __init__(self, field: str, value: Any, default: Any) -> None:
        super().__init__(f"{field}={value!r} replaced with {default!r}")
        self.field = field
        self.value = value
        self.default = default


class TransportFailure(BridgeError):
    """Raised when the cross-boundary call mechanism itself fails."""


class HandlerFailure(BridgeError):
    """Wraps an exception raised by a host-side handler."""


class InvalidState(BridgeError):
    """
    Raised by the state store when ``init`` receives no usable language.

    The fallback state is already in place when this is raised; the
    resulting snapshot travels with the exception.
    """

    def __init__(self, message: str, snapshot: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.snapshot = snapshot

"""
Host-side helpers for the notification bridge.
"""

from .action_dispatcher import ActionDispatcher  # noqa: F401
from .bridge_transport import BridgeTransport  # noqa: F401
from .window_placement import place  # noqa: F401

"""
Content-view side of the notification bridge.
"""

from .bridge_client import BridgeClient  # noqa: F401
from .size_reporter import SizeReporter  # noqa: F401
from .state_store import StateStore  # noqa: F401

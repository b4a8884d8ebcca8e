"""
notification_bridge package.

Hosts the application-wide helpers shared by the host window and the
embedded template runtime.
"""

__all__ = [
    "logger",
]

"""
Bottom-right placement of the host window inside the screen workarea.
"""

from __future__ import annotations

from shared.message_envelope import Rect, Size, Workarea


def place(size: Size, workarea: Workarea, margin: float = 0) -> Rect:
    """
    Anchor a window of ``size`` to the bottom-right corner of ``workarea``.

    ``margin`` is kept between the window and the workarea edges where room
    allows. The result always lies inside the workarea: oversized reports are
    shrunk to the workarea's own size.
    """
    margin = max(0, margin)
    width = min(max(0, size.width), max(0, workarea.width))
    height = min(max(0, size.height), max(0, workarea.height))

    x = workarea.x + workarea.width - width - margin
    y = workarea.y + workarea.height - height - margin
    x = _clamp(x, workarea.x, workarea.x + workarea.width - width)
    y = _clamp(y, workarea.y, workarea.y + workarea.height - height)
    return Rect(x=x, y=y, width=width, height=height)


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))

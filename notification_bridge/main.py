"""
Entry point for the notification bridge application.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from PySide6.QtWidgets import QApplication

from core.app import AppCoordinator
from shared.template_data import TemplateDataError, load_template_data
from notification_bridge.notification_bridge import logger as app_logger

_LOGGER = app_logger.get_logger()


def _load_data(args: List[str]) -> Optional[Dict[str, Any]]:
    if not args:
        return None
    return load_template_data(Path(args[0]))


def main(argv: Optional[List[str]] = None) -> int:
    """Show one notification, optionally from a template data file given as the first argument."""
    args = list(sys.argv if argv is None else argv)
    try:
        data = _load_data(args[1:])
    except TemplateDataError as exc:
        _LOGGER.error("Cannot start: {}", exc)
        return 2

    app = QApplication(args)
    coordinator = AppCoordinator(template_data=data)
    coordinator.actionForwarded.connect(
        lambda payload: _LOGGER.info("Application action: {}", payload)
    )
    coordinator.start()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())

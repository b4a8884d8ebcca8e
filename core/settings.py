"""
File-backed configuration for the notification bridge runtime.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from notification_bridge.notification_bridge import logger as app_logger
from template.size_reporter import DEFAULT_DEBOUNCE_MS
from template.state_store import DEFAULT_FALLBACK_LANG

_LOGGER = app_logger.get_logger()

DEFAULT_SETTINGS_PATH = Path(
    os.environ.get(
        "NOTIFICATION_BRIDGE_SETTINGS",
        str(Path.home() / ".notification_bridge" / "settings.json"),
    )
)
_MIN_DEBOUNCE_MS = 10
_MAX_DEBOUNCE_MS = 100
_MIN_MARGIN = 0
_MAX_MARGIN = 200


@dataclass(eq=True)
class BridgeSettings:
    margin: int = 0
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    fallback_lang: str = DEFAULT_FALLBACK_LANG
    stay_on_top: bool = True


class BridgeSettingsManager:
    """Loads persisted settings from a JSON file and clamps invalid data."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH

    def read_settings(self) -> BridgeSettings:
        raw = self._load()
        if raw is None:
            return BridgeSettings()

        defaults = BridgeSettings()
        return BridgeSettings(
            margin=self._read_int(raw, "margin", defaults.margin, _MIN_MARGIN, _MAX_MARGIN),
            debounce_ms=self._read_int(
                raw, "debounce_ms", defaults.debounce_ms, _MIN_DEBOUNCE_MS, _MAX_DEBOUNCE_MS
            ),
            fallback_lang=self._read_lang(raw, defaults.fallback_lang),
            stay_on_top=self._read_bool(raw, "stay_on_top", defaults.stay_on_top),
        )

    def _load(self) -> Optional[Dict[str, Any]]:
        try:
            contents = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            _LOGGER.warning("Unable to read settings file {}: {}", self.path, exc)
            return None
        try:
            raw = json.loads(contents)
        except json.JSONDecodeError as exc:
            _LOGGER.warning("Settings file {} is not valid JSON: {}", self.path, exc)
            return None
        if not isinstance(raw, dict):
            _LOGGER.warning("Settings file {} must contain a JSON object.", self.path)
            return None
        return raw

    def _read_int(self, raw: Dict[str, Any], name: str, default: int, lower: int, upper: int) -> int:
        value = raw.get(name)
        if value is None:
            return default
        if isinstance(value, bool) or not isinstance(value, int):
            _LOGGER.warning("Setting {} has unexpected type {}.", name, type(value).__name__)
            return default
        if value < lower or value > upper:
            _LOGGER.warning(
                "Invalid {} {} found in settings. Clamping to safe bounds.",
                name,
                value,
            )
        return max(lower, min(upper, value))

    def _read_bool(self, raw: Dict[str, Any], name: str, default: bool) -> bool:
        value = raw.get(name)
        if value is None:
            return default
        if not isinstance(value, bool):
            _LOGGER.warning("Setting {} has unexpected type {}.", name, type(value).__name__)
            return default
        return value

    def _read_lang(self, raw: Dict[str, Any], default: str) -> str:
        value = raw.get("fallback_lang")
        if value is None:
            return default
        if not isinstance(value, str) or not value.strip():
            _LOGGER.warning("Setting fallback_lang must be a non-empty string.")
            return default
        return value.strip()

"""
Loading and validation of the initial notification data pushed with ``init``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict


class TemplateDataError(ValueError):
    """Raised when a template data file is missing required data or is malformed."""


@dataclass(frozen=True)
class TemplateDataConstraints:
    """Schema constraints as simple dataclass constants."""

    max_lang_length: int = 35
    default_lang: str = "en"


def default_template_data() -> Dict[str, Any]:
    """Return the built-in sample notification."""
    return {
        "lang": "en",
        "i18n": {
            "title": "Updates are ready",
            "message": "Restart now to finish installing the latest updates.",
            "later": "Later",
            "restart": "Restart now",
        },
        "payload": {
            "actions": [
                {"action": "close_webview", "label_key": "later"},
                {"action": "restart", "label_key": "restart"},
            ],
        },
    }


def load_template_data(path: Path) -> Dict[str, Any]:
    """
    Load a template data JSON file and validate its shape.

    Returns a normalized dictionary with ``lang``, ``i18n`` and ``payload``
    keys. Absent sections default to empty mappings; ``lang`` defaults to
    ``"en"``.
    """
    try:
        contents = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise TemplateDataError(f"Template data file not found: {path}") from exc
    except OSError as exc:
        raise TemplateDataError(f"Unable to read template data: {path}") from exc

    try:
        raw = json.loads(contents)
    except json.JSONDecodeError as exc:
        raise TemplateDataError(f"Template data is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise TemplateDataError("Template data root must be a JSON object.")

    constraints = TemplateDataConstraints()
    lang = _require_lang(raw.get("lang"), constraints)
    i18n = _require_mapping(raw.get("i18n"), field="i18n")
    for key, value in i18n.items():
        if not isinstance(value, str):
            raise TemplateDataError(f"i18n.{key} must be a string.")
    payload = _require_mapping(raw.get("payload"), field="payload")

    return {"lang": lang, "i18n": i18n, "payload": payload}


def _require_lang(value: Any, constraints: TemplateDataConstraints) -> str:
    if value is None:
        return constraints.default_lang
    if not isinstance(value, str):
        raise TemplateDataError("lang must be a string.")
    stripped = value.strip()
    if not stripped:
        raise TemplateDataError("lang must be a non-empty string.")
    if len(stripped) > constraints.max_lang_length:
        raise TemplateDataError(
            f"lang must be at most {constraints.max_lang_length} characters."
        )
    return stripped


def _require_mapping(value: Any, *, field: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TemplateDataError(f"{field} must be a JSON object.")
    return dict(value)

import json
from pathlib import Path

import pytest

from shared.template_data import TemplateDataError, default_template_data, load_template_data


def test_load_normalizes_sections(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"lang": " fr ", "i18n": {"title": "Salut"}}), encoding="utf-8")

    assert load_template_data(path) == {"lang": "fr", "i18n": {"title": "Salut"}, "payload": {}}


def test_lang_defaults_when_absent(tmp_path: Path) -> None:
    path = tmp_path / "data.json"
    path.write_text("{}", encoding="utf-8")

    assert load_template_data(path)["lang"] == "en"


@pytest.mark.parametrize(
    ("contents", "message"),
    [
        ("{oops", "not valid JSON"),
        ("[]", "root must be a JSON object"),
        ('{"lang": 3}', "lang must be a string"),
        ('{"lang": "  "}', "non-empty"),
        ('{"i18n": []}', "i18n must be a JSON object"),
        ('{"i18n": {"title": 1}}', "i18n.title must be a string"),
        ('{"payload": "x"}', "payload must be a JSON object"),
    ],
)
def test_invalid_files_raise_descriptive_errors(tmp_path: Path, contents: str, message: str) -> None:
    path = tmp_path / "data.json"
    path.write_text(contents, encoding="utf-8")

    with pytest.raises(TemplateDataError, match=message):
        load_template_data(path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(TemplateDataError, match="not found"):
        load_template_data(tmp_path / "absent.json")


def test_default_data_has_a_close_action() -> None:
    data = default_template_data()

    assert data["lang"] == "en"
    assert {"action": "close_webview", "label_key": "later"} in data["payload"]["actions"]

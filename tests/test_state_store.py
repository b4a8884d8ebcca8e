from functools import reduce

import pytest

from shared.errors import InvalidState
from template.state_store import StateStore


def test_init_then_update_merges_payload() -> None:
    store = StateStore()
    store.init("en", {"title": "Hi"}, {"count": 1})

    state = store.update({"count": 2})

    assert state == {"lang": "en", "i18n": {"title": "Hi"}, "payload": {"count": 2}}


def test_updates_fold_left_as_shallow_merges() -> None:
    initial = {"a": 1, "nested": {"x": 1, "y": 2}}
    patches = [{"b": 2}, {"a": 3}, {"nested": {"x": 9}}, {"b": None, "c": [1]}]
    store = StateStore()
    store.init("en", {}, initial)

    for patch in patches:
        store.update(patch)

    expected = reduce(lambda acc, patch: {**acc, **patch}, patches, dict(initial))
    assert store.snapshot()["payload"] == expected
    # Nested mappings are replaced, not merged.
    assert store.snapshot()["payload"]["nested"] == {"x": 9}


def test_set_i18n_adds_unknown_keys_and_empty_patch_is_identity() -> None:
    store = StateStore()
    store.init("de", {"title": "Hallo"}, {})

    before = store.snapshot()
    assert store.set_i18n({}) == before

    state = store.set_i18n({"cta": "Los"})
    assert state["i18n"] == {"title": "Hallo", "cta": "Los"}


def test_set_lang_ignores_unusable_values() -> None:
    store = StateStore()
    store.init("fr", {}, {})

    assert store.set_lang(None)["lang"] == "fr"
    assert store.set_lang(12)["lang"] == "fr"
    assert store.set_lang("")["lang"] == "fr"
    assert store.set_lang("es")["lang"] == "es"


def test_init_without_lang_uses_fallback_and_records_substitution() -> None:
    store = StateStore(fallback_lang="pt")

    with pytest.raises(InvalidState) as excinfo:
        store.init(None, {"title": "Oi"}, {"count": 1})

    assert store.lang == "pt"
    assert store.initialised is True
    assert excinfo.value.snapshot == {"lang": "pt", "i18n": {"title": "Oi"}, "payload": {"count": 1}}
    assert store.substitutions == [{"field": "lang", "value": None, "fallback": "pt"}]


def test_init_replaces_state_wholesale_and_ignores_non_mappings() -> None:
    store = StateStore()
    store.init("en", {"title": "A"}, {"count": 1})

    state = store.init("en", "nope", ["x"])

    assert state == {"lang": "en", "i18n": {}, "payload": {}}


def test_snapshots_are_detached_copies() -> None:
    store = StateStore()
    patch = {"items": [1, 2]}
    store.init("en", {}, patch)

    patch["items"].append(3)
    snapshot = store.snapshot()
    snapshot["payload"]["items"].append(4)

    assert store.snapshot()["payload"]["items"] == [1, 2]


def test_merges_before_render_collapse_into_one_pass(loop) -> None:
    renders = []
    store = StateStore(schedule_render=loop.post)
    store.subscribe(renders.append)

    store.init("en", {"title": "Hi"}, {"count": 1})
    store.update({"count": 2})
    store.set_i18n({"title": "Hello"})
    loop.run()

    assert store.render_count == 1
    assert renders == [{"lang": "en", "i18n": {"title": "Hello"}, "payload": {"count": 2}}]

    store.update({"count": 3})
    loop.run()
    assert store.render_count == 2
    assert renders[-1]["payload"] == {"count": 3}

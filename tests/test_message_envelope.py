import json

from shared.message_envelope import (
    MALFORMED,
    METHOD_ON_SIZE,
    TYPE_UPDATE,
    HostMessage,
    Response,
    ViewCall,
    encode,
    parse_host_message,
    parse_view_call,
)


def test_parse_view_call_accepts_mapping_and_json_text() -> None:
    from_mapping = parse_view_call({"method": METHOD_ON_SIZE, "payload": {"width": 1}})
    from_text = parse_view_call('{"method": "template:onSize", "payload": {"width": 1}}')

    assert from_mapping == from_text == ViewCall(METHOD_ON_SIZE, {"width": 1})
    assert from_mapping.is_known is True


def test_parse_view_call_keeps_unknown_methods_for_the_transport() -> None:
    call = parse_view_call({"method": "template:onSomething"})

    assert isinstance(call, ViewCall)
    assert call.is_known is False
    assert call.payload == {}


def test_parse_view_call_flags_malformed_values() -> None:
    for raw in (None, 42, "not json", "[1, 2]", {"payload": {}}, {"method": 3}, {"method": "x", "payload": []}):
        assert parse_view_call(raw) is MALFORMED


def test_parse_host_message_splits_type_from_fields() -> None:
    message = parse_host_message({"type": TYPE_UPDATE, "payload": {"count": 2}})

    assert message == HostMessage(TYPE_UPDATE, {"payload": {"count": 2}})
    assert message.to_dict() == {"type": "update", "payload": {"count": 2}}


def test_parse_host_message_rejects_unknown_types() -> None:
    assert parse_host_message({"type": "reload"}) is MALFORMED
    assert parse_host_message({"lang": "en"}) is MALFORMED
    assert not MALFORMED


def test_response_serialization_omits_missing_error() -> None:
    assert json.loads(encode(Response.success())) == {"ok": True}
    assert json.loads(encode(Response.failure("unknown_method"))) == {"ok": False, "error": "unknown_method"}


def test_response_from_value_treats_garbage_as_transport_failure() -> None:
    assert Response.from_value({"ok": True}) == Response(ok=True)
    assert Response.from_value({"ok": "yes"}) == Response(ok=False, error="transport_failure")
    assert Response.from_value(None).error == "transport_failure"

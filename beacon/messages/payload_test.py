"""Tests for converting messages to and from payloads."""

import json
from datetime import datetime
from datetime import timedelta
from datetime import timezone

import pytest
from pydantic import ValidationError

from beacon.messages.alias import AliasMessage
from beacon.messages.group import GroupMessage
from beacon.messages.identify import IdentifyMessage
from beacon.messages.payload import parse_message
from beacon.messages.payload import parse_message_json
from beacon.messages.payload import to_payload
from beacon.messages.payload import to_payload_json
from beacon.messages.primitives import FrozenDict
from beacon.messages.screen import ScreenMessage
from beacon.messages.track import TrackMessage


def test_to_payload_uses_camel_case_keys_and_omits_unset_fields() -> None:
    message = TrackMessage.builder("Clicked").user_id("user-1").properties({"tags": ["a", "b"]}).build()

    payload = to_payload(message)

    assert payload == {
        "type": "TRACK",
        "messageId": message.message_id,
        "timestamp": payload["timestamp"],
        "userId": "user-1",
        "event": "Clicked",
        "properties": {"tags": ["a", "b"]},
    }
    assert datetime.fromisoformat(payload["timestamp"]) == message.timestamp


def test_to_payload_includes_type_specific_keys() -> None:
    assert to_payload(AliasMessage.builder("anon-1").user_id("user-1").build())["previousId"] == "anon-1"
    assert to_payload(GroupMessage.builder("acme").user_id("user-1").build())["groupId"] == "acme"
    assert to_payload(ScreenMessage.builder("Home").user_id("user-1").build())["name"] == "Home"


def test_to_payload_is_deterministic() -> None:
    message = IdentifyMessage.builder().user_id("user-1").traits({"b": 1, "a": 2}).build()
    assert to_payload_json(message) == to_payload_json(message)
    assert json.loads(to_payload_json(message)) == to_payload(message)


@pytest.mark.parametrize(
    "message",
    [
        AliasMessage.builder("anon-1").user_id("user-1").build(),
        GroupMessage.builder("acme").anonymous_id("anon-1").traits({"plan": "pro"}).build(),
        IdentifyMessage.builder().user_id("user-1").traits({"address": {"city": "Paris"}}).build(),
        ScreenMessage.builder("Home").user_id("user-1").context({"os": {"name": "iOS"}}).build(),
        TrackMessage.builder("Clicked").user_id("user-1").integrations({"All": False}).build(),
    ],
    ids=lambda message: str(message.type),
)
def test_parse_message_restores_the_same_message(message: object) -> None:
    parsed = parse_message(to_payload(message))  # type: ignore[arg-type]

    assert type(parsed) is type(message)
    assert parsed == message


def test_parse_message_json_keeps_id_and_timestamp() -> None:
    text = json.dumps(
        {
            "type": "TRACK",
            "messageId": "msg-1",
            "timestamp": "2024-01-01T00:00:00Z",
            "anonymousId": "anon-1",
            "event": "Clicked",
            "properties": {"nested": {"value": 1}},
        }
    )

    message = parse_message_json(text)

    assert isinstance(message, TrackMessage)
    assert message.message_id == "msg-1"
    assert message.timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert isinstance(message.properties, FrozenDict)
    assert isinstance(message.properties["nested"], FrozenDict)


def test_parse_message_rejects_unknown_type() -> None:
    with pytest.raises(ValidationError):
        parse_message({"type": "PAGE", "userId": "user-1", "name": "Home"})


def test_parse_message_rejects_missing_type() -> None:
    with pytest.raises(ValidationError):
        parse_message({"userId": "user-1", "event": "Clicked"})


def test_parse_message_applies_invariants() -> None:
    with pytest.raises(ValidationError, match="Either anonymousId or userId must be provided"):
        parse_message({"type": "ALIAS", "previousId": "anon-1"})
    with pytest.raises(ValidationError, match="event cannot be null or empty"):
        parse_message({"type": "TRACK", "userId": "user-1", "event": ""})


def test_parse_message_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        parse_message({"type": "TRACK", "userId": "user-1", "event": "Clicked", "extra": True})


def test_parse_message_treats_timestamp_without_timezone_as_utc() -> None:
    message = parse_message(
        {"type": "TRACK", "userId": "user-1", "event": "Clicked", "timestamp": "2024-01-01T00:00:00"}
    )

    assert message.timestamp.tzinfo is not None
    assert message.timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_parse_message_converts_timestamp_offsets_to_utc() -> None:
    message = parse_message_json(
        json.dumps({"type": "ALIAS", "userId": "user-1", "previousId": "anon-1", "timestamp": "2024-01-01T02:00:00+02:00"})
    )

    assert message.timestamp.utcoffset() == timedelta(0)
    assert message.timestamp == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_set_properties_survive_a_json_round_trip() -> None:
    message = TrackMessage.builder("Tagged").user_id("user-1").properties({"tags": {"b", "a", "c"}}).build()

    parsed = parse_message_json(to_payload_json(message))

    assert to_payload(message)["properties"] == {"tags": ["a", "b", "c"]}
    assert parsed == message


def test_message_with_bytearray_property_is_hashable() -> None:
    message = TrackMessage.builder("Uploaded").user_id("user-1").properties({"checksum": bytearray(b"\x01\x02")}).build()

    assert message.properties == {"checksum": b"\x01\x02"}
    assert hash(message) == hash(message)

"""Conversion between built messages and their JSON payload shape.

Payloads use camelCase keys and carry a "type" discriminator, for example:

    {"type": "TRACK", "messageId": "...", "timestamp": "2024-01-01T00:00:00Z",
     "userId": "user-1", "event": "Order Completed", "properties": {"total": 10}}
"""

from collections.abc import Mapping
from typing import Annotated
from typing import Any
from typing import Final

from pydantic import Field
from pydantic import TypeAdapter

from beacon.messages.alias import AliasMessage
from beacon.messages.base import Message
from beacon.messages.group import GroupMessage
from beacon.messages.identify import IdentifyMessage
from beacon.messages.screen import ScreenMessage
from beacon.messages.track import TrackMessage

AnyMessage = Annotated[
    AliasMessage | GroupMessage | IdentifyMessage | ScreenMessage | TrackMessage,
    Field(discriminator="type"),
]

_ANY_MESSAGE_ADAPTER: Final[TypeAdapter[AnyMessage]] = TypeAdapter(AnyMessage)


def to_payload(message: Message) -> dict[str, Any]:
    """Return the JSON-compatible payload for a message. Unset optional fields are omitted."""
    return message.model_dump(mode="json", by_alias=True, exclude_none=True)


def to_payload_json(message: Message) -> str:
    return message.model_dump_json(by_alias=True, exclude_none=True)


def parse_message(payload: Mapping[str, Any]) -> AnyMessage:
    """Validate a payload into the message class named by its "type" field.

    Raises pydantic.ValidationError if the type is unknown or any field is invalid.
    The message id and timestamp in the payload are kept.
    """
    return _ANY_MESSAGE_ADAPTER.validate_python(dict(payload))


def parse_message_json(text: str | bytes) -> AnyMessage:
    return _ANY_MESSAGE_ADAPTER.validate_json(text)

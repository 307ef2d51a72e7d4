"""The track call records an action a user performed, along with properties describing it."""

from collections.abc import Mapping
from typing import Any
from typing import Literal

from pydantic import Field

from beacon.messages.base import Message
from beacon.messages.base import MessageBuilder
from beacon.messages.primitives import EventName
from beacon.messages.primitives import FrozenDict
from beacon.messages.primitives import MessageType
from beacon.messages.validation import require_mapping


class TrackMessage(Message):
    """An action a user performed, e.g. 'Order Completed'."""

    type: Literal[MessageType.TRACK] = MessageType.TRACK
    event: EventName = Field(description="Name of the action the user performed")
    properties: FrozenDict | None = Field(default=None, description="Free-form details about the action")

    @classmethod
    def builder(cls, event: str | None) -> "TrackMessageBuilder":
        """Start building a track message.

        Raises MessageArgumentError if event is None or empty.
        """
        return TrackMessageBuilder(event)

    def to_builder(self) -> "TrackMessageBuilder":
        builder = TrackMessageBuilder(self.event)._copy_common_fields(self)
        if self.properties is not None:
            builder.properties(self.properties)
        return builder


class TrackMessageBuilder(MessageBuilder[TrackMessage]):
    def __init__(self, event: str | None) -> None:
        super().__init__()
        self._event = EventName(event)
        self._properties: FrozenDict | None = None

    def properties(self, properties: Mapping[str, Any]) -> "TrackMessageBuilder":
        """Set the details describing the event. These can be anything you want."""
        self._properties = require_mapping(properties, "properties")
        return self

    def _create(self, common_fields: dict[str, Any]) -> TrackMessage:
        return TrackMessage(event=self._event, properties=self._properties, **common_fields)

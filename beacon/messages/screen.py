"""The screen call records that a user viewed a screen in a mobile or desktop app."""

from collections.abc import Mapping
from typing import Any
from typing import Literal

from pydantic import Field

from beacon.messages.base import Message
from beacon.messages.base import MessageBuilder
from beacon.messages.primitives import FrozenDict
from beacon.messages.primitives import MessageType
from beacon.messages.primitives import ScreenName
from beacon.messages.validation import require_mapping


class ScreenMessage(Message):
    type: Literal[MessageType.SCREEN] = MessageType.SCREEN
    name: ScreenName = Field(description="Name of the screen that was viewed")
    properties: FrozenDict | None = Field(default=None, description="Free-form details about the screen")

    @classmethod
    def builder(cls, name: str | None) -> "ScreenMessageBuilder":
        """Start building a screen message.

        Raises MessageArgumentError if name is None or empty.
        """
        return ScreenMessageBuilder(name)

    def to_builder(self) -> "ScreenMessageBuilder":
        builder = ScreenMessageBuilder(self.name)._copy_common_fields(self)
        if self.properties is not None:
            builder.properties(self.properties)
        return builder


class ScreenMessageBuilder(MessageBuilder[ScreenMessage]):
    def __init__(self, name: str | None) -> None:
        super().__init__()
        self._name = ScreenName(name)
        self._properties: FrozenDict | None = None

    def properties(self, properties: Mapping[str, Any]) -> "ScreenMessageBuilder":
        self._properties = require_mapping(properties, "properties")
        return self

    def _create(self, common_fields: dict[str, Any]) -> ScreenMessage:
        return ScreenMessage(name=self._name, properties=self._properties, **common_fields)

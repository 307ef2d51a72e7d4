"""The group call associates a user with a group such as a company or account."""

from collections.abc import Mapping
from typing import Any
from typing import Literal

from pydantic import Field

from beacon.messages.base import Message
from beacon.messages.base import MessageBuilder
from beacon.messages.primitives import FrozenDict
from beacon.messages.primitives import GroupId
from beacon.messages.primitives import MessageType
from beacon.messages.validation import require_mapping


class GroupMessage(Message):
    type: Literal[MessageType.GROUP] = MessageType.GROUP
    group_id: GroupId = Field(description="Identifier of the group the user belongs to")
    traits: FrozenDict | None = Field(default=None, description="Attributes of the group, e.g. name or plan")

    @classmethod
    def builder(cls, group_id: str | None) -> "GroupMessageBuilder":
        """Start building a group message.

        Raises MessageArgumentError if group_id is None or empty.
        """
        return GroupMessageBuilder(group_id)

    def to_builder(self) -> "GroupMessageBuilder":
        builder = GroupMessageBuilder(self.group_id)._copy_common_fields(self)
        if self.traits is not None:
            builder.traits(self.traits)
        return builder


class GroupMessageBuilder(MessageBuilder[GroupMessage]):
    def __init__(self, group_id: str | None) -> None:
        super().__init__()
        self._group_id = GroupId(group_id)
        self._traits: FrozenDict | None = None

    def traits(self, traits: Mapping[str, Any]) -> "GroupMessageBuilder":
        self._traits = require_mapping(traits, "traits")
        return self

    def _create(self, common_fields: dict[str, Any]) -> GroupMessage:
        return GroupMessage(group_id=self._group_id, traits=self._traits, **common_fields)

"""The alias call merges two user identities into one."""

from typing import Any
from typing import Literal

from pydantic import Field

from beacon.messages.base import Message
from beacon.messages.base import MessageBuilder
from beacon.messages.primitives import MessageType
from beacon.messages.primitives import PreviousId


class AliasMessage(Message):
    """Links a previous identity (usually an anonymous id) to the current user.

    Some destinations need this to connect the data recorded for both identities.
    """

    type: Literal[MessageType.ALIAS] = MessageType.ALIAS
    previous_id: PreviousId = Field(description="The identity being merged into the current user")

    @classmethod
    def builder(cls, previous_id: str | None) -> "AliasMessageBuilder":
        """Start building an alias message.

        Raises MessageArgumentError if previous_id is None or empty.
        """
        return AliasMessageBuilder(previous_id)

    def to_builder(self) -> "AliasMessageBuilder":
        return AliasMessageBuilder(self.previous_id)._copy_common_fields(self)


class AliasMessageBuilder(MessageBuilder[AliasMessage]):
    def __init__(self, previous_id: str | None) -> None:
        super().__init__()
        self._previous_id = PreviousId(previous_id)

    def _create(self, common_fields: dict[str, Any]) -> AliasMessage:
        return AliasMessage(previous_id=self._previous_id, **common_fields)

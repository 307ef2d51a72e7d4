"""The identify call ties a user to their actions and records traits about them."""

from collections.abc import Mapping
from typing import Any
from typing import Literal

from pydantic import Field

from beacon.messages.base import Message
from beacon.messages.base import MessageBuilder
from beacon.messages.primitives import FrozenDict
from beacon.messages.primitives import MessageType
from beacon.messages.validation import require_identity
from beacon.messages.validation import require_mapping
from beacon.messages.validation import require_user_or_traits


class IdentifyMessage(Message):
    """Who the user is: a user id, traits about them, or both."""

    type: Literal[MessageType.IDENTIFY] = MessageType.IDENTIFY
    traits: FrozenDict | None = Field(default=None, description="Attributes of the user, e.g. email or name")

    @classmethod
    def builder(cls) -> "IdentifyMessageBuilder":
        return IdentifyMessageBuilder()

    def check_required_fields(self) -> None:
        require_user_or_traits(self.user_id, self.traits)
        require_identity(self.anonymous_id, self.user_id)

    def to_builder(self) -> "IdentifyMessageBuilder":
        builder = IdentifyMessageBuilder()._copy_common_fields(self)
        if self.traits is not None:
            builder.traits(self.traits)
        return builder


class IdentifyMessageBuilder(MessageBuilder[IdentifyMessage]):
    def __init__(self) -> None:
        super().__init__()
        self._traits: FrozenDict | None = None

    def traits(self, traits: Mapping[str, Any]) -> "IdentifyMessageBuilder":
        self._traits = require_mapping(traits, "traits")
        return self

    def check_required_fields(self) -> None:
        require_user_or_traits(self._user_id, self._traits)
        super().check_required_fields()

    def _create(self, common_fields: dict[str, Any]) -> IdentifyMessage:
        return IdentifyMessage(traits=self._traits, **common_fields)

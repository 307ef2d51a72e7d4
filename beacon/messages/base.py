"""Common fields and builder behavior shared by every message type.

Messages are frozen pydantic models. Each concrete message type pairs with a
MessageBuilder subclass that checks single values eagerly and cross-field
requirements in build().
"""

from abc import ABC
from abc import abstractmethod
from collections.abc import Mapping
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import Generic
from typing import Self
from typing import TypeVar

from loguru import logger
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator
from pydantic.alias_generators import to_camel

from beacon.messages.data_types import MessageSettings
from beacon.messages.errors import MessageStateError
from beacon.messages.errors import NullArgumentError
from beacon.messages.primitives import AnonymousId
from beacon.messages.primitives import FrozenDict
from beacon.messages.primitives import IntegrationName
from beacon.messages.primitives import MessageId
from beacon.messages.primitives import MessageType
from beacon.messages.primitives import UserId
from beacon.messages.validation import require_identity
from beacon.messages.validation import require_mapping


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Message(BaseModel):
    """Fields carried by every analytics message.

    Instances are immutable: mappings are stored as FrozenDict and the model
    itself is frozen. Serialized field names are camelCase (see to_payload).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    type: MessageType = Field(description="Discriminator naming the message kind")
    message_id: MessageId = Field(
        default_factory=MessageId,
        description="Unique identifier, generated when the message is built",
    )
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="When the message was built (UTC). A value without a timezone is taken to be UTC",
    )
    context: FrozenDict | None = Field(
        default=None,
        description="Free-form metadata about the environment the event happened in",
    )
    anonymous_id: AnonymousId | None = Field(
        default=None,
        description="Pseudonymous id for a user that has not been identified",
    )
    user_id: UserId | None = Field(default=None, description="Id of a known user")
    integrations: FrozenDict | None = Field(
        default=None,
        description="Per-destination settings, keyed by integration name",
    )

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp_to_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @model_validator(mode="after")
    def _validate_required_fields(self) -> Self:
        if type(self) is Message:
            raise MessageStateError("Message cannot be created directly; build one of its message types")
        self.check_required_fields()
        return self

    def check_required_fields(self) -> None:
        """Raise MessageStateError if a cross-field requirement is not met."""
        require_identity(self.anonymous_id, self.user_id)


MessageT = TypeVar("MessageT", bound=Message)


class MessageBuilder(ABC, Generic[MessageT]):
    """Fluent accumulator for the fields shared by all messages.

    A builder is meant to be used from a single thread and then discarded.
    Every setter returns the builder so calls can be chained.
    """

    def __init__(self) -> None:
        self._context: FrozenDict | None = None
        self._anonymous_id: AnonymousId | None = None
        self._user_id: UserId | None = None
        self._integrations: FrozenDict | None = None
        self._settings: MessageSettings | None = None

    def _copy_common_fields(self, message: Message) -> Self:
        self._context = message.context
        self._anonymous_id = message.anonymous_id
        self._user_id = message.user_id
        self._integrations = message.integrations
        return self

    def context(self, context: Mapping[str, Any]) -> Self:
        """Set the context describing where the event happened (device, locale, library...)."""
        self._context = require_mapping(context, "context")
        return self

    def anonymous_id(self, anonymous_id: str) -> Self:
        self._anonymous_id = AnonymousId(anonymous_id)
        return self

    def user_id(self, user_id: str) -> Self:
        self._user_id = UserId(user_id)
        return self

    def integrations(self, integrations: Mapping[str, Any]) -> Self:
        """Replace all integration settings for this message."""
        self._integrations = require_mapping(integrations, "integrations")
        return self

    def enable_integration(self, name: str, is_enabled: bool) -> Self:
        """Turn a single integration on or off for this message."""
        return self._set_integration(IntegrationName(name), is_enabled)

    def integration_options(self, name: str, options: Mapping[str, Any]) -> Self:
        """Attach destination-specific options to a single integration."""
        return self._set_integration(IntegrationName(name), require_mapping(options, "options"))

    def _set_integration(self, name: IntegrationName, value: Any) -> Self:
        self._integrations = FrozenDict({**(self._integrations or {}), name: value})
        return self

    def settings(self, settings: MessageSettings) -> Self:
        """Apply library context and default integrations when the message is built.

        Values set explicitly on the builder always win over the settings.
        """
        if settings is None:
            raise NullArgumentError("settings")
        self._settings = settings
        return self

    def _common_fields(self) -> dict[str, Any]:
        context = self._context
        integrations = self._integrations
        if self._settings is not None:
            if context is None or "library" not in context:
                context = FrozenDict({**(context or {}), "library": self._settings.library_context()})
            if self._settings.default_integrations:
                integrations = FrozenDict({**self._settings.default_integrations, **(integrations or {})})
        return {
            "context": context,
            "anonymous_id": self._anonymous_id,
            "user_id": self._user_id,
            "integrations": integrations,
        }

    def check_required_fields(self) -> None:
        """Raise MessageStateError if the message could not be built yet."""
        require_identity(self._anonymous_id, self._user_id)

    def build(self) -> MessageT:
        """Validate the accumulated fields and return a new immutable message.

        Every call produces a fresh message id and timestamp.
        """
        self.check_required_fields()
        message = self._create(self._common_fields())
        logger.trace("Built {} message {}", message.type, message.message_id)
        return message

    @abstractmethod
    def _create(self, common_fields: dict[str, Any]) -> MessageT:
        """Instantiate the concrete message from the common and type-specific fields."""

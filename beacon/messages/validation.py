"""Validation helpers shared by the message builders and the message models.

Single-value checks raise immediately (MessageArgumentError / NullArgumentError).
Cross-field checks raise MessageStateError and are run when a message is built.
"""

from collections.abc import Mapping
from typing import Any
from typing import Final

from beacon.messages.errors import MessageKeyError
from beacon.messages.errors import MessageStateError
from beacon.messages.errors import NullArgumentError
from beacon.messages.primitives import FrozenDict

MISSING_IDENTITY_MESSAGE: Final[str] = "Either anonymousId or userId must be provided."
MISSING_USER_OR_TRAITS_MESSAGE: Final[str] = "Either userId or traits must be provided."


def require_mapping(value: Mapping[str, Any] | None, field_label: str) -> FrozenDict:
    """Return a frozen deep copy of value, rejecting None with "Null <field_label>".

    Keys must be strings so the mapping can be serialized; MessageKeyError is
    raised as soon as the value is handed over rather than at build time.
    """
    if value is None:
        raise NullArgumentError(field_label)
    if not isinstance(value, Mapping):
        raise TypeError(f"{field_label} must be a mapping, got {type(value).__name__}")
    for key in value:
        if not isinstance(key, str):
            raise MessageKeyError(f"{field_label} keys must be strings, got {type(key).__name__} {key!r}")
    return FrozenDict(value)


def require_identity(anonymous_id: str | None, user_id: str | None) -> None:
    if anonymous_id is None and user_id is None:
        raise MessageStateError(MISSING_IDENTITY_MESSAGE)


def require_user_or_traits(user_id: str | None, traits: Mapping[str, Any] | None) -> None:
    """An identify call needs a user id, or at least one trait to attach to the anonymous user."""
    if user_id is None and not traits:
        raise MessageStateError(MISSING_USER_OR_TRAITS_MESSAGE)

import copy
from collections.abc import Mapping
from collections.abc import Set
from enum import StrEnum
from enum import auto
from typing import Any
from typing import ClassVar
from typing import NoReturn
from typing import Self
from uuid import uuid4

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema
from pydantic_core import core_schema

from beacon.messages.errors import MessageArgumentError
from beacon.messages.errors import MessageKeyError

# === Enums ===


class _UpperCaseStrEnum(StrEnum):
    @staticmethod
    def _generate_next_value_(
        name: str,
        start: int,
        count: int,
        last_values: list[str],
    ) -> str:
        return name.upper()


class MessageType(_UpperCaseStrEnum):
    """Discriminator for the kinds of analytics message."""

    ALIAS = auto()
    GROUP = auto()
    IDENTIFY = auto()
    SCREEN = auto()
    TRACK = auto()


class LogLevel(_UpperCaseStrEnum):
    """Log verbosity level. Values match loguru level names."""

    TRACE = auto()
    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()
    NONE = auto()


# === Identifiers and required strings ===


class MessageId(str):
    """Unique identifier for a single message.

    Generated from uuid4 when no value is given. Existing values (for example
    from a parsed payload) are kept as-is as long as they are non-empty.
    """

    def __new__(cls, value: str | None = None) -> Self:
        if value is None:
            value = str(uuid4())
        elif not value.strip():
            raise MessageArgumentError("messageId")
        return super().__new__(cls, value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.to_string_ser_schema(),
        )


class RequiredStr(str):
    """A string that must be present and contain something besides whitespace.

    Subclasses set FIELD_LABEL, which is the name used in the error message.
    The value is stored unchanged (no stripping).
    """

    FIELD_LABEL: ClassVar[str] = "value"

    def __new__(cls, value: str | None) -> Self:
        if value is None:
            raise MessageArgumentError(cls.FIELD_LABEL)
        if not isinstance(value, str):
            raise TypeError(f"{cls.FIELD_LABEL} must be a string, got {type(value).__name__}")
        if not value.strip():
            raise MessageArgumentError(cls.FIELD_LABEL)
        return super().__new__(cls, value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.to_string_ser_schema(),
        )


class UserId(RequiredStr):
    """Identifier for a known, authenticated user."""

    FIELD_LABEL = "userId"


class AnonymousId(RequiredStr):
    """Pseudonymous identifier for a user that has not been identified yet."""

    FIELD_LABEL = "anonymousId"


class EventName(RequiredStr):
    """Name of the action a user performed."""

    FIELD_LABEL = "event"


class PreviousId(RequiredStr):
    """The identity being merged into the current user by an alias."""

    FIELD_LABEL = "previousId"


class GroupId(RequiredStr):
    """Identifier of the group (company, organization, account) a user belongs to."""

    FIELD_LABEL = "groupId"


class ScreenName(RequiredStr):
    """Name of the screen a user viewed."""

    FIELD_LABEL = "screen name"


class IntegrationName(RequiredStr):
    """Name of a destination integration, e.g. 'Mixpanel'."""

    FIELD_LABEL = "integration name"


# === Read-only mappings ===


def freeze_value(value: Any) -> Any:
    """Return a deep, read-only copy of value.

    Mappings become FrozenDict, lists and tuples become tuples, and bytearrays
    become bytes. Sets become tuples in a stable order so they serialize the same
    way every time and compare equal after a JSON round trip. Anything else is
    deep-copied.
    """
    if isinstance(value, Mapping):
        return FrozenDict(value)
    if isinstance(value, (list, tuple)):
        return tuple(freeze_value(item) for item in value)
    if isinstance(value, Set):
        return tuple(sorted((freeze_value(item) for item in value), key=repr))
    if isinstance(value, bytearray):
        return bytes(value)
    return copy.deepcopy(value)


class FrozenDict(dict[str, Any]):
    """A read-only dict whose nested values are frozen as well.

    Construction always copies, so later changes to the source mapping are
    never visible through a FrozenDict. Keys must be strings at every level.
    Hashing requires every leaf value to be hashable; the built-in JSON types are.
    """

    def __init__(self, value: Mapping[str, Any] | None = None) -> None:
        source = value if value is not None else {}
        for key in source:
            if not isinstance(key, str):
                raise MessageKeyError(f"Mapping keys must be strings, got {type(key).__name__} {key!r}")
        super().__init__((key, freeze_value(item)) for key, item in source.items())

    def _refuse(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise TypeError(f"{type(self).__name__} is read-only")

    __setitem__ = _refuse
    __delitem__ = _refuse
    __ior__ = _refuse
    clear = _refuse
    pop = _refuse
    popitem = _refuse
    setdefault = _refuse
    update = _refuse

    def __hash__(self) -> int:  # type: ignore[override]
        return hash(frozenset(self.items()))

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (dict(self),))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict.__repr__(self)})"

    def thaw(self) -> dict[str, Any]:
        """Return a plain, mutable deep copy."""
        return {key: _thaw_value(item) for key, item in self.items()}

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.dict_schema(core_schema.str_schema(), core_schema.any_schema()),
        )


def _thaw_value(value: Any) -> Any:
    if isinstance(value, FrozenDict):
        return value.thaw()
    if isinstance(value, tuple):
        return [_thaw_value(item) for item in value]
    return copy.deepcopy(value)

from typing import Any
from typing import Final

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

from beacon.messages.primitives import FrozenDict
from beacon.messages.primitives import LogLevel

LIBRARY_NAME: Final[str] = "beacon-messages"
LIBRARY_VERSION: Final[str] = "0.1.0"


class MessageSettings(BaseModel):
    """Defaults applied to messages built with MessageBuilder.settings()."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    library_name: str = Field(
        default=LIBRARY_NAME,
        min_length=1,
        description="Reported as context.library.name on every message",
    )
    library_version: str = Field(
        default=LIBRARY_VERSION,
        min_length=1,
        description="Reported as context.library.version on every message",
    )
    default_integrations: FrozenDict = Field(
        default_factory=FrozenDict,
        description="Integration settings used when a message does not set its own",
    )
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Log level for console output",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def library_context(self) -> dict[str, Any]:
        return {"name": self.library_name, "version": self.library_version}

class MessageError(Exception):
    """Base exception for all message errors."""

    ...


class MessageArgumentError(MessageError, ValueError):
    """Raised when a required value is missing, empty, or whitespace-only.

    The message always reads "<field> cannot be null or empty."
    """

    def __init__(self, field_label: str) -> None:
        self.field_label = field_label
        super().__init__(f"{field_label} cannot be null or empty.")


class NullArgumentError(MessageError, TypeError, ValueError):
    """Raised when a builder setter receives None instead of a value."""

    def __init__(self, field_label: str) -> None:
        self.field_label = field_label
        super().__init__(f"Null {field_label}")


class MessageStateError(MessageError, ValueError):
    """Raised at build time when a cross-field requirement is not met."""

    ...


class MessageConfigError(MessageError):
    """Raised when message settings cannot be loaded or are invalid."""

    ...


class MessageKeyError(MessageError, TypeError, ValueError):
    """Raised when a mapping handed to a message has a key that is not a string."""

    ...

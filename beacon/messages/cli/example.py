from collections.abc import Callable
from typing import Final

import click

from beacon.messages.alias import AliasMessage
from beacon.messages.base import MessageBuilder
from beacon.messages.config import load_settings
from beacon.messages.data_types import MessageSettings
from beacon.messages.group import GroupMessage
from beacon.messages.identify import IdentifyMessage
from beacon.messages.payload import to_payload_json
from beacon.messages.primitives import MessageType
from beacon.messages.screen import ScreenMessage
from beacon.messages.track import TrackMessage

_EXAMPLE_BUILDER_BY_TYPE: Final[dict[MessageType, Callable[[], MessageBuilder]]] = {
    MessageType.ALIAS: lambda: AliasMessage.builder("anonymous-0001"),
    MessageType.GROUP: lambda: GroupMessage.builder("group-0001").traits({"name": "Example Inc", "plan": "free"}),
    MessageType.IDENTIFY: lambda: IdentifyMessage.builder().traits({"email": "user@example.com"}),
    MessageType.SCREEN: lambda: ScreenMessage.builder("Home").properties({"variant": "default"}),
    MessageType.TRACK: lambda: TrackMessage.builder("Example Event").properties({"value": 1}),
}


def _get_settings(ctx: click.Context) -> MessageSettings:
    if isinstance(ctx.obj, dict) and "settings" in ctx.obj:
        return ctx.obj["settings"]
    return load_settings()


@click.command(name="example")
@click.argument(
    "message_type",
    type=click.Choice([message_type.value for message_type in MessageType], case_sensitive=False),
)
@click.option("--user-id", required=True, help="User id to put on the example message")
@click.pass_context
def example(ctx: click.Context, message_type: str, user_id: str) -> None:
    """Print the JSON payload of a sample message of MESSAGE_TYPE.

    The loaded settings (library context, default integrations) are applied.

    Examples:

      beacon-messages example track --user-id user-1
    """
    builder = _EXAMPLE_BUILDER_BY_TYPE[MessageType(message_type.upper())]()
    message = builder.user_id(user_id).settings(_get_settings(ctx)).build()
    click.echo(to_payload_json(message))

from typing import TextIO

import click
from loguru import logger
from pydantic import ValidationError

from beacon.messages.payload import parse_message_json


def describe_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic error into one line: "<field>: <reason>; ..."."""
    parts = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "payload"
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)


@click.command(name="validate")
@click.argument("source", type=click.File("r"), default="-")
@click.pass_context
def validate(ctx: click.Context, source: TextIO) -> None:
    """Check that every line of SOURCE is a valid message payload.

    SOURCE is a file of JSON lines (default: stdin). Blank lines are skipped.
    Exits with status 1 if any line is invalid.

    Examples:

      beacon-messages validate events.jsonl

      cat events.jsonl | beacon-messages validate
    """
    valid_count = 0
    invalid_count = 0
    for line_number, line in enumerate(source, start=1):
        if not line.strip():
            continue
        try:
            message = parse_message_json(line)
        except ValidationError as e:
            invalid_count += 1
            click.echo(f"line {line_number}: {describe_validation_error(e)}")
            continue
        valid_count += 1
        click.echo(f"OK {message.type} {message.message_id}")

    logger.debug("Checked {} payloads: {} valid, {} invalid", valid_count + invalid_count, valid_count, invalid_count)
    if invalid_count:
        ctx.exit(1)

from pathlib import Path

import click

from beacon.messages.cli.example import example
from beacon.messages.cli.validate import validate
from beacon.messages.config import load_settings
from beacon.messages.errors import MessageConfigError
from beacon.messages.utils.logging import console_level_from_verbose_and_quiet
from beacon.messages.utils.logging import setup_logging


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity; -v for DEBUG, -vv for TRACE")
@click.option("-q", "--quiet", is_flag=True, default=False, help="Suppress all console logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Settings file to use instead of ~/.beacon/messages.toml",
)
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: bool, config_path: Path | None) -> None:
    """beacon-messages: build and check analytics message payloads."""
    try:
        settings = load_settings(config_path)
    except MessageConfigError as e:
        raise click.ClickException(str(e)) from e
    setup_logging(console_level_from_verbose_and_quiet(verbose, quiet, default=settings.log_level))
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


cli.add_command(example)
cli.add_command(validate)
